import logging
from typing import List, Optional

from app.schemas.competition import BoulderStatsResponse
from app.schemas.results import LeaderboardEntry, ResultsResponse, ScoreBreakdown
from app.services.scoring import (
    calculate_boulder_points,
    calculate_competitor_score,
    color_sort_key,
)
from supabase import Client

logger = logging.getLogger(__name__)


def stats_key(boulder_id: str, category: str, age_group: str) -> tuple:
    return (boulder_id, category, age_group)


def build_points_lookup(boulder_stats: List[dict]) -> dict[tuple, float]:
    """Map (boulder_id, category, age_group) -> calculated points."""
    return {
        stats_key(s["boulder_id"], s["category"], s["age_group"]): s[
            "calculated_points"
        ]
        for s in boulder_stats
    }


def build_leaderboard(
    competitors: List[dict],
    boulders: List[dict],
    scores: List[dict],
    boulder_stats: List[dict],
    category: Optional[str] = None,
    age_group: Optional[str] = None,
) -> List[LeaderboardEntry]:
    """
    Rank competitors by their best tops.

    Each topped boulder is worth the points stored for the competitor's own
    category and age group; a boulder without a stats row is worth nothing.
    """
    boulders_by_id = {b["id"]: b for b in boulders}
    points_lookup = build_points_lookup(boulder_stats)

    scores_by_competitor: dict[str, list] = {}
    for score in scores:
        scores_by_competitor.setdefault(score["competitor_id"], []).append(score)

    leaderboard = []
    for comp in competitors:
        if category and comp["category"] != category:
            continue
        if age_group and comp["age_group"] != age_group:
            continue

        # Points for this competitor's scoring pool only
        own_points = {
            boulder_id: points
            for (boulder_id, cat, age), points in points_lookup.items()
            if cat == comp["category"] and age == comp["age_group"]
        }

        breakdown = []
        topped_ids = []
        for score in scores_by_competitor.get(comp["id"], []):
            boulder = boulders_by_id.get(score["boulder_id"]) or {}
            topped = bool(score.get("topped"))
            if topped:
                topped_ids.append(score["boulder_id"])
            breakdown.append(
                ScoreBreakdown(
                    boulder_id=score["boulder_id"],
                    identifier=boulder.get("identifier", ""),
                    color=boulder.get("color"),
                    topped=topped,
                    top_time=score.get("top_time"),
                    points=own_points.get(score["boulder_id"], 0) if topped else 0,
                )
            )

        breakdown.sort(key=lambda s: s.points, reverse=True)

        leaderboard.append(
            LeaderboardEntry(
                rank=0,  # Will be set after sorting
                competitor_id=comp["id"],
                name=comp["name"],
                competitor_number=comp["competitor_number"],
                category=comp["category"],
                age_group=comp["age_group"],
                total_score=calculate_competitor_score(topped_ids, own_points),
                boulders_topped=len(topped_ids),
                scores=breakdown,
            )
        )

    # Sort by total score descending, competitor number breaks ties
    leaderboard.sort(key=lambda x: x.competitor_number)
    leaderboard.sort(key=lambda x: x.total_score, reverse=True)

    for i, entry in enumerate(leaderboard):
        entry.rank = i + 1

    return leaderboard


def build_boulder_stats(
    boulders: List[dict], boulder_stats: List[dict]
) -> List[BoulderStatsResponse]:
    boulders_by_id = {b["id"]: b for b in boulders}

    result = []
    for stat in boulder_stats:
        boulder = boulders_by_id.get(stat["boulder_id"])
        if not boulder:
            continue
        base_points = boulder.get("base_points") or 0
        result.append(
            BoulderStatsResponse(
                boulder_id=stat["boulder_id"],
                identifier=boulder.get("identifier", ""),
                color=boulder.get("color"),
                base_points=base_points,
                category=stat["category"],
                age_group=stat["age_group"],
                tops_count=stat["tops_count"],
                calculated_points=stat["calculated_points"],
                points_if_topped_next=calculate_boulder_points(
                    base_points, stat["tops_count"] + 1
                ),
            )
        )

    result.sort(
        key=lambda s: (color_sort_key(s.color), s.identifier, s.category, s.age_group)
    )
    return result


def get_competition_results(
    db: Client,
    competition_id: str,
    category: Optional[str] = None,
    age_group: Optional[str] = None,
) -> ResultsResponse:
    """Load everything needed for the qualification leaderboard and rank it."""
    competitors = (
        db.table("competitors")
        .select("id, name, competitor_number, category, age_group")
        .eq("competition_id", competition_id)
        .execute()
    ).data or []

    boulders = (
        db.table("boulders")
        .select("id, identifier, color, base_points")
        .eq("competition_id", competition_id)
        .execute()
    ).data or []

    scores = []
    if competitors:
        scores = (
            db.table("scores")
            .select("competitor_id, boulder_id, topped, top_time")
            .in_("competitor_id", [c["id"] for c in competitors])
            .execute()
        ).data or []

    boulder_stats = []
    if boulders:
        boulder_stats = (
            db.table("boulder_stats")
            .select("boulder_id, category, age_group, tops_count, calculated_points")
            .in_("boulder_id", [b["id"] for b in boulders])
            .execute()
        ).data or []

    logger.debug(
        f"Ranking {len(competitors)} competitors on {len(boulders)} boulders "
        f"for competition {competition_id}"
    )

    return ResultsResponse(
        leaderboard=build_leaderboard(
            competitors, boulders, scores, boulder_stats, category, age_group
        ),
        boulder_stats=build_boulder_stats(boulders, boulder_stats),
    )
