"""
Finals stage helpers.

Qualification, seeding of the qualifiers table and the finals leaderboard are
database procedures; this module only builds the scoring sheet and applies
score edits.
"""

import logging
from typing import List, Optional

from app.schemas.finals import FinalistRow, FinalsScoreResponse
from app.services.scoring import calculate_finals_score, calculate_finals_total
from fastapi import HTTPException

logger = logging.getLogger(__name__)

FINALS_CATEGORY_PREFIXES = {
    "male": "FM",
    "female": "FF",
}


def finals_boulder_rows(competition_id: str, per_category: int) -> List[dict]:
    """Rows for the default finals boulders: FM1..FMn and FF1..FFn."""
    rows = []
    for category, prefix in FINALS_CATEGORY_PREFIXES.items():
        for i in range(1, per_category + 1):
            rows.append(
                {
                    "competition_id": competition_id,
                    "identifier": f"{prefix}{i}",
                    "category": category,
                }
            )
    return rows


def apply_finals_update(existing: Optional[dict], changes: dict) -> dict:
    """
    Work out the columns to write for a finals score edit.

    `changes` holds only the fields the judge touched. For a new row the
    untouched fields get their defaults. Topping a boulder always clears the
    zone, and a zone can't be recorded on a topped boulder.
    """
    if existing is None:
        values = {
            "topped": changes.get("topped", False),
            "zone": changes.get("zone", False),
            "attempts": changes.get("attempts", 0),
            "time_seconds": changes.get("time_seconds"),
        }
    else:
        values = dict(changes)

    topped_after = values.get("topped", (existing or {}).get("topped", False))

    if values.get("topped") is True:
        values["zone"] = False
    elif values.get("zone") is True and topped_after:
        raise HTTPException(
            status_code=400,
            detail="Zone only counts when the boulder was not topped",
        )

    return values


def to_score_response(score: dict) -> FinalsScoreResponse:
    return FinalsScoreResponse(
        **score,
        points=calculate_finals_score(
            bool(score.get("topped")), bool(score.get("zone")), score.get("attempts") or 0
        ),
    )


def build_finalist_rows(
    qualifiers: List[dict],
    competitors: List[dict],
    scores: List[dict],
) -> List[FinalistRow]:
    """Join qualifiers to their competitor rows and finals scores."""
    competitors_by_id = {c["id"]: c for c in competitors}

    scores_by_competitor: dict[str, list] = {}
    for score in scores:
        scores_by_competitor.setdefault(score["competitor_id"], []).append(score)

    rows = []
    for qualifier in sorted(qualifiers, key=lambda q: q["qualification_rank"]):
        competitor = competitors_by_id.get(qualifier["competitor_id"])
        if competitor is None:
            logger.warning(
                f"Finals qualifier {qualifier['competitor_id']} has no competitor row"
            )
            continue

        own_scores = scores_by_competitor.get(competitor["id"], [])
        rows.append(
            FinalistRow(
                qualification_rank=qualifier["qualification_rank"],
                qualification_score=qualifier.get("qualification_score"),
                competitor=competitor,
                scores={
                    str(s["finals_boulder_id"]): to_score_response(s) for s in own_scores
                },
                total_score=calculate_finals_total(own_scores),
            )
        )

    return rows
