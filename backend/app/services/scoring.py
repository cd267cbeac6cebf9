# Boulder Comp Scoring System
# Qualification: points per boulder shrink as more climbers in the same
# category/age group top it; only a competitor's best 7 tops count.
# Finals: fixed top/zone values with a small penalty per attempt.

from typing import Iterable, Mapping, Optional

BOULDER_BASE_POINTS = {
    "green": 1000,
    "yellow": 1500,
    "orange": 2000,
    "red": 2500,
    "black": 3000,
}

# Display/sort order of the colour tiers, easiest first
COLOR_ORDER = list(BOULDER_BASE_POINTS)

FIRST_TOP_BONUS = 500  # Shared between everyone who tops the boulder
COUNTED_TOPS = 7

FINALS_TOP_POINTS = 25.0
FINALS_ZONE_POINTS = 10.0
FINALS_ATTEMPT_PENALTY = 0.1

AGE_GROUP_LABELS = {
    "u11": "U11 (Youth Round)",
    "u13": "U13 (Youth Round)",
    "u15": "U15 (Youth Round)",
    "u17": "U17",
    "u19": "U19 and Open",
    "open": "Open",
    "masters": "Masters and Open",
    "veterans": "Veterans and Open",
}


def get_base_points(color: str) -> int:
    """Get the base points for a boulder colour (0 for unknown colours)."""
    return BOULDER_BASE_POINTS.get(color, 0)


def calculate_boulder_points(base_points: float, tops_count: int) -> float:
    """Points a boulder is worth once `tops_count` climbers have topped it."""
    if tops_count == 0:
        return 0
    return base_points + (FIRST_TOP_BONUS / tops_count)


def calculate_competitor_score(
    topped_boulder_ids: Iterable[str],
    points_by_boulder: Mapping[str, float],
) -> float:
    """
    Sum a competitor's best tops.

    `points_by_boulder` must already be resolved to the competitor's own
    category and age group. Boulders missing from it are worth 0.
    """
    points = sorted(
        (points_by_boulder.get(boulder_id, 0) for boulder_id in topped_boulder_ids),
        reverse=True,
    )
    return sum(points[:COUNTED_TOPS])


def calculate_finals_score(topped: bool, zone: bool, attempts: int) -> float:
    """Score a single finals boulder, never below zero."""
    penalty = attempts * FINALS_ATTEMPT_PENALTY

    if topped:
        score = FINALS_TOP_POINTS - penalty
    elif zone:
        score = FINALS_ZONE_POINTS - penalty
    else:
        score = 0.0 - penalty

    return max(score, 0.0)


def calculate_finals_total(scores: Iterable[Mapping]) -> float:
    """Total finals score across every boulder a finalist attempted."""
    return sum(
        calculate_finals_score(
            bool(s.get("topped")), bool(s.get("zone")), s.get("attempts") or 0
        )
        for s in scores
    )


def next_competitor_number(existing_numbers: Iterable[Optional[str]]) -> str:
    """
    Next competitor number for a competition: highest existing + 1, padded to 3.

    Gaps are never refilled. Numbers that don't parse count as 0.
    """
    highest = 0
    for number in existing_numbers:
        try:
            value = int(number)
        except (TypeError, ValueError):
            value = 0
        highest = max(highest, value)

    return str(highest + 1).zfill(3)


def color_sort_key(color: str) -> int:
    """Sort key placing colours from easiest to hardest, unknown colours last."""
    if color in BOULDER_BASE_POINTS:
        return COLOR_ORDER.index(color)
    return len(COLOR_ORDER)
