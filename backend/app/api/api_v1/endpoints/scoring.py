"""
Scoring API endpoint to serve scoring configuration to the frontend.
"""

from app.services.scoring import (
    AGE_GROUP_LABELS,
    BOULDER_BASE_POINTS,
    COUNTED_TOPS,
    FINALS_ATTEMPT_PENALTY,
    FINALS_TOP_POINTS,
    FINALS_ZONE_POINTS,
    FIRST_TOP_BONUS,
)
from fastapi import APIRouter

router = APIRouter()


@router.get("")
def get_scoring_config():
    """Get the current scoring configuration."""
    # Convert to list of {color, base_points} for easier frontend consumption
    colors = [
        {"color": color, "base_points": points}
        for color, points in BOULDER_BASE_POINTS.items()
    ]

    return {
        "colors": colors,
        "first_top_bonus": FIRST_TOP_BONUS,
        "counted_tops": COUNTED_TOPS,
        "age_groups": AGE_GROUP_LABELS,
        "finals": {
            "top_points": FINALS_TOP_POINTS,
            "zone_points": FINALS_ZONE_POINTS,
            "attempt_penalty": FINALS_ATTEMPT_PENALTY,
        },
        "description": "Base points + 500 / tops in your category and age group, best 7 tops count",
    }
