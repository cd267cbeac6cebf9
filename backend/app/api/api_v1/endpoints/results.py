import uuid
from typing import Literal, Optional

from app.db.supabase import get_supabase
from app.schemas.results import ResultsResponse
from app.services.competitions import get_competition_or_404
from app.services.leaderboard import get_competition_results
from fastapi import APIRouter, Depends
from supabase import Client

router = APIRouter()

CategoryFilter = Literal["all", "male", "female", "other"]
AgeGroupFilter = Literal[
    "all", "u11", "u13", "u15", "u17", "u19", "open", "masters", "veterans"
]


@router.get("/{competition_id}/results", response_model=ResultsResponse)
def get_results(
    competition_id: uuid.UUID,
    category: Optional[CategoryFilter] = None,
    age_group: Optional[AgeGroupFilter] = None,
    db: Client = Depends(get_supabase),
):
    """Get the qualification leaderboard, optionally for one category/age group."""
    get_competition_or_404(db, str(competition_id))

    return get_competition_results(
        db,
        str(competition_id),
        category=None if category == "all" else category,
        age_group=None if age_group == "all" else age_group,
    )
