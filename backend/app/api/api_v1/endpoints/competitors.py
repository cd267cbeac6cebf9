import logging
import uuid
from typing import List

from app.core.auth import get_current_user_id
from app.db.supabase import get_supabase
from app.schemas.competitor import CompetitorCreate, CompetitorResponse
from app.services.competitions import (
    first_row,
    get_competition_or_404,
    get_competitor_for_user,
    require_active,
    require_competition_admin,
)
from app.services.scoring import next_competitor_number
from fastapi import APIRouter, Depends, HTTPException
from supabase import Client

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/{competition_id}/competitors", response_model=List[CompetitorResponse])
def get_competitors(competition_id: uuid.UUID, db: Client = Depends(get_supabase)):
    """Get all competitors in a competition, ordered by competitor number."""
    get_competition_or_404(db, str(competition_id))

    response = (
        db.table("competitors")
        .select("*")
        .eq("competition_id", str(competition_id))
        .order("competitor_number")
        .execute()
    )
    return response.data or []


@router.post("/{competition_id}/competitors", response_model=CompetitorResponse)
def add_competitor(
    competition_id: uuid.UUID,
    competitor_in: CompetitorCreate,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_supabase),
):
    """
    Register a competitor.

    Climbers register themselves. Admins can also register someone else by
    passing their user_id, or a climber without an account with
    `"user_id": null`.
    """
    name = competitor_in.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Please enter a name")

    competition = get_competition_or_404(db, str(competition_id))
    require_active(competition, "add competitors")

    if "user_id" in competitor_in.model_fields_set:
        owner_id = str(competitor_in.user_id) if competitor_in.user_id else None
    else:
        owner_id = user_id

    if owner_id != user_id:
        require_competition_admin(db, str(competition_id), user_id)

    if owner_id and get_competitor_for_user(db, str(competition_id), owner_id):
        raise HTTPException(
            status_code=400,
            detail="This user is already registered for this competition",
        )

    existing = (
        db.table("competitors")
        .select("competitor_number")
        .eq("competition_id", str(competition_id))
        .execute()
    ).data or []

    competitor_data = {
        "competition_id": str(competition_id),
        "user_id": owner_id,
        "name": name,
        "category": competitor_in.category,
        "age_group": competitor_in.age_group,
        "competitor_number": next_competitor_number(
            c["competitor_number"] for c in existing
        ),
    }

    response = db.table("competitors").insert(competitor_data).execute()

    competitor = first_row(response)
    if not competitor:
        raise HTTPException(status_code=500, detail="Failed to add competitor")

    logger.info(
        f"Registered competitor #{competitor['competitor_number']} in competition "
        f"{competition_id}"
    )
    return competitor


@router.delete("/{competition_id}/competitors/{competitor_id}")
def remove_competitor(
    competition_id: uuid.UUID,
    competitor_id: uuid.UUID,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_supabase),
):
    """Remove a competitor from a competition. Admin only."""
    get_competition_or_404(db, str(competition_id))
    require_competition_admin(db, str(competition_id), user_id)

    competitor = first_row(
        db.table("competitors")
        .select("id, name")
        .eq("id", str(competitor_id))
        .eq("competition_id", str(competition_id))
        .limit(1)
        .execute()
    )
    if not competitor:
        raise HTTPException(status_code=404, detail="Competitor not found")

    db.table("competitors").delete().eq("id", str(competitor_id)).execute()

    logger.info(f"Removed competitor {competitor_id} from competition {competition_id}")
    return {"message": f"Competitor '{competitor['name']}' removed"}
