import logging
import uuid
from typing import List, Optional

from app.core.auth import get_current_user_id, get_optional_user_id
from app.db.supabase import get_supabase
from app.schemas.competition import (
    BoulderResponse,
    CompetitionCreate,
    CompetitionResponse,
    CompetitionSummary,
)
from app.schemas.competitor import CompetitionDetail
from app.services.competitions import (
    get_competition_or_404,
    is_competition_admin,
    require_competition_admin,
)
from app.services.scoring import color_sort_key, get_base_points
from fastapi import APIRouter, Depends, HTTPException
from postgrest.exceptions import APIError
from supabase import Client

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=CompetitionResponse)
def create_competition(
    competition_in: CompetitionCreate,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_supabase),
):
    """Create a competition and its boulders. New competitions start inactive."""
    if not competition_in.name.strip() or not competition_in.boulders:
        raise HTTPException(
            status_code=400,
            detail="Please fill in all required fields and add at least one boulder",
        )

    if any(not b.identifier.strip() for b in competition_in.boulders):
        raise HTTPException(
            status_code=400, detail="Please fill in all boulder identifiers"
        )

    if competition_in.end_date < competition_in.start_date:
        raise HTTPException(
            status_code=400, detail="End date must not be before the start date"
        )

    competition_data = {
        "name": competition_in.name.strip(),
        "description": competition_in.description or None,
        "start_date": competition_in.start_date.isoformat(),
        "end_date": competition_in.end_date.isoformat(),
        "is_active": False,
        "created_by": user_id,
    }

    response = db.table("competitions").insert(competition_data).execute()

    if not response.data:
        raise HTTPException(status_code=500, detail="Failed to create competition")

    competition = response.data[0]

    boulder_records = [
        {
            "competition_id": competition["id"],
            "identifier": b.identifier.strip(),
            "color": b.color,
            "base_points": (
                b.base_points if b.base_points is not None else get_base_points(b.color)
            ),
        }
        for b in competition_in.boulders
    ]

    # The competition row stays if this fails; there is no rollback
    try:
        db.table("boulders").insert(boulder_records).execute()
    except APIError as e:
        logger.error(
            f"Competition {competition['id']} created but its boulders failed: {e.message}"
        )
        raise

    logger.info(
        f"User {user_id} created competition {competition['id']} "
        f"with {len(boulder_records)} boulders"
    )
    return competition


@router.get("/", response_model=List[CompetitionSummary])
def get_competitions(db: Client = Depends(get_supabase)):
    """Get all competitions, newest first, with their competitor counts."""
    competitions = (
        db.table("competitions").select("*").order("start_date", desc=True).execute()
    ).data or []

    if not competitions:
        return []

    counts_response = (
        db.table("competitors")
        .select("competition_id")
        .in_("competition_id", [c["id"] for c in competitions])
        .execute()
    )

    competitor_counts = {}
    for item in counts_response.data or []:
        cid = item["competition_id"]
        competitor_counts[cid] = competitor_counts.get(cid, 0) + 1

    for competition in competitions:
        competition["competitor_count"] = competitor_counts.get(competition["id"], 0)

    return competitions


@router.get("/{competition_id}", response_model=CompetitionDetail)
def get_competition_detail(
    competition_id: uuid.UUID,
    user_id: Optional[str] = Depends(get_optional_user_id),
    db: Client = Depends(get_supabase),
):
    """Get a competition with its boulders and competitors."""
    competition = get_competition_or_404(db, str(competition_id))

    boulders = (
        db.table("boulders")
        .select("*")
        .eq("competition_id", str(competition_id))
        .execute()
    ).data or []
    boulders.sort(key=lambda b: (color_sort_key(b["color"]), b["identifier"]))

    competitors = (
        db.table("competitors")
        .select("id, competition_id, name, competitor_number, category, age_group, user_id")
        .eq("competition_id", str(competition_id))
        .order("competitor_number")
        .execute()
    ).data or []

    is_registered = bool(user_id) and any(
        c.get("user_id") == user_id for c in competitors
    )

    return CompetitionDetail(
        competition=competition,
        boulders=boulders,
        competitors=competitors,
        is_admin=is_competition_admin(db, str(competition_id), user_id),
        is_registered=is_registered,
    )


@router.get("/{competition_id}/boulders", response_model=List[BoulderResponse])
def get_boulders(competition_id: uuid.UUID, db: Client = Depends(get_supabase)):
    """Get a competition's qualification boulders, easiest colour first."""
    get_competition_or_404(db, str(competition_id))

    boulders = (
        db.table("boulders")
        .select("*")
        .eq("competition_id", str(competition_id))
        .execute()
    ).data or []
    boulders.sort(key=lambda b: (color_sort_key(b["color"]), b["identifier"]))

    return boulders


@router.patch("/{competition_id}/status", response_model=CompetitionResponse)
def toggle_competition_status(
    competition_id: uuid.UUID,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_supabase),
):
    """Activate or deactivate a competition. Admin only."""
    competition = get_competition_or_404(db, str(competition_id))
    require_competition_admin(db, str(competition_id), user_id)

    is_active = not competition.get("is_active")
    db.table("competitions").update({"is_active": is_active}).eq(
        "id", str(competition_id)
    ).execute()

    logger.info(
        f"Competition {competition_id} {'activated' if is_active else 'deactivated'} "
        f"by {user_id}"
    )
    return {**competition, "is_active": is_active}
