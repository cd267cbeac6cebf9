import logging
import uuid
from typing import List

from app.core.auth import get_current_user_id
from app.db.supabase import get_supabase
from app.schemas.admin import AdminEntry, AdminInvite
from app.services.competitions import (
    first_row,
    get_competition_or_404,
    require_competition_admin,
)
from fastapi import APIRouter, Depends, HTTPException
from supabase import Client

logger = logging.getLogger(__name__)
router = APIRouter()


def load_admins(db: Client, competition_id: str) -> List[dict]:
    """All admins of a competition, the creator included."""
    response = db.rpc(
        "get_competition_admins", {"p_competition_id": competition_id}
    ).execute()
    return response.data or []


@router.get("/{competition_id}/admins", response_model=List[AdminEntry])
def get_admins(competition_id: uuid.UUID, db: Client = Depends(get_supabase)):
    """List the admins of a competition."""
    get_competition_or_404(db, str(competition_id))
    return load_admins(db, str(competition_id))


@router.post("/{competition_id}/admins", response_model=List[AdminEntry])
def invite_admin(
    competition_id: uuid.UUID,
    invite: AdminInvite,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_supabase),
):
    """
    Make an existing user an admin of the competition. Admin only.

    Only people who already have an account can be invited.
    """
    get_competition_or_404(db, str(competition_id))
    require_competition_admin(db, str(competition_id), user_id)

    email = invite.email.strip().lower()
    profile = first_row(
        db.table("profiles").select("id, email").eq("email", email).limit(1).execute()
    )
    if not profile:
        raise HTTPException(
            status_code=404,
            detail="User not found. They must have an account first.",
        )

    admins = load_admins(db, str(competition_id))
    if any(str(a.get("user_id")) == profile["id"] for a in admins):
        raise HTTPException(status_code=400, detail="This user is already an admin.")

    db.table("competition_admins").insert(
        {
            "competition_id": str(competition_id),
            "user_id": profile["id"],
            "invited_by": user_id,
        }
    ).execute()

    logger.info(f"{profile['email']} invited as admin of competition {competition_id}")
    return load_admins(db, str(competition_id))


@router.delete("/{competition_id}/admins/{admin_id}")
def remove_admin(
    competition_id: uuid.UUID,
    admin_id: uuid.UUID,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_supabase),
):
    """
    Remove an invited admin. The competition creator can never be removed.

    The creator's entry has no admin row of its own, so passing the creator's
    user id as `admin_id` is rejected the same way.
    """
    competition = get_competition_or_404(db, str(competition_id))

    if str(admin_id) == str(competition.get("created_by")):
        raise HTTPException(
            status_code=400, detail="Cannot remove the competition creator."
        )

    admin = first_row(
        db.table("competition_admins")
        .select("id, user_id")
        .eq("id", str(admin_id))
        .eq("competition_id", str(competition_id))
        .limit(1)
        .execute()
    )
    if not admin:
        raise HTTPException(status_code=404, detail="Admin not found")

    if admin["user_id"] == competition.get("created_by"):
        raise HTTPException(
            status_code=400, detail="Cannot remove the competition creator."
        )

    require_competition_admin(db, str(competition_id), user_id)

    db.table("competition_admins").delete().eq("id", str(admin_id)).execute()

    logger.info(f"Admin {admin['user_id']} removed from competition {competition_id}")
    return {"message": "Admin removed"}
