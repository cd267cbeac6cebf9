import logging

from app.core.auth import get_access_token, get_current_user_id
from app.db.supabase import get_supabase
from app.schemas.admin import CurrentUser
from app.services.competitions import first_row
from fastapi import APIRouter, Depends
from supabase import Client

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/me", response_model=CurrentUser)
def get_me(
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_supabase),
):
    """Get the logged in user and their profile."""
    profile = first_row(
        db.table("profiles")
        .select("id, email, full_name")
        .eq("id", user_id)
        .limit(1)
        .execute()
    )
    return CurrentUser(user_id=user_id, profile=profile)


@router.post("/signout")
def sign_out(
    user_id: str = Depends(get_current_user_id),
    token: str = Depends(get_access_token),
    db: Client = Depends(get_supabase),
):
    """Revoke the caller's session."""
    db.auth.admin.sign_out(token)
    logger.info(f"User {user_id} signed out")
    return {"message": "Signed out"}
