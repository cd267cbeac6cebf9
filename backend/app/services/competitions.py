"""
Shared lookups and permission checks used by the competition routers.
"""

import logging
from typing import Optional

from fastapi import HTTPException
from supabase import Client

logger = logging.getLogger(__name__)


def first_row(response) -> Optional[dict]:
    """Return the first row of a query response, or None if it came back empty."""
    rows = response.data or []
    return rows[0] if rows else None


def get_competition(db: Client, competition_id: str) -> Optional[dict]:
    response = (
        db.table("competitions").select("*").eq("id", competition_id).limit(1).execute()
    )
    return first_row(response)


def get_competition_or_404(db: Client, competition_id: str) -> dict:
    competition = get_competition(db, competition_id)
    if not competition:
        raise HTTPException(status_code=404, detail="Competition not found")
    return competition


def is_competition_admin(db: Client, competition_id: str, user_id: Optional[str]) -> bool:
    """Ask the database whether a user is the creator or an invited admin."""
    if not user_id:
        return False

    response = db.rpc(
        "is_competition_admin",
        {"p_competition_id": competition_id, "p_user_id": user_id},
    ).execute()

    return response.data is True


def require_competition_admin(db: Client, competition_id: str, user_id: str) -> None:
    if not is_competition_admin(db, competition_id, user_id):
        logger.info(f"User {user_id} denied admin action on competition {competition_id}")
        raise HTTPException(
            status_code=403,
            detail="Only competition admins can perform this action",
        )


def require_active(competition: dict, action: str) -> None:
    if not competition.get("is_active"):
        raise HTTPException(
            status_code=400,
            detail=f"This competition is not active. Cannot {action}.",
        )


def get_competitor_for_user(
    db: Client, competition_id: str, user_id: str
) -> Optional[dict]:
    """The competitor row a user registered with in a competition, if any."""
    response = (
        db.table("competitors")
        .select("*")
        .eq("competition_id", competition_id)
        .eq("user_id", user_id)
        .limit(1)
        .execute()
    )
    return first_row(response)
