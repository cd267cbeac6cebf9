import logging
import uuid
from datetime import datetime, timezone

from app.core.auth import get_current_user_id
from app.db.supabase import get_supabase
from app.schemas.score import MyScores, ScoreSubmission
from app.services.competitions import (
    get_competition_or_404,
    get_competitor_for_user,
    require_active,
)
from fastapi import APIRouter, Depends, HTTPException
from supabase import Client

logger = logging.getLogger(__name__)
router = APIRouter()


def get_own_competitor_or_404(db: Client, competition_id: str, user_id: str) -> dict:
    competitor = get_competitor_for_user(db, competition_id, user_id)
    if not competitor:
        raise HTTPException(
            status_code=404,
            detail="You are not registered as a competitor in this competition",
        )
    return competitor


@router.get("/{competition_id}/scores/me", response_model=MyScores)
def get_my_scores(
    competition_id: uuid.UUID,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_supabase),
):
    """Get the logged in climber's competitor entry and submitted scores."""
    get_competition_or_404(db, str(competition_id))
    competitor = get_own_competitor_or_404(db, str(competition_id), user_id)

    scores = (
        db.table("scores")
        .select("competitor_id, boulder_id, topped, top_time, submitted_at")
        .eq("competitor_id", competitor["id"])
        .execute()
    ).data or []

    return MyScores(competitor=competitor, scores=scores)


@router.post("/{competition_id}/scores", response_model=MyScores)
def submit_scores(
    competition_id: uuid.UUID,
    submission: ScoreSubmission,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_supabase),
):
    """
    Submit scores for the logged in climber.

    Scores are always recorded against the caller's own competitor entry.
    Resubmitting a boulder replaces the earlier result for it.
    """
    if not submission.scores:
        raise HTTPException(status_code=400, detail="Please submit at least one score")

    competition = get_competition_or_404(db, str(competition_id))
    require_active(competition, "submit scores")
    competitor = get_own_competitor_or_404(db, str(competition_id), user_id)

    boulder_ids = {
        b["id"]
        for b in (
            db.table("boulders")
            .select("id")
            .eq("competition_id", str(competition_id))
            .execute()
        ).data
        or []
    }

    unknown = [s for s in submission.scores if str(s.boulder_id) not in boulder_ids]
    if unknown:
        raise HTTPException(
            status_code=400,
            detail=f"Boulder {unknown[0].boulder_id} is not part of this competition",
        )

    submitted_at = datetime.now(timezone.utc).isoformat()
    score_records = {
        # Last entry wins if a boulder is listed twice
        str(s.boulder_id): {
            "competitor_id": competitor["id"],
            "boulder_id": str(s.boulder_id),
            "topped": s.topped,
            "top_time": s.top_time or None,
            "submitted_at": submitted_at,
        }
        for s in submission.scores
    }

    db.table("scores").upsert(
        list(score_records.values()), on_conflict="competitor_id,boulder_id"
    ).execute()

    logger.info(
        f"Competitor {competitor['id']} submitted {len(score_records)} scores "
        f"in competition {competition_id}"
    )

    return get_my_scores(competition_id, user_id, db)
