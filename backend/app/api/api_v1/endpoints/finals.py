"""
Finals endpoints: qualification, finals boulder setup, scoring and results.
"""

import logging
import uuid
from typing import List

from app.core.auth import get_current_user_id
from app.core.config import settings
from app.db.supabase import get_supabase
from app.schemas.finals import (
    FinalsBoulderResponse,
    FinalsBoulders,
    FinalsCategory,
    FinalsResult,
    FinalsScoreResponse,
    FinalsScoreSheet,
    FinalsScoreUpdate,
    QualifiedCompetitor,
)
from app.services.competitions import (
    first_row,
    get_competition_or_404,
    require_competition_admin,
)
from app.services.finals import (
    apply_finals_update,
    build_finalist_rows,
    finals_boulder_rows,
    to_score_response,
)
from fastapi import APIRouter, Depends, HTTPException, Query
from supabase import Client

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "/{competition_id}/finals/qualifiers", response_model=List[QualifiedCompetitor]
)
def get_finals_qualifiers(
    competition_id: uuid.UUID,
    category: FinalsCategory = Query(..., description="Open division"),
    db: Client = Depends(get_supabase),
):
    """Preview who qualifies for the finals in an open division."""
    get_competition_or_404(db, str(competition_id))

    response = db.rpc(
        "qualify_competitors_for_finals",
        {"p_competition_id": str(competition_id), "p_category": category},
    ).execute()

    return response.data or []


@router.post("/{competition_id}/finals/qualifiers/confirm")
def confirm_finals_qualifiers(
    competition_id: uuid.UUID,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_supabase),
):
    """Store the current qualification ranking as the finals field. Admin only."""
    get_competition_or_404(db, str(competition_id))
    require_competition_admin(db, str(competition_id), user_id)

    db.rpc(
        "populate_finals_qualifiers", {"p_competition_id": str(competition_id)}
    ).execute()

    logger.info(f"Finals qualifiers confirmed for competition {competition_id}")
    return {"message": "Finals qualifiers have been confirmed!"}


def load_finals_boulders(db: Client, competition_id: str) -> List[dict]:
    return (
        db.table("finals_boulders")
        .select("*")
        .eq("competition_id", competition_id)
        .order("identifier")
        .execute()
    ).data or []


@router.get("/{competition_id}/finals/boulders", response_model=FinalsBoulders)
def get_finals_boulders(competition_id: uuid.UUID, db: Client = Depends(get_supabase)):
    """Get the finals boulders for both open divisions."""
    get_competition_or_404(db, str(competition_id))
    boulders = load_finals_boulders(db, str(competition_id))

    return FinalsBoulders(
        male=[b for b in boulders if b["category"] == "male"],
        female=[b for b in boulders if b["category"] == "female"],
    )


@router.post("/{competition_id}/finals/boulders", response_model=FinalsBoulders)
def create_finals_boulders(
    competition_id: uuid.UUID,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_supabase),
):
    """Create the default finals boulders (FM1.. and FF1..). Admin only."""
    get_competition_or_404(db, str(competition_id))
    require_competition_admin(db, str(competition_id), user_id)

    if load_finals_boulders(db, str(competition_id)):
        raise HTTPException(
            status_code=400, detail="Finals boulders already exist for this competition"
        )

    rows = finals_boulder_rows(str(competition_id), settings.FINALS_BOULDERS_PER_CATEGORY)
    db.table("finals_boulders").insert(rows).execute()

    logger.info(f"Created {len(rows)} finals boulders for competition {competition_id}")
    return get_finals_boulders(competition_id, db)


@router.delete("/{competition_id}/finals/boulders/{boulder_id}")
def delete_finals_boulder(
    competition_id: uuid.UUID,
    boulder_id: uuid.UUID,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_supabase),
):
    """Delete a finals boulder. Admin only."""
    get_competition_or_404(db, str(competition_id))
    require_competition_admin(db, str(competition_id), user_id)

    boulder = first_row(
        db.table("finals_boulders")
        .select("id, identifier")
        .eq("id", str(boulder_id))
        .eq("competition_id", str(competition_id))
        .limit(1)
        .execute()
    )
    if not boulder:
        raise HTTPException(status_code=404, detail="Finals boulder not found")

    db.table("finals_boulders").delete().eq("id", str(boulder_id)).execute()

    return {"message": f"Finals boulder {boulder['identifier']} deleted"}


@router.get("/{competition_id}/finals/scores", response_model=FinalsScoreSheet)
def get_finals_score_sheet(
    competition_id: uuid.UUID,
    category: FinalsCategory = Query(..., description="Open division"),
    db: Client = Depends(get_supabase),
):
    """Get the judging sheet: finalists by qualification rank with their scores."""
    get_competition_or_404(db, str(competition_id))

    qualifiers = (
        db.table("finals_qualifiers")
        .select("*")
        .eq("competition_id", str(competition_id))
        .eq("category", category)
        .order("qualification_rank")
        .execute()
    ).data or []

    boulders = (
        db.table("finals_boulders")
        .select("*")
        .eq("competition_id", str(competition_id))
        .eq("category", category)
        .order("identifier")
        .execute()
    ).data or []

    competitors = []
    scores = []
    if qualifiers:
        competitor_ids = [q["competitor_id"] for q in qualifiers]
        competitors = (
            db.table("competitors").select("*").in_("id", competitor_ids).execute()
        ).data or []

        if boulders:
            scores = (
                db.table("finals_scores")
                .select("*")
                .in_("competitor_id", competitor_ids)
                .in_("finals_boulder_id", [b["id"] for b in boulders])
                .execute()
            ).data or []

    return FinalsScoreSheet(
        category=category,
        boulders=boulders,
        finalists=build_finalist_rows(qualifiers, competitors, scores),
    )


@router.put("/{competition_id}/finals/scores", response_model=FinalsScoreResponse)
def update_finals_score(
    competition_id: uuid.UUID,
    update: FinalsScoreUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Client = Depends(get_supabase),
):
    """
    Record a finals result for one finalist on one boulder. Admin only.

    Only the fields sent are changed. Marking a top clears the zone.
    """
    get_competition_or_404(db, str(competition_id))
    require_competition_admin(db, str(competition_id), user_id)

    changes = update.model_dump(
        exclude_unset=True, exclude={"competitor_id", "finals_boulder_id"}
    )
    if not changes:
        raise HTTPException(status_code=400, detail="No score fields to update")

    boulder = first_row(
        db.table("finals_boulders")
        .select("id, category")
        .eq("id", str(update.finals_boulder_id))
        .eq("competition_id", str(competition_id))
        .limit(1)
        .execute()
    )
    if not boulder:
        raise HTTPException(status_code=404, detail="Finals boulder not found")

    qualifier = first_row(
        db.table("finals_qualifiers")
        .select("competitor_id")
        .eq("competition_id", str(competition_id))
        .eq("category", boulder["category"])
        .eq("competitor_id", str(update.competitor_id))
        .limit(1)
        .execute()
    )
    if not qualifier:
        raise HTTPException(
            status_code=400,
            detail="Competitor did not qualify for this finals category",
        )

    existing = first_row(
        db.table("finals_scores")
        .select("*")
        .eq("competitor_id", str(update.competitor_id))
        .eq("finals_boulder_id", str(update.finals_boulder_id))
        .limit(1)
        .execute()
    )

    values = apply_finals_update(existing, changes)

    if existing:
        response = (
            db.table("finals_scores").update(values).eq("id", existing["id"]).execute()
        )
    else:
        response = (
            db.table("finals_scores")
            .insert(
                {
                    "competitor_id": str(update.competitor_id),
                    "finals_boulder_id": str(update.finals_boulder_id),
                    **values,
                }
            )
            .execute()
        )

    score = first_row(response)
    if not score:
        raise HTTPException(status_code=500, detail="Failed to update score")

    return to_score_response(score)


@router.get("/{competition_id}/finals/results", response_model=List[FinalsResult])
def get_finals_results(
    competition_id: uuid.UUID,
    category: FinalsCategory = Query(..., description="Open division"),
    db: Client = Depends(get_supabase),
):
    """Get the finals leaderboard for an open division."""
    get_competition_or_404(db, str(competition_id))

    response = db.rpc(
        "get_finals_leaderboard",
        {"p_competition_id": str(competition_id), "p_category": category},
    ).execute()

    return response.data or []
