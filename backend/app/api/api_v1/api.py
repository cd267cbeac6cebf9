from app.api.api_v1.endpoints import (
    admins,
    auth,
    competitions,
    competitors,
    finals,
    results,
    scores,
    scoring,
    setup,
)
from fastapi import APIRouter

api_router = APIRouter()

api_router.include_router(
    competitions.router, prefix="/competitions", tags=["competitions"]
)
api_router.include_router(
    competitors.router, prefix="/competitions", tags=["competitors"]
)
api_router.include_router(scores.router, prefix="/competitions", tags=["scores"])
api_router.include_router(results.router, prefix="/competitions", tags=["results"])
api_router.include_router(finals.router, prefix="/competitions", tags=["finals"])
api_router.include_router(admins.router, prefix="/competitions", tags=["admins"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(scoring.router, prefix="/scoring", tags=["scoring"])
api_router.include_router(setup.router, prefix="/setup", tags=["setup"])
