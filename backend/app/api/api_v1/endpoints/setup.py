"""
Database setup check: confirms each table the app relies on can be queried.
"""

import logging

from app.db.supabase import get_supabase
from fastapi import APIRouter, Depends
from postgrest.exceptions import APIError
from supabase import Client

logger = logging.getLogger(__name__)
router = APIRouter()

TABLES = [
    "competitions",
    "boulders",
    "competitors",
    "scores",
    "boulder_stats",
    "profiles",
    "competition_admins",
    "finals_boulders",
    "finals_qualifiers",
    "finals_scores",
]


@router.get("/status")
def get_setup_status(db: Client = Depends(get_supabase)):
    """Probe every table with a one-row select and report what failed."""
    tables = {}
    for table in TABLES:
        try:
            db.table(table).select("*").limit(1).execute()
            tables[table] = {"ok": True, "error": None}
        except APIError as e:
            logger.warning(f"Setup check failed for {table}: {e.message}")
            tables[table] = {"ok": False, "error": e.message}

    return {
        "ready": all(t["ok"] for t in tables.values()),
        "tables": tables,
    }
