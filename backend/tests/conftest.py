import os
import uuid

os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-key")

import pytest
from fastapi.testclient import TestClient

from app.db.supabase import get_supabase
from app.main import app
from fake_supabase import FakeSupabase


def is_competition_admin(db, params):
    competition_id = params["p_competition_id"]
    user_id = params["p_user_id"]
    for competition in db.tables.get("competitions", []):
        if competition["id"] == competition_id and competition.get("created_by") == user_id:
            return True
    return any(
        a["competition_id"] == competition_id and a["user_id"] == user_id
        for a in db.tables.get("competition_admins", [])
    )


def get_competition_admins(db, params):
    competition_id = params["p_competition_id"]
    profiles = {p["id"]: p for p in db.tables.get("profiles", [])}
    admins = []
    for competition in db.tables.get("competitions", []):
        if competition["id"] == competition_id:
            creator = competition["created_by"]
            admins.append(
                {
                    "id": None,
                    "user_id": creator,
                    "email": profiles.get(creator, {}).get("email"),
                    "is_creator": True,
                }
            )
    for admin in db.tables.get("competition_admins", []):
        if admin["competition_id"] == competition_id:
            admins.append(
                {
                    "id": admin["id"],
                    "user_id": admin["user_id"],
                    "email": profiles.get(admin["user_id"], {}).get("email"),
                    "is_creator": False,
                    "invited_by": admin.get("invited_by"),
                }
            )
    return admins


def populate_finals_qualifiers(db, params):
    return None


@pytest.fixture
def db():
    return FakeSupabase(
        procedures={
            "is_competition_admin": is_competition_admin,
            "get_competition_admins": get_competition_admins,
            "populate_finals_qualifiers": populate_finals_qualifiers,
        }
    )


@pytest.fixture
def client(db):
    app.dependency_overrides[get_supabase] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def creator_id():
    return str(uuid.uuid4())


@pytest.fixture
def competition(db, creator_id):
    return db.add(
        "competitions",
        name="Summer Boulder Bash",
        description=None,
        start_date="2026-07-01",
        end_date="2026-07-02",
        is_active=True,
        created_by=creator_id,
    )


@pytest.fixture
def boulders(db, competition):
    return [
        db.add(
            "boulders",
            competition_id=competition["id"],
            identifier=identifier,
            color=color,
            base_points=points,
        )
        for identifier, color, points in [
            ("B1", "green", 1000),
            ("B2", "yellow", 1500),
            ("B3", "black", 3000),
        ]
    ]
