import uuid

import pytest

from app import cli
from app.services.seed import TEST_USERS, seed_users
from fake_supabase import FakeSupabase
from helpers import add_competitor

USERS = TEST_USERS[:3]


def test_creates_users_without_competition(db):
    results = seed_users(db, users=USERS)

    assert results == {"created": 3, "existing": 0, "registered": [], "errors": []}
    assert [u.email for u in db.auth.admin.users] == [u["email"] for u in USERS]
    assert db.auth.admin.users[0].user_metadata == {"full_name": "Alex Stone"}


def test_second_run_reuses_users(db):
    seed_users(db, users=USERS)

    results = seed_users(db, users=USERS)

    assert results["created"] == 0
    assert results["existing"] == 3
    assert len(db.auth.admin.users) == 3


def test_registers_competitors_with_next_numbers(db, competition):
    add_competitor(db, competition, "004")

    results = seed_users(db, competition_id=competition["id"], users=USERS)

    assert results["registered"] == ["005", "006", "007"]
    seeded = [c for c in db.tables["competitors"] if c["competitor_number"] != "004"]
    assert [(c["name"], c["category"], c["age_group"]) for c in seeded] == [
        ("Alex Stone", "male", "open"),
        ("Sarah Peak", "female", "open"),
        ("Jamie Boulder", "other", "u19"),
    ]


def test_already_registered_users_are_skipped(db, competition):
    seed_users(db, competition_id=competition["id"], users=USERS)

    results = seed_users(db, competition_id=competition["id"], users=USERS)

    assert results["registered"] == []
    assert len(db.tables["competitors"]) == 3


def test_unknown_competition_raises(db):
    with pytest.raises(ValueError):
        seed_users(db, competition_id=str(uuid.uuid4()), users=USERS)

    assert db.auth.admin.users == []


def test_per_user_errors_are_collected(db, competition):
    db.fail("competitors", "insert", "permission denied for table competitors")

    results = seed_users(db, competition_id=competition["id"], users=USERS[:2])

    assert results["created"] == 2
    assert len(results["errors"]) == 2
    assert results["errors"][0].startswith("climber1@test.com")


def test_profile_update_failure_is_not_fatal(db):
    db.fail("profiles", "update", "relation profiles does not exist")

    results = seed_users(db, users=USERS[:1])

    assert results["created"] == 1
    assert results["errors"] == []


def test_cli_seeds_competition(monkeypatch, capsys):
    fake = FakeSupabase()
    competition = fake.add("competitions", name="Local Jam", is_active=True)
    monkeypatch.setattr(cli, "get_service_client", lambda: fake)

    assert cli.main([competition["id"]]) == 0

    assert len(fake.tables["competitors"]) == len(TEST_USERS)
    out = capsys.readouterr().out
    assert f"Registered {len(TEST_USERS)} competitors" in out


def test_cli_fails_without_service_key(monkeypatch):
    def missing_key():
        raise ValueError("SUPABASE_SERVICE_ROLE_KEY must be set to seed users.")

    monkeypatch.setattr(cli, "get_service_client", missing_key)

    assert cli.main([]) == 1


def test_cli_fails_for_unknown_competition(monkeypatch):
    monkeypatch.setattr(cli, "get_service_client", lambda: FakeSupabase())

    assert cli.main([str(uuid.uuid4())]) == 1
