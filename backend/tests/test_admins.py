import uuid

import pytest

from helpers import API, auth


@pytest.fixture
def friend(db):
    return db.add("profiles", id=str(uuid.uuid4()), email="jo@example.com", full_name="Jo")


def invite(client, competition, user_id, email):
    return client.post(
        f"{API}/competitions/{competition['id']}/admins",
        json={"email": email},
        headers=auth(user_id),
    )


def test_creator_listed_as_admin(client, db, competition, creator_id):
    db.add("profiles", id=creator_id, email="owner@example.com")

    response = client.get(f"{API}/competitions/{competition['id']}/admins")

    assert response.status_code == 200
    [entry] = response.json()
    assert entry["user_id"] == creator_id
    assert entry["is_creator"] is True
    assert entry["id"] is None


def test_invite_by_email(client, db, competition, creator_id, friend):
    response = invite(client, competition, creator_id, "  Jo@Example.COM ")

    assert response.status_code == 200
    admins = response.json()
    assert [a["email"] for a in admins if not a["is_creator"]] == ["jo@example.com"]
    [row] = db.tables["competition_admins"]
    assert row["user_id"] == friend["id"]
    assert row["invited_by"] == creator_id


def test_invite_unknown_email(client, db, competition, creator_id):
    response = invite(client, competition, creator_id, "nobody@example.com")

    assert response.status_code == 404
    assert response.json()["detail"] == "User not found. They must have an account first."
    assert "competition_admins" not in db.tables


def test_invite_existing_admin_rejected(client, db, competition, creator_id, friend):
    invite(client, competition, creator_id, friend["email"])

    response = invite(client, competition, creator_id, friend["email"])

    assert response.status_code == 400
    assert len(db.tables["competition_admins"]) == 1


def test_invite_creator_rejected(client, db, competition, creator_id):
    db.add("profiles", id=creator_id, email="owner@example.com")

    response = invite(client, competition, creator_id, "owner@example.com")

    assert response.status_code == 400


def test_only_admins_can_invite(client, db, competition, friend):
    response = invite(client, competition, str(uuid.uuid4()), friend["email"])

    assert response.status_code == 403
    assert "competition_admins" not in db.tables


def test_invited_admin_can_invite(client, db, competition, friend):
    admin_id = str(uuid.uuid4())
    db.add("competition_admins", competition_id=competition["id"], user_id=admin_id)

    response = invite(client, competition, admin_id, friend["email"])

    assert response.status_code == 200


def test_remove_invited_admin(client, db, competition, creator_id, friend):
    row = db.add("competition_admins", competition_id=competition["id"], user_id=friend["id"])

    response = client.delete(
        f"{API}/competitions/{competition['id']}/admins/{row['id']}",
        headers=auth(creator_id),
    )

    assert response.status_code == 200
    assert db.tables["competition_admins"] == []


def test_creator_can_never_be_removed(client, db, competition, creator_id):
    row = db.add("competition_admins", competition_id=competition["id"], user_id=creator_id)

    response = client.delete(
        f"{API}/competitions/{competition['id']}/admins/{row['id']}",
        headers=auth(creator_id),
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot remove the competition creator."
    assert len(db.tables["competition_admins"]) == 1


def test_non_admin_cannot_remove_admin(client, db, competition, friend):
    row = db.add("competition_admins", competition_id=competition["id"], user_id=friend["id"])

    response = client.delete(
        f"{API}/competitions/{competition['id']}/admins/{row['id']}",
        headers=auth(str(uuid.uuid4())),
    )

    assert response.status_code == 403
    assert len(db.tables["competition_admins"]) == 1


def test_remove_unknown_admin(client, competition, creator_id):
    response = client.delete(
        f"{API}/competitions/{competition['id']}/admins/{uuid.uuid4()}",
        headers=auth(creator_id),
    )

    assert response.status_code == 404


def test_creator_cannot_be_removed_by_user_id(client, db, competition, creator_id):
    response = client.delete(
        f"{API}/competitions/{competition['id']}/admins/{creator_id}",
        headers=auth(creator_id),
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot remove the competition creator."
