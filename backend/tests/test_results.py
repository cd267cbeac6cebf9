import uuid

import pytest

from app.services.leaderboard import build_leaderboard
from helpers import API, add_competitor


def stats(db, boulder, category, age_group, tops):
    return db.add(
        "boulder_stats",
        boulder_id=boulder["id"],
        category=category,
        age_group=age_group,
        tops_count=tops,
        calculated_points=boulder["base_points"] + 500 / tops,
    )


def top(db, competitor, boulder, topped=True):
    db.add(
        "scores",
        competitor_id=competitor["id"],
        boulder_id=boulder["id"],
        topped=topped,
        top_time=None,
    )


@pytest.fixture
def field(db, competition, boulders):
    green, yellow, black = boulders
    alex = add_competitor(db, competition, "001", name="Alex")
    sam = add_competitor(db, competition, "002", name="Sam")
    kim = add_competitor(db, competition, "003", name="Kim", category="female")
    tim = add_competitor(db, competition, "004", name="Tim", age_group="u15")

    top(db, alex, green)
    top(db, alex, black)
    top(db, sam, green)
    top(db, sam, yellow, topped=False)
    top(db, kim, yellow)
    top(db, tim, green)

    stats(db, green, "male", "open", 2)
    stats(db, black, "male", "open", 1)
    stats(db, yellow, "female", "open", 1)
    # Tim's pool has no stats row for green: his top is worth nothing
    return {"alex": alex, "sam": sam, "kim": kim, "tim": tim}


def test_leaderboard_uses_points_from_own_pool(client, competition, field):
    response = client.get(f"{API}/competitions/{competition['id']}/results")

    assert response.status_code == 200
    board = response.json()["leaderboard"]
    assert [e["name"] for e in board] == ["Alex", "Kim", "Sam", "Tim"]
    assert [e["rank"] for e in board] == [1, 2, 3, 4]
    assert board[0]["total_score"] == 1250 + 3500
    assert board[1]["total_score"] == 2000
    assert board[2]["total_score"] == 1250
    assert board[2]["boulders_topped"] == 1
    assert board[3]["total_score"] == 0
    assert board[3]["boulders_topped"] == 1


def test_leaderboard_breakdown_only_credits_tops(client, competition, field):
    board = client.get(f"{API}/competitions/{competition['id']}/results").json()["leaderboard"]

    sam = next(e for e in board if e["name"] == "Sam")
    points = {s["identifier"]: s["points"] for s in sam["scores"]}
    assert points == {"B1": 1250, "B2": 0}


def test_leaderboard_filters(client, competition, field):
    url = f"{API}/competitions/{competition['id']}/results"

    female = client.get(url, params={"category": "female"}).json()["leaderboard"]
    assert [e["name"] for e in female] == ["Kim"]

    u15 = client.get(url, params={"category": "all", "age_group": "u15"}).json()["leaderboard"]
    assert [e["name"] for e in u15] == ["Tim"]


def test_leaderboard_rejects_unknown_category(client, competition):
    response = client.get(
        f"{API}/competitions/{competition['id']}/results", params={"category": "robots"}
    )

    assert response.status_code == 422


def test_boulder_stats_joined_to_boulders(client, competition, field):
    data = client.get(f"{API}/competitions/{competition['id']}/results").json()

    assert [(s["identifier"], s["category"]) for s in data["boulder_stats"]] == [
        ("B1", "male"),
        ("B2", "female"),
        ("B3", "male"),
    ]
    assert data["boulder_stats"][2]["calculated_points"] == 3500


def test_empty_competition_has_empty_results(client, competition):
    data = client.get(f"{API}/competitions/{competition['id']}/results").json()

    assert data == {"leaderboard": [], "boulder_stats": []}


def test_build_leaderboard_caps_at_seven_tops():
    competitor_id = str(uuid.uuid4())
    boulder_ids = [str(uuid.uuid4()) for _ in range(9)]
    competitor = {
        "id": competitor_id,
        "name": "Alex",
        "competitor_number": "001",
        "category": "male",
        "age_group": "open",
    }
    values = [50, 40, 30, 20, 10, 9, 8, 7, 6]
    boulders = [{"id": b, "identifier": b[:4], "color": "green"} for b in boulder_ids]
    scores = [{"competitor_id": competitor_id, "boulder_id": b, "topped": True} for b in boulder_ids]
    boulder_stats = [
        {"boulder_id": b, "category": "male", "age_group": "open", "calculated_points": v}
        for b, v in zip(boulder_ids, values)
    ]

    [entry] = build_leaderboard([competitor], boulders, scores, boulder_stats)

    assert entry.total_score == 167
    assert entry.boulders_topped == 9


def test_boulder_stats_show_value_of_next_top(client, competition, field):
    data = client.get(f"{API}/competitions/{competition['id']}/results").json()

    green, _, black = data["boulder_stats"]
    assert green["points_if_topped_next"] == pytest.approx(1000 + 500 / 3)
    assert black["points_if_topped_next"] == 3250
