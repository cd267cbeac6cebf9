import uuid

import jwt

API = "/api/v1"


def make_token(user_id: str) -> str:
    return jwt.encode(
        {"sub": user_id, "aud": "authenticated"}, "test-secret", algorithm="HS256"
    )


def auth(user_id: str) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


def add_competitor(
    db, competition, number, user_id=None, category="male", age_group="open", name=None
):
    return db.add(
        "competitors",
        competition_id=competition["id"],
        user_id=user_id or str(uuid.uuid4()),
        name=name or f"Climber {number}",
        competitor_number=number,
        category=category,
        age_group=age_group,
    )
