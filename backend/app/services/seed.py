"""
Test user seeding.

Creates a fixed set of test accounts through the auth admin API and, when a
competition is given, registers them as competitors. Needs a service role
client: this bypasses the row level security the web app runs under.
"""

import logging
from typing import Optional

from postgrest.exceptions import APIError
from supabase import Client

from app.services.competitions import first_row, get_competition, get_competitor_for_user
from app.services.scoring import next_competitor_number

logger = logging.getLogger(__name__)

TEST_PASSWORD = "Test123!"

TEST_USERS = [
    {"email": "climber1@test.com", "full_name": "Alex Stone", "category": "male", "age_group": "open"},
    {"email": "climber2@test.com", "full_name": "Sarah Peak", "category": "female", "age_group": "open"},
    {"email": "climber3@test.com", "full_name": "Jamie Boulder", "category": "other", "age_group": "u19"},
    {"email": "youth1@test.com", "full_name": "Tim Young", "category": "male", "age_group": "u15"},
    {"email": "youth2@test.com", "full_name": "Emma Swift", "category": "female", "age_group": "u13"},
    {"email": "veteran@test.com", "full_name": "Mike Masters", "category": "male", "age_group": "veterans"},
]


def find_user_by_email(client: Client, email: str):
    for user in client.auth.admin.list_users():
        if (user.email or "").lower() == email.lower():
            return user
    return None


def create_or_get_user(client: Client, test_user: dict) -> tuple[str, bool]:
    """Create the auth user, or look it up if it exists. Returns (user_id, created)."""
    try:
        response = client.auth.admin.create_user(
            {
                "email": test_user["email"],
                "password": TEST_PASSWORD,
                "email_confirm": True,
                "user_metadata": {"full_name": test_user["full_name"]},
            }
        )
    except Exception as e:
        if "already" not in str(e).lower():
            raise
        existing = find_user_by_email(client, test_user["email"])
        if existing is None:
            raise
        logger.info(f"User {test_user['email']} already exists, reusing it")
        return existing.id, False

    return response.user.id, True


def register_competitor(
    client: Client, competition_id: str, user_id: str, test_user: dict
) -> Optional[str]:
    """Register a user in a competition. Returns the new number, or None if already in."""
    if get_competitor_for_user(client, competition_id, user_id):
        return None

    existing = (
        client.table("competitors")
        .select("competitor_number")
        .eq("competition_id", competition_id)
        .execute()
    ).data or []
    number = next_competitor_number(c["competitor_number"] for c in existing)

    response = (
        client.table("competitors")
        .insert(
            {
                "competition_id": competition_id,
                "user_id": user_id,
                "name": test_user["full_name"],
                "category": test_user["category"],
                "age_group": test_user["age_group"],
                "competitor_number": number,
            }
        )
        .execute()
    )
    competitor = first_row(response)
    return competitor["competitor_number"] if competitor else number


def seed_users(
    client: Client,
    competition_id: Optional[str] = None,
    users: Optional[list[dict]] = None,
) -> dict:
    """
    Seed test users, optionally registering them in a competition.

    Args:
        client: Service role Supabase client
        competition_id: Competition to register the users in (optional)
        users: Users to create (default: TEST_USERS)

    Returns:
        Dictionary with counts and per-user errors

    Raises:
        ValueError: If the competition doesn't exist
    """
    if users is None:
        users = TEST_USERS

    results = {"created": 0, "existing": 0, "registered": [], "errors": []}

    if competition_id:
        competition = get_competition(client, competition_id)
        if not competition:
            raise ValueError(f"Competition with ID {competition_id} not found")
        logger.info(f"Found competition: {competition['name']}")

    for test_user in users:
        try:
            user_id, created = create_or_get_user(client, test_user)

            if created:
                results["created"] += 1
                logger.info(f"Created user: {test_user['email']}")
                try:
                    client.table("profiles").update(
                        {"full_name": test_user["full_name"]}
                    ).eq("id", user_id).execute()
                except APIError as e:
                    logger.warning(
                        f"Could not update profile for {test_user['email']}: {e.message}"
                    )
            else:
                results["existing"] += 1

            if competition_id:
                number = register_competitor(client, competition_id, user_id, test_user)
                if number:
                    results["registered"].append(number)
                    logger.info(f"Registered {test_user['email']} as competitor #{number}")
        except Exception as e:
            logger.error(f"Error seeding {test_user['email']}: {e}")
            results["errors"].append(f"{test_user['email']}: {e}")

    return results
