from functools import lru_cache

from app.core.config import settings
from supabase import Client, create_client


@lru_cache(maxsize=1)
def get_supabase() -> Client:
    """Process-wide Supabase client, injected into routes with Depends."""
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)


@lru_cache(maxsize=1)
def get_service_client() -> Client:
    """
    Client using the service role key.

    Bypasses row level security, so it is only used by the seeding CLI.

    Raises:
        ValueError: If SUPABASE_SERVICE_ROLE_KEY is not set
    """
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        raise ValueError(
            "SUPABASE_SERVICE_ROLE_KEY must be set to seed users. "
            "Add it to your .env file or environment."
        )

    return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
