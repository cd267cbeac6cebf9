from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "Boulder Comp Scoring"
    API_V1_STR: str = "/api/v1"
    SUPABASE_URL: str
    SUPABASE_KEY: str
    # Only needed by the seeding CLI (auth admin API)
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = None
    # When unset, tokens are decoded without signature verification
    SUPABASE_JWT_SECRET: Optional[str] = None
    BACKEND_CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:3000"]
    LOG_LEVEL: str = "INFO"
    FINALS_BOULDERS_PER_CATEGORY: int = 3

    class Config:
        case_sensitive = True
        env_file = ".env"


settings = Settings()
