from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class AdminInvite(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)


class AdminEntry(BaseModel):
    """A row from the get_competition_admins procedure."""

    id: Optional[UUID] = None  # None for the implicit creator entry
    user_id: UUID
    email: Optional[str] = None
    full_name: Optional[str] = None
    is_creator: bool = False
    invited_by: Optional[UUID] = None
    invited_by_email: Optional[str] = None
    created_at: Optional[datetime] = None


class ProfileResponse(BaseModel):
    id: UUID
    email: str
    full_name: Optional[str] = None

    model_config = {"from_attributes": True}


class CurrentUser(BaseModel):
    user_id: UUID
    profile: Optional[ProfileResponse] = None
