from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.schemas.competition import BoulderResponse, CompetitionResponse

Category = Literal["male", "female", "other"]
AgeGroup = Literal["u11", "u13", "u15", "u17", "u19", "open", "masters", "veterans"]


class CompetitorBase(BaseModel):
    name: str = Field(..., max_length=120)
    category: Category = "male"
    age_group: AgeGroup = "open"


class CompetitorCreate(CompetitorBase):
    # Admin only: someone else's id, or an explicit null for no account.
    # Left out, the competitor belongs to the caller.
    user_id: Optional[UUID] = None


class CompetitorResponse(CompetitorBase):
    id: UUID
    competition_id: UUID
    user_id: Optional[UUID] = None
    competitor_number: str

    model_config = {"from_attributes": True}


class CompetitionDetail(BaseModel):
    competition: CompetitionResponse
    boulders: List[BoulderResponse] = []
    competitors: List[CompetitorResponse] = []
    is_admin: bool = False
    is_registered: bool = False
