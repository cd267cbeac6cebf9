from datetime import date, datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field

BoulderColor = Literal["green", "yellow", "orange", "red", "black"]


class BoulderBase(BaseModel):
    identifier: str = Field(..., max_length=20)
    color: BoulderColor
    base_points: int = Field(..., ge=0)


class BoulderCreate(BoulderBase):
    # Defaults to the colour's base points
    base_points: Optional[int] = Field(None, ge=0)


class BoulderResponse(BoulderBase):
    id: UUID
    competition_id: UUID

    model_config = {"from_attributes": True}


class BoulderStatsResponse(BaseModel):
    """Per category/age group tops and points for a boulder (read only)."""

    boulder_id: UUID
    identifier: str = ""
    color: Optional[BoulderColor] = None
    base_points: int = 0
    category: str
    age_group: str
    tops_count: int
    calculated_points: float
    points_if_topped_next: float = 0  # what one more top would be worth


class CompetitionBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    description: Optional[str] = None
    start_date: date
    end_date: date


class CompetitionCreate(CompetitionBase):
    boulders: List[BoulderCreate] = Field(
        default=[], description="Boulders set for the qualification round"
    )


class CompetitionResponse(CompetitionBase):
    id: UUID
    is_active: bool = False
    created_by: Optional[UUID] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class CompetitionSummary(CompetitionResponse):
    competitor_count: int = 0
