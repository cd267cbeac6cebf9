from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.schemas.competitor import CompetitorResponse

FinalsCategory = Literal["male", "female"]


class FinalsBoulderResponse(BaseModel):
    id: UUID
    competition_id: UUID
    category: FinalsCategory
    identifier: str

    model_config = {"from_attributes": True}


class FinalsBoulders(BaseModel):
    male: List[FinalsBoulderResponse] = []
    female: List[FinalsBoulderResponse] = []


class QualifiedCompetitor(BaseModel):
    competitor_id: UUID
    competitor_name: str
    qualification_rank: int
    qualification_score: float


class FinalsScoreUpdate(BaseModel):
    """Partial change to one finalist's result on one finals boulder."""

    competitor_id: UUID
    finals_boulder_id: UUID
    topped: Optional[bool] = None
    zone: Optional[bool] = None
    attempts: Optional[int] = Field(None, ge=0)
    time_seconds: Optional[int] = Field(None, ge=0)  # null clears the time

    @field_validator("topped", "zone", "attempts")
    @classmethod
    def reject_null(cls, v, info):
        # Omitted fields skip validation; an explicit null lands here
        if v is None:
            raise ValueError(f"{info.field_name} can't be null, leave it out to keep it")
        return v


class FinalsScoreResponse(BaseModel):
    id: UUID
    competitor_id: UUID
    finals_boulder_id: UUID
    topped: bool = False
    zone: bool = False
    attempts: int = 0
    time_seconds: Optional[int] = None
    points: float = 0

    model_config = {"from_attributes": True}


class FinalistRow(BaseModel):
    qualification_rank: int
    qualification_score: Optional[float] = None
    competitor: CompetitorResponse
    scores: dict[str, FinalsScoreResponse] = {}  # finals_boulder_id -> score
    total_score: float = 0


class FinalsScoreSheet(BaseModel):
    category: FinalsCategory
    boulders: List[FinalsBoulderResponse] = []
    finalists: List[FinalistRow] = []


class FinalsResult(BaseModel):
    competitor_id: UUID
    competitor_name: str
    qualification_rank: Optional[int] = None
    total_finals_score: float = 0
    tops_count: int = 0
    zones_count: int = 0
    total_attempts: int = 0
    total_time: Optional[float] = None
