from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.schemas.competitor import CompetitorResponse


class ScoreEntry(BaseModel):
    boulder_id: UUID
    topped: bool
    top_time: Optional[str] = None  # "HH:MM", only recorded for black boulders


class ScoreSubmission(BaseModel):
    scores: List[ScoreEntry] = Field(default=[])


class ScoreResponse(BaseModel):
    competitor_id: UUID
    boulder_id: UUID
    topped: bool
    top_time: Optional[str] = None
    submitted_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class MyScores(BaseModel):
    competitor: CompetitorResponse
    scores: List[ScoreResponse] = []
