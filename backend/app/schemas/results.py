from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from app.schemas.competition import BoulderStatsResponse


class ScoreBreakdown(BaseModel):
    boulder_id: UUID
    identifier: str = ""
    color: Optional[str] = None
    topped: bool
    top_time: Optional[str] = None
    points: float = 0


class LeaderboardEntry(BaseModel):
    rank: int
    competitor_id: UUID
    name: str
    competitor_number: str
    category: str
    age_group: str
    total_score: float
    boulders_topped: int
    scores: List[ScoreBreakdown] = []


class ResultsResponse(BaseModel):
    leaderboard: List[LeaderboardEntry] = []
    boulder_stats: List[BoulderStatsResponse] = []
