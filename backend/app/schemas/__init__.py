# Schemas package
from app.schemas.admin import AdminEntry, AdminInvite, CurrentUser, ProfileResponse
from app.schemas.competition import (
    BoulderCreate,
    BoulderResponse,
    BoulderStatsResponse,
    CompetitionCreate,
    CompetitionResponse,
    CompetitionSummary,
)
from app.schemas.competitor import (
    CompetitionDetail,
    CompetitorCreate,
    CompetitorResponse,
)
from app.schemas.finals import (
    FinalsBoulderResponse,
    FinalsResult,
    FinalsScoreSheet,
    FinalsScoreUpdate,
    QualifiedCompetitor,
)
from app.schemas.results import LeaderboardEntry, ResultsResponse
from app.schemas.score import MyScores, ScoreResponse, ScoreSubmission

__all__ = [
    "AdminEntry",
    "AdminInvite",
    "CurrentUser",
    "ProfileResponse",
    "BoulderCreate",
    "BoulderResponse",
    "BoulderStatsResponse",
    "CompetitionCreate",
    "CompetitionResponse",
    "CompetitionSummary",
    "CompetitionDetail",
    "CompetitorCreate",
    "CompetitorResponse",
    "FinalsBoulderResponse",
    "FinalsResult",
    "FinalsScoreSheet",
    "FinalsScoreUpdate",
    "QualifiedCompetitor",
    "LeaderboardEntry",
    "ResultsResponse",
    "MyScores",
    "ScoreResponse",
    "ScoreSubmission",
]
