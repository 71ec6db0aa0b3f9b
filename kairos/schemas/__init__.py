from .catalog import Career
from .chat import ChatRequest, ChatTurn
from .journal import JournalAnalysisResult, JournalAnalyzeRequest, JournalAnalyzeResponse
from .match import (
    CareerMatchRequest,
    CareerMatchResponse,
    CareerRankRequest,
    CareerRankResponse,
    MatchResult,
    RankedCareer,
    confidence_for,
)
from .plan import ActionPlan, ActionPlanRequest, PlanPhase, PlanTask
from .profile import EducationLevel, Ikigai, ThemesRequest, ThemesResponse

__all__ = [
    "Career",
    "ChatRequest",
    "ChatTurn",
    "JournalAnalysisResult",
    "JournalAnalyzeRequest",
    "JournalAnalyzeResponse",
    "CareerMatchRequest",
    "CareerMatchResponse",
    "CareerRankRequest",
    "CareerRankResponse",
    "MatchResult",
    "RankedCareer",
    "confidence_for",
    "ActionPlan",
    "ActionPlanRequest",
    "PlanPhase",
    "PlanTask",
    "EducationLevel",
    "Ikigai",
    "ThemesRequest",
    "ThemesResponse",
]
