# Models package for Pydantic schemas and typed question configuration

from .compatibility_models import (
    CompatibilityResponse, QuestionBreakdownResponse, RecommendationResponse,
    RecommendationListResponse, MatchAnalysisResponse, AnalyzedQuestionResponse,
    GenerateMatchesRequest, GenerateMatchesResponse, EventRecommendationResponse, EventSummary
)
from .question_types import QuestionType, parse_question_config

__all__ = [
    "CompatibilityResponse", "QuestionBreakdownResponse", "RecommendationResponse",
    "RecommendationListResponse", "MatchAnalysisResponse", "AnalyzedQuestionResponse",
    "GenerateMatchesRequest", "GenerateMatchesResponse", "EventRecommendationResponse", "EventSummary",
    "QuestionType", "parse_question_config"
]
