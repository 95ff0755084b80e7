"""
Compatibility API Models

Pydantic request/response models for compatibility scoring, recommendations,
match analysis and event match generation.
"""
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class QuestionBreakdownResponse(BaseModel):
    """Contribution of one scored question."""
    model_config = ConfigDict(from_attributes=True)

    question_id: str = Field(..., description="Question identifier")
    prompt: str = Field(..., description="Question prompt text")
    similarity: float = Field(..., ge=0.0, le=1.0, description="Answer similarity from 0-1")
    weight: float = Field(..., ge=0.0, description="Importance weight applied")
    weighted_score: float = Field(..., ge=0.0, description="similarity * weight")


class CompatibilityResponse(BaseModel):
    """Weighted compatibility between two applicants."""
    model_config = ConfigDict(from_attributes=True)

    applicant_a_id: str = Field(..., description="First applicant")
    applicant_b_id: str = Field(..., description="Second applicant")
    score: int = Field(..., ge=0, le=100, description="Compatibility score from 0-100")
    dealbreakers_violated: List[str] = Field(default_factory=list, description="Violated dealbreaker question ids")
    questions_scored: int = Field(..., ge=0, description="Questions both applicants answered")
    breakdown: List[QuestionBreakdownResponse] = Field(default_factory=list, description="Per-question breakdown")


class RecommendationResponse(BaseModel):
    """A recommended partner."""
    model_config = ConfigDict(from_attributes=True)

    applicant_id: str = Field(..., description="Recommended partner")
    compatibility_score: int = Field(..., ge=0, le=100, description="Compatibility score from 0-100")
    dealbreakers_violated: List[str] = Field(default_factory=list, description="Always empty for recommendations")
    questions_scored: int = Field(..., ge=0, description="Questions both applicants answered")


class RecommendationListResponse(BaseModel):
    applicant_id: str = Field(..., description="Applicant the recommendations are for")
    recommendations: List[RecommendationResponse] = Field(default_factory=list)
    total: int = Field(..., ge=0)


class AnalyzedQuestionResponse(QuestionBreakdownResponse):
    """Breakdown entry enriched with the question type and both raw answers."""
    question_type: Optional[str] = Field(default=None, description="Stored question type")
    is_dealbreaker_question: bool = Field(default=False, description="Whether the question is a dealbreaker")
    dealbreaker_violated: bool = Field(default=False, description="Whether this question violated the dealbreaker")
    answer_a: Any = Field(default=None, description="Applicant's answer")
    answer_b: Any = Field(default=None, description="Partner's answer")


class MatchAnalysisResponse(BaseModel):
    """Compatibility analysis of an existing match."""
    model_config = ConfigDict(from_attributes=True)

    match_id: str
    score: int = Field(..., ge=0, le=100)
    dealbreakers_violated: int = Field(..., ge=0, description="Number of violated dealbreakers")
    questions_scored: int = Field(..., ge=0)
    applicant_name: str
    partner_name: str
    breakdown: List[AnalyzedQuestionResponse] = Field(default_factory=list)


class GenerateMatchesRequest(BaseModel):
    """Request model for event match generation."""
    max_per_applicant: Optional[int] = Field(default=None, ge=1, le=100, description="Recommendations kept per applicant")
    min_score: Optional[int] = Field(default=None, ge=0, le=100, description="Minimum compatibility score")
    create_matches: bool = Field(default=True, description="Persist matches; false returns recommendations only")


class EventRecommendationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    applicant_id: str
    partner_id: str
    score: int = Field(..., ge=0, le=100)
    dealbreakers: List[str] = Field(default_factory=list)


class EventSummary(BaseModel):
    id: str
    name: str


class GenerateMatchesResponse(BaseModel):
    """Summary of an event match generation run."""
    event: EventSummary
    applicants_processed: int = Field(..., ge=0)
    recommendations_generated: int = Field(..., ge=0)
    matches_created: int = Field(..., ge=0)
    avg_score: int = Field(..., ge=0, le=100)
    recommendations: Optional[List[EventRecommendationResponse]] = Field(
        default=None, description="Only present when create_matches is false"
    )
