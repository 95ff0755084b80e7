"""
Admin API Endpoints

Match analysis and event match generation for administrators.
"""
from typing import Optional
from fastapi import APIRouter, Depends
from app.dependencies import get_event_matching_service, get_match_analysis_service
from app.middleware.auth_middleware import require_admin
from app.models.compatibility_models import (
    AnalyzedQuestionResponse, EventRecommendationResponse, EventSummary,
    GenerateMatchesRequest, GenerateMatchesResponse, MatchAnalysisResponse
)
from app.services.event_matching_service import EventMatchingService
from app.services.match_analysis_service import MatchAnalysisService
from app.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])


@router.get("/matches/{match_id}/analysis", response_model=MatchAnalysisResponse)
async def get_match_analysis(
    match_id: str,
    analysis_service: MatchAnalysisService = Depends(get_match_analysis_service),
    admin_email: str = Depends(require_admin)
):
    """Question-by-question compatibility breakdown for a match."""
    analysis = analysis_service.analyze(match_id)

    return MatchAnalysisResponse(
        match_id=analysis.match_id,
        score=analysis.score,
        dealbreakers_violated=analysis.dealbreakers_violated,
        questions_scored=analysis.questions_scored,
        applicant_name=analysis.applicant_name,
        partner_name=analysis.partner_name,
        breakdown=[AnalyzedQuestionResponse.model_validate(item) for item in analysis.breakdown],
    )


@router.post("/events/{event_id}/generate-matches", response_model=GenerateMatchesResponse)
async def generate_event_matches(
    event_id: str,
    request: Optional[GenerateMatchesRequest] = None,
    matching_service: EventMatchingService = Depends(get_event_matching_service),
    admin_email: str = Depends(require_admin)
):
    """
    Generate curated matches among the applicants invited to an event.

    Set ``create_matches`` to false to preview recommendations without
    writing matches.
    """
    request = request or GenerateMatchesRequest()
    logger.info(f"{admin_email} generating matches for event {event_id}")

    summary = matching_service.generate_matches(
        event_id,
        max_per_applicant=request.max_per_applicant,
        min_score=request.min_score,
        create_matches=request.create_matches,
    )

    recommendations = None
    if summary.recommendations is not None:
        recommendations = [
            EventRecommendationResponse.model_validate(rec) for rec in summary.recommendations
        ]

    return GenerateMatchesResponse(
        event=EventSummary(id=summary.event_id, name=summary.event_name),
        applicants_processed=summary.applicants_processed,
        recommendations_generated=summary.recommendations_generated,
        matches_created=summary.matches_created,
        avg_score=summary.avg_score,
        recommendations=recommendations,
    )
