"""
Compatibility API Endpoints

Weighted compatibility scores between applicant pairs and partner
recommendations for a single applicant.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.database.connection import get_db
from app.database.models import Applicant
from app.dependencies import get_compatibility_scorer, get_recommendation_service
from app.exceptions import NotFoundError
from app.middleware.auth_middleware import require_admin
from app.models.compatibility_models import (
    CompatibilityResponse, QuestionBreakdownResponse,
    RecommendationListResponse, RecommendationResponse
)
from app.services.compatibility_scorer import CompatibilityScorer
from app.services.recommendation_service import RecommendationService
from app.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/compatibility", tags=["compatibility"])


def _get_applicant(db: Session, applicant_id: str) -> Applicant:
    applicant = (
        db.query(Applicant)
        .filter(Applicant.id == applicant_id, Applicant.deleted_at.is_(None))
        .first()
    )
    if not applicant:
        raise NotFoundError("Applicant not found", context={"applicant_id": applicant_id})
    return applicant


@router.get("/applicants/{applicant_id}/recommendations", response_model=RecommendationListResponse)
async def get_applicant_recommendations(
    applicant_id: str,
    max_results: Optional[int] = Query(default=None, ge=1, le=100),
    min_score: Optional[int] = Query(default=None, ge=0, le=100),
    db: Session = Depends(get_db),
    recommendation_service: RecommendationService = Depends(get_recommendation_service),
    admin_email: str = Depends(require_admin)
):
    """
    Recommend partners for an applicant.

    Candidates must seek each other's gender, be approved and screened, and
    have no violated dealbreakers with the applicant.
    """
    applicant = _get_applicant(db, applicant_id)
    candidates = db.query(Applicant).filter(Applicant.deleted_at.is_(None)).all()

    recommendations = recommendation_service.get_recommendations(
        applicant,
        candidates,
        max_results=max_results,
        min_score=min_score,
    )
    logger.info(f"{admin_email} requested recommendations for {applicant_id}: {len(recommendations)} found")

    return RecommendationListResponse(
        applicant_id=applicant.id,
        recommendations=[RecommendationResponse.model_validate(rec) for rec in recommendations],
        total=len(recommendations),
    )


@router.get("/{applicant_a_id}/{applicant_b_id}", response_model=CompatibilityResponse)
async def get_compatibility(
    applicant_a_id: str,
    applicant_b_id: str,
    db: Session = Depends(get_db),
    scorer: CompatibilityScorer = Depends(get_compatibility_scorer),
    admin_email: str = Depends(require_admin)
):
    """Weighted compatibility score and per-question breakdown for two applicants."""
    _get_applicant(db, applicant_a_id)
    _get_applicant(db, applicant_b_id)

    result = scorer.score(applicant_a_id, applicant_b_id)
    logger.info(
        f"{admin_email} scored {applicant_a_id} vs {applicant_b_id}: "
        f"{result.score} over {result.questions_scored} questions"
    )

    return CompatibilityResponse(
        applicant_a_id=applicant_a_id,
        applicant_b_id=applicant_b_id,
        score=result.score,
        dealbreakers_violated=result.dealbreakers_violated,
        questions_scored=result.questions_scored,
        breakdown=[QuestionBreakdownResponse.model_validate(item) for item in result.breakdown],
    )
