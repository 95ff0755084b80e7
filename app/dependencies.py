"""
Dependency injection utilities for the Matchmaking API.

Routers receive services built around the request-scoped database session,
so the scorer never touches a global client.
"""

from fastapi import Depends
from sqlalchemy.orm import Session
from app.database.connection import get_db
from app.services.question_repository import QuestionRepository
from app.services.compatibility_scorer import CompatibilityScorer
from app.services.recommendation_service import RecommendationService
from app.services.event_matching_service import EventMatchingService
from app.services.match_analysis_service import MatchAnalysisService


def get_question_repository(db: Session = Depends(get_db)) -> QuestionRepository:
    """Get question repository bound to the request session."""
    return QuestionRepository(db)


def get_compatibility_scorer(
    repository: QuestionRepository = Depends(get_question_repository)
) -> CompatibilityScorer:
    """Get compatibility scorer reading through the question repository."""
    return CompatibilityScorer(repository)


def get_recommendation_service(
    scorer: CompatibilityScorer = Depends(get_compatibility_scorer)
) -> RecommendationService:
    return RecommendationService(scorer)


def get_event_matching_service(
    db: Session = Depends(get_db),
    recommendation_service: RecommendationService = Depends(get_recommendation_service)
) -> EventMatchingService:
    return EventMatchingService(db, recommendation_service)


def get_match_analysis_service(
    db: Session = Depends(get_db),
    scorer: CompatibilityScorer = Depends(get_compatibility_scorer),
    repository: QuestionRepository = Depends(get_question_repository)
) -> MatchAnalysisService:
    return MatchAnalysisService(db, scorer, repository)
