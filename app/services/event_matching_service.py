"""
Curated match generation for matchmaking events.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database.models import (
    Applicant, ApplicationStatus, Event, EventInvitation, Match, MatchType, ScreeningStatus,
)
from app.exceptions import InsufficientDataError, MatchPersistenceError, NotFoundError
from app.services.recommendation_service import RecommendationService
from app.utils.logger import get_logger

logger = get_logger(__name__)
settings = get_settings()


@dataclass
class EventRecommendation:
    applicant_id: str
    partner_id: str
    score: int
    dealbreakers: List[str] = field(default_factory=list)


@dataclass
class EventMatchSummary:
    event_id: str
    event_name: str
    applicants_processed: int
    recommendations_generated: int
    matches_created: int
    avg_score: int
    recommendations: Optional[List[EventRecommendation]] = None


class EventMatchingService:
    """Generates curated matches among the applicants invited to an event."""

    def __init__(self, db: Session, recommendation_service: RecommendationService):
        self.db = db
        self.recommendation_service = recommendation_service

    def _get_event(self, event_id: str) -> Event:
        event = (
            self.db.query(Event)
            .filter(Event.id == event_id, Event.deleted_at.is_(None))
            .first()
        )
        if not event:
            raise NotFoundError("Event not found", context={"event_id": event_id})
        return event

    def get_eligible_applicants(self, event_id: str) -> List[Applicant]:
        """Approved, screened, non-deleted applicants invited to the event."""
        return (
            self.db.query(Applicant)
            .join(EventInvitation, EventInvitation.applicant_id == Applicant.id)
            .filter(
                EventInvitation.event_id == event_id,
                Applicant.application_status == ApplicationStatus.APPROVED,
                Applicant.screening_status == ScreeningStatus.PASSED,
                Applicant.deleted_at.is_(None),
            )
            .order_by(Applicant.created_at.asc(), Applicant.id.asc())
            .all()
        )

    def _existing_pairs(self, event_id: str) -> Set[Tuple[str, str]]:
        rows = (
            self.db.query(Match.applicant_id, Match.partner_id)
            .filter(Match.event_id == event_id)
            .all()
        )
        return {(applicant_id, partner_id) for applicant_id, partner_id in rows}

    def _create_matches(self, event_id: str, recommendations: List[EventRecommendation]) -> int:
        existing = self._existing_pairs(event_id)
        created = 0
        try:
            for rec in recommendations:
                pair = (rec.applicant_id, rec.partner_id)
                # Skip if match already exists
                if pair in existing:
                    continue
                self.db.add(Match(
                    event_id=event_id,
                    applicant_id=rec.applicant_id,
                    partner_id=rec.partner_id,
                    type=MatchType.CURATED,
                    compatibility_score=rec.score,
                ))
                existing.add(pair)
                created += 1
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create matches for event {event_id}: {e}")
            raise MatchPersistenceError(
                "Failed to create matches in database",
                context={"event_id": event_id},
            ) from e
        return created

    def generate_matches(
        self,
        event_id: str,
        max_per_applicant: Optional[int] = None,
        min_score: Optional[int] = None,
        create_matches: bool = True,
    ) -> EventMatchSummary:
        """
        Generate curated matches for an event.

        Args:
            event_id: Event to generate matches for
            max_per_applicant: Recommendations kept per applicant
            min_score: Minimum compatibility score for a recommendation
            create_matches: Persist matches; when False only return recommendations

        Raises:
            NotFoundError: The event does not exist
            InsufficientDataError: Fewer than two eligible applicants
        """
        if max_per_applicant is None:
            max_per_applicant = settings.EVENT_MATCH_MAX_PER_APPLICANT
        if min_score is None:
            min_score = settings.EVENT_MATCH_MIN_SCORE

        event = self._get_event(event_id)
        applicants = self.get_eligible_applicants(event_id)

        if len(applicants) < 2:
            raise InsufficientDataError(
                "Need at least 2 approved applicants invited to the event",
                context={"event_id": event_id, "eligible_applicants": len(applicants)},
            )

        all_recommendations: List[EventRecommendation] = []
        for applicant in applicants:
            try:
                recommendations = self.recommendation_service.get_recommendations(
                    applicant,
                    applicants,
                    max_results=max_per_applicant,
                    min_score=min_score,
                )
            except SQLAlchemyError as e:
                # Continue with other applicants on a usable transaction
                self.db.rollback()
                logger.error(f"Failed to get recommendations for {applicant.id}: {e}")
                continue

            all_recommendations.extend(
                EventRecommendation(
                    applicant_id=applicant.id,
                    partner_id=rec.applicant_id,
                    score=rec.compatibility_score,
                    dealbreakers=rec.dealbreakers_violated,
                )
                for rec in recommendations
            )

        matches_created = 0
        if create_matches and all_recommendations:
            matches_created = self._create_matches(event_id, all_recommendations)

        avg_score = 0
        if all_recommendations:
            avg_score = int(sum(rec.score for rec in all_recommendations) / len(all_recommendations) + 0.5)

        logger.info(
            f"Event {event_id}: {len(applicants)} applicants, "
            f"{len(all_recommendations)} recommendations, {matches_created} matches created"
        )

        return EventMatchSummary(
            event_id=event.id,
            event_name=event.name,
            applicants_processed=len(applicants),
            recommendations_generated=len(all_recommendations),
            matches_created=matches_created,
            avg_score=avg_score,
            recommendations=None if create_matches else all_recommendations,
        )
