"""
Unit tests for EventMatchingService.
"""
from datetime import datetime, timezone

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from app.database.models import Match, MatchType
from app.exceptions import InsufficientDataError, MatchPersistenceError, NotFoundError
from app.services.compatibility_scorer import CompatibilityScorer
from app.services.event_matching_service import EventMatchingService
from app.services.question_repository import QuestionRepository
from app.services.recommendation_service import RecommendationService


def _service(db_session):
    scorer = CompatibilityScorer(QuestionRepository(db_session))
    return EventMatchingService(db_session, RecommendationService(scorer))


@pytest.fixture
def scored_event(db_session, make_applicant, make_question, answer, make_event):
    """Two women and two men who agree on one scale question to varying degrees."""
    amy = make_applicant(first_name="Amy", gender="WOMAN", seeking="MAN")
    beth = make_applicant(first_name="Beth", gender="WOMAN", seeking="MAN")
    carl = make_applicant(first_name="Carl", gender="MAN", seeking="WOMAN")
    dan = make_applicant(first_name="Dan", gender="MAN", seeking="WOMAN")
    question = make_question("NUMBER_SCALE", {"min": 1, "max": 5})
    for applicant, value in ((amy, 5), (beth, 1), (carl, 5), (dan, 4)):
        answer(question, applicant, value)
    event = make_event(invitees=[amy, beth, carl, dan])
    return event, {"amy": amy, "beth": beth, "carl": carl, "dan": dan}


class TestEligibleApplicants:

    @pytest.mark.unit
    def test_only_invited_approved_screened(self, db_session, make_applicant, make_event):
        invited = make_applicant()
        make_applicant()  # not invited
        pending = make_applicant(application_status="PENDING")
        unscreened = make_applicant(screening_status="IN_PROGRESS")
        deleted = make_applicant(deleted_at=datetime.now(timezone.utc))
        event = make_event(invitees=[invited, pending, unscreened, deleted])

        eligible = _service(db_session).get_eligible_applicants(event.id)

        assert [a.id for a in eligible] == [invited.id]


class TestGenerateMatches:
    """Test cases for EventMatchingService.generate_matches."""

    @pytest.mark.unit
    def test_unknown_event(self, db_session):
        with pytest.raises(NotFoundError):
            _service(db_session).generate_matches("missing-event")

    @pytest.mark.unit
    def test_deleted_event(self, db_session, make_event):
        event = make_event()
        event.deleted_at = datetime.now(timezone.utc)
        db_session.commit()

        with pytest.raises(NotFoundError):
            _service(db_session).generate_matches(event.id)

    @pytest.mark.unit
    def test_needs_two_eligible_applicants(self, db_session, make_applicant, make_event):
        event = make_event(invitees=[make_applicant(), make_applicant(application_status="REJECTED")])

        with pytest.raises(InsufficientDataError) as exc_info:
            _service(db_session).generate_matches(event.id)

        assert exc_info.value.context["eligible_applicants"] == 1

    @pytest.mark.unit
    def test_creates_matches_above_min_score(self, db_session, scored_event):
        event, people = scored_event

        summary = _service(db_session).generate_matches(event.id, max_per_applicant=5, min_score=60)

        pairs = {
            (m.applicant_id, m.partner_id): m.compatibility_score
            for m in db_session.query(Match).filter(Match.event_id == event.id).all()
        }
        amy, carl, dan = people["amy"], people["carl"], people["dan"]
        assert pairs == {
            (amy.id, carl.id): 100,
            (amy.id, dan.id): 75,
            (carl.id, amy.id): 100,
            (dan.id, amy.id): 75,
        }
        assert summary.event_name == event.name
        assert summary.applicants_processed == 4
        assert summary.recommendations_generated == 4
        assert summary.matches_created == 4
        # (100 + 75 + 100 + 75) / 4 = 87.5
        assert summary.avg_score == 88
        assert summary.recommendations is None

    @pytest.mark.unit
    def test_matches_are_curated(self, db_session, scored_event):
        event, _ = scored_event
        _service(db_session).generate_matches(event.id, min_score=60)

        types = {m.type for m in db_session.query(Match).filter(Match.event_id == event.id).all()}
        assert types == {MatchType.CURATED}

    @pytest.mark.unit
    def test_max_per_applicant(self, db_session, scored_event):
        event, people = scored_event

        summary = _service(db_session).generate_matches(event.id, max_per_applicant=1, min_score=60)

        amy_matches = db_session.query(Match).filter(Match.applicant_id == people["amy"].id).all()
        assert [m.partner_id for m in amy_matches] == [people["carl"].id]
        assert summary.matches_created == 3

    @pytest.mark.unit
    def test_rerun_creates_no_duplicates(self, db_session, scored_event):
        event, _ = scored_event
        service = _service(db_session)

        first = service.generate_matches(event.id, min_score=60)
        second = service.generate_matches(event.id, min_score=60)

        assert first.matches_created == 4
        assert second.matches_created == 0
        assert second.recommendations_generated == 4
        assert db_session.query(Match).filter(Match.event_id == event.id).count() == 4

    @pytest.mark.unit
    def test_preview_without_creating(self, db_session, scored_event):
        event, people = scored_event

        summary = _service(db_session).generate_matches(event.id, min_score=60, create_matches=False)

        assert summary.matches_created == 0
        assert db_session.query(Match).count() == 0
        assert len(summary.recommendations) == 4
        first = summary.recommendations[0]
        assert first.score in (100, 75)
        assert first.dealbreakers == []

    @pytest.mark.unit
    def test_no_recommendations(self, db_session, scored_event):
        event, _ = scored_event

        summary = _service(db_session).generate_matches(event.id, min_score=101)

        assert summary.recommendations_generated == 0
        assert summary.matches_created == 0
        assert summary.avg_score == 0

    @pytest.mark.unit
    def test_persistence_failure_rolls_back(self, db_session, scored_event, monkeypatch):
        event, _ = scored_event

        def failing_commit():
            raise OperationalError("INSERT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(db_session, "commit", failing_commit)

        with pytest.raises(MatchPersistenceError):
            _service(db_session).generate_matches(event.id, min_score=60)

    @pytest.mark.unit
    def test_failing_applicant_is_skipped(self, db_session, scored_event):
        event, people = scored_event
        service = _service(db_session)
        original = service.recommendation_service.get_recommendations

        def flaky(applicant, candidates, **kwargs):
            if applicant.id == people["amy"].id:
                raise OperationalError("SELECT", {}, Exception("connection reset"))
            return original(applicant, candidates, **kwargs)

        service.recommendation_service.get_recommendations = flaky

        summary = service.generate_matches(event.id, min_score=60)

        assert summary.applicants_processed == 4
        assert summary.recommendations_generated == 2
        assert summary.matches_created == 2

    @pytest.mark.unit
    def test_failed_query_is_rolled_back_before_next_applicant(self, db_session, scored_event, monkeypatch):
        event, people = scored_event
        service = _service(db_session)
        original = service.recommendation_service.get_recommendations
        rollbacks = []
        real_rollback = db_session.rollback

        def tracking_rollback():
            rollbacks.append(True)
            real_rollback()

        def failing_query(applicant, candidates, **kwargs):
            if applicant.id == people["amy"].id:
                db_session.execute(text("SELECT * FROM table_that_does_not_exist"))
            return original(applicant, candidates, **kwargs)

        monkeypatch.setattr(db_session, "rollback", tracking_rollback)
        service.recommendation_service.get_recommendations = failing_query

        summary = service.generate_matches(event.id, min_score=60)

        assert len(rollbacks) == 1
        assert summary.recommendations_generated == 2
        assert summary.matches_created == 2
        partners = {m.applicant_id for m in db_session.query(Match).filter(Match.event_id == event.id).all()}
        assert partners == {people["carl"].id, people["dan"].id}
