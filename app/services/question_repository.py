"""
Read-only access to questionnaire questions and answers for scoring.
"""
from typing import Any, Dict, Iterable, List, Tuple

from sqlalchemy.orm import Session

from app.database.models import QuestionnaireAnswer, QuestionnaireQuestion
from app.models.question_types import parse_question_config
from app.services.compatibility_scorer import QuestionAnswers, UNANSWERED
from app.utils.logger import get_logger

logger = get_logger(__name__)


class QuestionRepository:
    """Fetches active questions joined with two applicants' answers."""

    def __init__(self, db: Session):
        self.db = db

    def _active_questions(self) -> List[QuestionnaireQuestion]:
        return (
            self.db.query(QuestionnaireQuestion)
            .filter(
                QuestionnaireQuestion.is_active.is_(True),
                QuestionnaireQuestion.deleted_at.is_(None),
            )
            .order_by(QuestionnaireQuestion.order.asc(), QuestionnaireQuestion.id.asc())
            .all()
        )

    def get_answer_values(
        self,
        applicant_ids: Iterable[str],
        question_ids: Iterable[str] = None,
    ) -> Dict[Tuple[str, str], Any]:
        """
        Map (question_id, applicant_id) to the stored answer value.

        A pair that is present with value None was saved without an answer;
        a missing pair has no answer row at all.
        """
        applicant_ids = list(applicant_ids)
        query = self.db.query(
            QuestionnaireAnswer.question_id,
            QuestionnaireAnswer.applicant_id,
            QuestionnaireAnswer.value,
        ).filter(QuestionnaireAnswer.applicant_id.in_(applicant_ids))

        if question_ids is not None:
            question_ids = list(question_ids)
            if not question_ids:
                return {}
            query = query.filter(QuestionnaireAnswer.question_id.in_(question_ids))

        return {
            (question_id, applicant_id): value
            for question_id, applicant_id, value in query.all()
        }

    def list_active_questions(self, applicant_a_id: str, applicant_b_id: str) -> List[QuestionAnswers]:
        """Active, non-deleted questions in questionnaire order with both applicants' answers."""
        questions = self._active_questions()
        answers = self.get_answer_values(
            {applicant_a_id, applicant_b_id},
            [question.id for question in questions],
        )

        joined = [
            QuestionAnswers(
                question_id=question.id,
                prompt=question.prompt,
                question_type=question.type,
                config=parse_question_config(question.type, question.options),
                weight=question.ml_weight if question.ml_weight is not None else 0.0,
                is_dealbreaker=bool(question.is_dealbreaker),
                answer_a=answers.get((question.id, applicant_a_id), UNANSWERED),
                answer_b=answers.get((question.id, applicant_b_id), UNANSWERED),
            )
            for question in questions
        ]
        logger.debug(f"Loaded {len(joined)} active questions for {applicant_a_id} and {applicant_b_id}")
        return joined
