"""
Admin-facing compatibility breakdown for an existing match.
"""
from dataclasses import dataclass, field
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from app.database.models import Match, QuestionnaireQuestion
from app.exceptions import NotFoundError
from app.services.compatibility_scorer import CompatibilityScorer
from app.services.question_repository import QuestionRepository
from app.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class AnalyzedQuestion:
    question_id: str
    prompt: str
    similarity: float
    weight: float
    weighted_score: float
    question_type: Optional[str]
    is_dealbreaker_question: bool
    dealbreaker_violated: bool
    answer_a: Any = None
    answer_b: Any = None


@dataclass
class MatchAnalysis:
    match_id: str
    score: int
    dealbreakers_violated: int
    questions_scored: int
    applicant_name: str
    partner_name: str
    breakdown: List[AnalyzedQuestion] = field(default_factory=list)


class MatchAnalysisService:
    """Explains a match's compatibility score question by question."""

    def __init__(self, db: Session, scorer: CompatibilityScorer, repository: QuestionRepository = None):
        self.db = db
        self.scorer = scorer
        self.repository = repository or QuestionRepository(db)

    def analyze(self, match_id: str) -> MatchAnalysis:
        match = (
            self.db.query(Match)
            .filter(Match.id == match_id, Match.deleted_at.is_(None))
            .first()
        )
        if not match:
            raise NotFoundError("Match not found", context={"match_id": match_id})

        scoring = self.scorer.score(match.applicant_id, match.partner_id)
        question_ids = [item.question_id for item in scoring.breakdown]

        answers = self.repository.get_answer_values(
            [match.applicant_id, match.partner_id],
            question_ids,
        )
        question_meta = {}
        if question_ids:
            question_meta = {
                question_id: (question_type, is_dealbreaker)
                for question_id, question_type, is_dealbreaker in (
                    self.db.query(
                        QuestionnaireQuestion.id,
                        QuestionnaireQuestion.type,
                        QuestionnaireQuestion.is_dealbreaker,
                    )
                    .filter(QuestionnaireQuestion.id.in_(question_ids))
                    .all()
                )
            }
        violated = set(scoring.dealbreakers_violated)

        breakdown = []
        for item in scoring.breakdown:
            question_type, is_dealbreaker = question_meta.get(item.question_id, (None, False))
            breakdown.append(AnalyzedQuestion(
                question_id=item.question_id,
                prompt=item.prompt,
                similarity=item.similarity,
                weight=item.weight,
                weighted_score=item.weighted_score,
                question_type=question_type,
                is_dealbreaker_question=bool(is_dealbreaker),
                dealbreaker_violated=item.question_id in violated,
                answer_a=answers.get((item.question_id, match.applicant_id)),
                answer_b=answers.get((item.question_id, match.partner_id)),
            ))

        logger.info(f"Analyzed match {match_id}: score={scoring.score}, questions={scoring.questions_scored}")

        return MatchAnalysis(
            match_id=match.id,
            score=scoring.score,
            dealbreakers_violated=len(scoring.dealbreakers_violated),
            questions_scored=scoring.questions_scored,
            applicant_name=match.applicant.full_name,
            partner_name=match.partner.full_name,
            breakdown=breakdown,
        )
