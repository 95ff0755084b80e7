"""
Weighted compatibility scoring between two applicants.

The score is the weight-normalised average of per-question similarities,
scaled to 0-100. Any dealbreaker question whose similarity falls below
``DEALBREAKER_THRESHOLD`` forces the final score to 0.
"""
import math
from dataclasses import dataclass, field
from typing import Any, List, Protocol

from app.models.question_types import QuestionConfig
from app.services.similarity import calculate_similarity
from app.utils.logger import get_logger

logger = get_logger(__name__)

DEALBREAKER_THRESHOLD = 0.5
NO_DATA_SCORE = 50


class _Unanswered:
    """Marker for an applicant who has no stored answer row for a question."""

    def __repr__(self):
        return "UNANSWERED"

    def __bool__(self):
        return False


UNANSWERED = _Unanswered()


@dataclass(frozen=True)
class QuestionAnswers:
    """An active question joined with the two applicants' stored answers."""
    question_id: str
    prompt: str
    question_type: Any
    config: QuestionConfig
    weight: float
    is_dealbreaker: bool = False
    answer_a: Any = UNANSWERED
    answer_b: Any = UNANSWERED

    @property
    def is_answered_by_both(self) -> bool:
        return all(
            answer is not UNANSWERED and answer is not None
            for answer in (self.answer_a, self.answer_b)
        )


@dataclass(frozen=True)
class QuestionBreakdown:
    question_id: str
    prompt: str
    similarity: float
    weight: float
    weighted_score: float


@dataclass
class ScoringResult:
    score: int
    dealbreakers_violated: List[str] = field(default_factory=list)
    questions_scored: int = 0
    breakdown: List[QuestionBreakdown] = field(default_factory=list)

    @property
    def has_dealbreaker(self) -> bool:
        return bool(self.dealbreakers_violated)


class QuestionSource(Protocol):
    """Read-only access to active questions joined with two applicants' answers."""

    def list_active_questions(self, applicant_a_id: str, applicant_b_id: str) -> List[QuestionAnswers]:
        ...


def _effective_weight(weight: Any) -> float:
    try:
        value = float(weight)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def score_question_answers(questions: List[QuestionAnswers]) -> ScoringResult:
    """
    Reduce joined question/answer data to a compatibility result.

    Questions either applicant left unanswered (no row, or a null value) are
    skipped entirely. Every other question contributes to the weighted
    average and the breakdown, including dealbreaker violations.
    """
    dealbreakers_violated: List[str] = []
    breakdown: List[QuestionBreakdown] = []
    total_weighted_score = 0.0
    total_weight = 0.0

    for question in questions:
        if not question.is_answered_by_both:
            continue

        similarity = calculate_similarity(
            question.question_type,
            question.config,
            question.answer_a,
            question.answer_b,
        )

        # Collect every violation; scoring continues so the breakdown is complete
        if question.is_dealbreaker and similarity < DEALBREAKER_THRESHOLD:
            dealbreakers_violated.append(question.question_id)

        weight = _effective_weight(question.weight)
        weighted_score = similarity * weight
        total_weighted_score += weighted_score
        total_weight += weight

        breakdown.append(QuestionBreakdown(
            question_id=question.question_id,
            prompt=question.prompt,
            similarity=similarity,
            weight=weight,
            weighted_score=weighted_score,
        ))

    if not math.isfinite(total_weight):
        # Sums overflowed; rescale by the largest weight
        max_weight = max(entry.weight for entry in breakdown)
        total_weight = sum(entry.weight / max_weight for entry in breakdown)
        total_weighted_score = sum(entry.similarity * (entry.weight / max_weight) for entry in breakdown)

    if total_weight > 0:
        score = _round_half_up(total_weighted_score / total_weight * 100)
        score = max(0, min(100, score))
    else:
        score = NO_DATA_SCORE

    if dealbreakers_violated:
        score = 0

    return ScoringResult(
        score=score,
        dealbreakers_violated=dealbreakers_violated,
        questions_scored=len(breakdown),
        breakdown=breakdown,
    )


class CompatibilityScorer:
    """Scores applicant pairs against the active questionnaire."""

    def __init__(self, question_source: QuestionSource):
        self.question_source = question_source

    def score(self, applicant_a_id: str, applicant_b_id: str) -> ScoringResult:
        """
        Calculate the weighted compatibility score between two applicants.

        Args:
            applicant_a_id: First applicant identifier
            applicant_b_id: Second applicant identifier

        Returns:
            ScoringResult with the 0-100 score, violated dealbreaker question
            ids, number of questions scored and per-question breakdown
        """
        questions = self.question_source.list_active_questions(applicant_a_id, applicant_b_id)
        result = score_question_answers(questions)

        logger.debug(
            f"Scored {applicant_a_id} vs {applicant_b_id}: score={result.score}, "
            f"questions_scored={result.questions_scored}, "
            f"dealbreakers={len(result.dealbreakers_violated)}"
        )
        return result
