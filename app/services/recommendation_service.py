"""
Partner recommendations built on the compatibility scorer.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from app.config import get_settings
from app.database.models import Applicant
from app.services.compatibility_scorer import CompatibilityScorer
from app.services.match_filters import apply_filters
from app.utils.logger import get_logger

logger = get_logger(__name__)
settings = get_settings()


@dataclass
class Recommendation:
    applicant_id: str
    compatibility_score: int
    dealbreakers_violated: List[str] = field(default_factory=list)
    questions_scored: int = 0


class RecommendationService:
    """Ranks filtered candidates for an applicant by compatibility score."""

    def __init__(self, scorer: CompatibilityScorer):
        self.scorer = scorer

    def get_recommendations(
        self,
        applicant: Applicant,
        candidates: List[Applicant],
        max_results: Optional[int] = None,
        min_score: Optional[int] = None,
    ) -> List[Recommendation]:
        """
        Get recommended partners for an applicant.

        Candidates are pre-filtered (gender/seeking/status), scored, stripped
        of any dealbreaker violations regardless of ``min_score``, filtered by
        ``min_score`` and returned best first, at most ``max_results`` of them.
        """
        if max_results is None:
            max_results = settings.RECOMMENDATION_MAX_RESULTS
        if min_score is None:
            min_score = settings.RECOMMENDATION_MIN_SCORE

        filtered = apply_filters(applicant, candidates)

        scored = [
            (candidate, self.scorer.score(applicant.id, candidate.id))
            for candidate in filtered
        ]

        qualifying = [
            (candidate, result)
            for candidate, result in scored
            if not result.has_dealbreaker and result.score >= min_score
        ]

        # Stable sort keeps candidate order between equal scores
        qualifying.sort(key=lambda pair: pair[1].score, reverse=True)

        logger.info(
            f"Recommendations for {applicant.id}: {len(filtered)} filtered, "
            f"{len(qualifying)} qualifying, returning up to {max_results}"
        )

        return [
            Recommendation(
                applicant_id=candidate.id,
                compatibility_score=result.score,
                dealbreakers_violated=list(result.dealbreakers_violated),
                questions_scored=result.questions_scored,
            )
            for candidate, result in qualifying[:max_results]
        ]
