"""
Per-question-type similarity rules for compatibility scoring.

Every rule returns a float in [0, 1] and is symmetric in its two answers.
Misconfigured questions and unexpected answer shapes never raise: they fall
back to exact-match comparison or to the neutral value 0.5.
"""
import math
from typing import Any, Dict, FrozenSet, List

from app.models.question_types import (
    FREE_TEXT_TYPES,
    SINGLE_CHOICE_TYPES,
    NumericScaleConfig,
    QuestionConfig,
    QuestionType,
    to_finite_number,
)

NEUTRAL_SIMILARITY = 0.5


def _clamp_unit(value: float) -> float:
    if math.isnan(value):
        return NEUTRAL_SIMILARITY
    return max(0.0, min(1.0, value))


def _exact_match(value_a: Any, value_b: Any) -> float:
    return 1.0 if value_a == value_b else 0.0


def numeric_scale_similarity(config: QuestionConfig, value_a: Any, value_b: Any) -> float:
    """Distance on the configured scale; exact match when the range is unusable."""
    number_a = to_finite_number(value_a)
    number_b = to_finite_number(value_b)
    if number_a is None or number_b is None:
        return _exact_match(value_a, value_b)

    span = config.span if isinstance(config, NumericScaleConfig) else None
    if span is None:
        return _exact_match(number_a, number_b)

    distance = abs(number_a - number_b)
    if distance >= span:
        return 0.0
    return _clamp_unit(1.0 - distance / span)


def single_choice_similarity(value_a: Any, value_b: Any) -> float:
    return _exact_match(value_a, value_b)


def _as_selection(value: Any) -> FrozenSet[str]:
    if isinstance(value, (list, tuple, set, frozenset)):
        return frozenset(str(item) for item in value if item is not None)
    return frozenset([str(value)])


def checkbox_similarity(value_a: Any, value_b: Any) -> float:
    """Jaccard similarity of the selected options."""
    selected_a = _as_selection(value_a)
    selected_b = _as_selection(value_b)
    union = selected_a | selected_b

    # Both empty = vacuous agreement
    if not union:
        return 1.0

    return len(selected_a & selected_b) / len(union)


def _as_allocation(value: Any) -> Dict[str, float]:
    if not isinstance(value, dict):
        return {}
    allocation = {}
    for item, points in value.items():
        number = to_finite_number(points)
        allocation[str(item)] = number if number is not None else 0.0
    return allocation


def point_allocation_similarity(value_a: Any, value_b: Any) -> float:
    """Cosine similarity of the two allocation vectors over the union of items."""
    allocation_a = _as_allocation(value_a)
    allocation_b = _as_allocation(value_b)
    items = sorted(set(allocation_a) | set(allocation_b))

    dot = sum(allocation_a.get(item, 0.0) * allocation_b.get(item, 0.0) for item in items)
    magnitude_a = math.sqrt(sum(points * points for points in allocation_a.values()))
    magnitude_b = math.sqrt(sum(points * points for points in allocation_b.values()))

    if magnitude_a == 0 or magnitude_b == 0:
        return NEUTRAL_SIMILARITY

    return _clamp_unit(dot / (magnitude_a * magnitude_b))


def _as_ranking(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [str(item) for item in value if item is not None]


def _positions(ranking: List[str]) -> Dict[str, int]:
    positions = {}
    for index, item in enumerate(ranking):
        positions.setdefault(item, index)
    return positions


def ranking_similarity(value_a: Any, value_b: Any) -> float:
    """Kendall-tau over the items both rankings share, mapped from [-1, 1] to [0, 1]."""
    ranking_a = _as_ranking(value_a)
    ranking_b = _as_ranking(value_b)
    if not ranking_a or not ranking_b or len(ranking_a) != len(ranking_b):
        return NEUTRAL_SIMILARITY

    positions_a = _positions(ranking_a)
    positions_b = _positions(ranking_b)
    shared = sorted(set(positions_a) & set(positions_b), key=positions_a.get)

    concordant = 0
    discordant = 0
    for i, first in enumerate(shared):
        for second in shared[i + 1:]:
            order_a = positions_a[first] - positions_a[second]
            order_b = positions_b[first] - positions_b[second]
            if order_a * order_b > 0:
                concordant += 1
            else:
                discordant += 1

    total_pairs = concordant + discordant
    if total_pairs == 0:
        return NEUTRAL_SIMILARITY

    tau = (concordant - discordant) / total_pairs
    return _clamp_unit((tau + 1) / 2)


def calculate_similarity(question_type: Any, config: QuestionConfig, value_a: Any, value_b: Any) -> float:
    """
    Similarity between two answers to the same question.

    Args:
        question_type: Stored question type (enum member or raw string)
        config: Typed configuration from ``parse_question_config``
        value_a: First applicant's answer value
        value_b: Second applicant's answer value

    Returns:
        Value between 0 (no similarity) and 1 (perfect match)
    """
    qtype = QuestionType.from_value(question_type)

    if qtype is QuestionType.NUMBER_SCALE:
        return numeric_scale_similarity(config, value_a, value_b)

    if qtype in SINGLE_CHOICE_TYPES:
        return single_choice_similarity(value_a, value_b)

    if qtype is QuestionType.CHECKBOXES:
        return checkbox_similarity(value_a, value_b)

    if qtype is QuestionType.POINT_ALLOCATION:
        return point_allocation_similarity(value_a, value_b)

    if qtype is QuestionType.RANKING:
        return ranking_similarity(value_a, value_b)

    if qtype in FREE_TEXT_TYPES:
        # No semantic text comparison
        return NEUTRAL_SIMILARITY

    # AGE_RANGE and unknown types
    return NEUTRAL_SIMILARITY
