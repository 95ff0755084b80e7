"""
Questionnaire question types and their typed configuration.

Each question stores a loosely-typed ``options`` JSON blob whose shape
depends on the question type. ``parse_question_config`` turns that blob into
one of the config variants below so similarity rules work with well-typed
fields instead of inspecting raw JSON.
"""
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union


class QuestionType(str, Enum):
    NUMBER_SCALE = "NUMBER_SCALE"
    DROPDOWN = "DROPDOWN"
    RADIO_7 = "RADIO_7"
    CHECKBOXES = "CHECKBOXES"
    TEXT = "TEXT"
    TEXTAREA = "TEXTAREA"
    RICH_TEXT = "RICH_TEXT"
    POINT_ALLOCATION = "POINT_ALLOCATION"
    RANKING = "RANKING"
    AGE_RANGE = "AGE_RANGE"

    @classmethod
    def from_value(cls, value: Any) -> Optional["QuestionType"]:
        """Return the matching type, or None for values this service does not know."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            return None


SINGLE_CHOICE_TYPES = frozenset({QuestionType.DROPDOWN, QuestionType.RADIO_7})
FREE_TEXT_TYPES = frozenset({QuestionType.TEXT, QuestionType.TEXTAREA, QuestionType.RICH_TEXT})


@dataclass(frozen=True)
class NumericScaleConfig:
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None

    @property
    def span(self) -> Optional[float]:
        """Width of the configured range, or None when it is missing or degenerate."""
        if self.min is None or self.max is None or self.max <= self.min:
            return None
        return self.max - self.min


@dataclass(frozen=True)
class ChoiceConfig:
    options: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AllocationConfig:
    items: Tuple[str, ...] = ()
    total: float = 100.0


@dataclass(frozen=True)
class RankingConfig:
    items: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AgeRangeConfig:
    min: Optional[float] = None
    max: Optional[float] = None


@dataclass(frozen=True)
class TextConfig:
    pass


@dataclass(frozen=True)
class UnknownConfig:
    raw: Any = field(default=None, compare=False)


QuestionConfig = Union[
    NumericScaleConfig,
    ChoiceConfig,
    AllocationConfig,
    RankingConfig,
    AgeRangeConfig,
    TextConfig,
    UnknownConfig,
]


def to_finite_number(value: Any) -> Optional[float]:
    """Coerce ints, floats and numeric strings to a finite float; anything else is None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _string_items(value: Any) -> Tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(str(item) for item in value if item is not None)


def _as_dict(raw_options: Any) -> Dict[str, Any]:
    return raw_options if isinstance(raw_options, dict) else {}


def parse_question_config(question_type: Any, raw_options: Any) -> QuestionConfig:
    """
    Build the typed configuration for a question.

    Never raises: a blob with the wrong shape yields a config with missing
    fields, which the similarity rules handle through their fallbacks.
    """
    qtype = QuestionType.from_value(question_type)
    options = _as_dict(raw_options)

    if qtype is QuestionType.NUMBER_SCALE:
        return NumericScaleConfig(
            min=to_finite_number(options.get("min")),
            max=to_finite_number(options.get("max")),
            step=to_finite_number(options.get("step")),
        )

    if qtype in SINGLE_CHOICE_TYPES or qtype is QuestionType.CHECKBOXES:
        # Choice options are stored either as a bare list or as {"options": [...]}
        if isinstance(raw_options, (list, tuple)):
            return ChoiceConfig(options=_string_items(raw_options))
        return ChoiceConfig(options=_string_items(options.get("options")))

    if qtype is QuestionType.POINT_ALLOCATION:
        total = to_finite_number(options.get("total"))
        return AllocationConfig(
            items=_string_items(options.get("items")),
            total=total if total is not None else 100.0,
        )

    if qtype is QuestionType.RANKING:
        return RankingConfig(items=_string_items(options.get("items")))

    if qtype is QuestionType.AGE_RANGE:
        return AgeRangeConfig(
            min=to_finite_number(options.get("min")),
            max=to_finite_number(options.get("max")),
        )

    if qtype in FREE_TEXT_TYPES:
        return TextConfig()

    return UnknownConfig(raw=raw_options)
