"""
Questionnaire seeding from the questionnaire markdown document.

Question lines look like ``12. How important is faith to you? `[SCALE:1-7]` ``;
the back-ticked annotation selects the question type and its options.
"""
import re
from dataclasses import dataclass
from typing import Any, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.database.models import QuestionnaireQuestion
from app.models.question_types import QuestionType
from app.utils.logger import get_logger

logger = get_logger(__name__)

ANNOTATION_PATTERN = re.compile(r"`\[([^\]]+)\]`")
QUESTION_LINE_PATTERN = re.compile(r"^(\d+)\.\s+(.+)$")
NUMBER_PREFIX_PATTERN = re.compile(r"^\d+\.\s*")
SCALE_PATTERN = re.compile(r"^SCALE:\s*(\d+)\s*-\s*(\d+)")

SIMPLE_TYPES = {
    "TEXT": QuestionType.TEXT,
    "TEXTAREA": QuestionType.TEXTAREA,
    "RICH_TEXT": QuestionType.RICH_TEXT,
    "DROPDOWN": QuestionType.DROPDOWN,
    "CHECKBOXES": QuestionType.CHECKBOXES,
    "AGE_RANGE": QuestionType.AGE_RANGE,
}
OPTION_LIST_TYPES = {
    "DROPDOWN:": QuestionType.DROPDOWN,
    "CHECKBOXES:": QuestionType.CHECKBOXES,
    "RADIO_7:": QuestionType.RADIO_7,
}


@dataclass
class ParsedQuestion:
    prompt: str
    type: QuestionType
    options: Optional[Any] = None


def _split_items(text: str) -> List[str]:
    return [item.strip() for item in text.split(",") if item.strip()]


def parse_annotation(line: str) -> ParsedQuestion:
    """Parse one question line into its prompt, type and options."""
    match = ANNOTATION_PATTERN.search(line)
    if not match:
        return ParsedQuestion(prompt=NUMBER_PREFIX_PATTERN.sub("", line).strip(), type=QuestionType.TEXT)

    annotation = match.group(1).strip()
    prompt = NUMBER_PREFIX_PATTERN.sub("", ANNOTATION_PATTERN.sub("", line, count=1)).strip()

    scale = SCALE_PATTERN.match(annotation)
    if scale:
        return ParsedQuestion(
            prompt=prompt,
            type=QuestionType.NUMBER_SCALE,
            options={"min": int(scale.group(1)), "max": int(scale.group(2)), "step": 1},
        )

    for prefix, question_type in OPTION_LIST_TYPES.items():
        if annotation.startswith(prefix):
            return ParsedQuestion(
                prompt=prompt,
                type=question_type,
                options=_split_items(annotation[len(prefix):]),
            )

    # POINT_ALLOCATION:total: item1, item2
    if annotation.startswith("POINT_ALLOCATION:"):
        total_text, separator, items_text = annotation[len("POINT_ALLOCATION:"):].partition(":")
        if separator:
            total_text = total_text.strip()
            return ParsedQuestion(
                prompt=prompt,
                type=QuestionType.POINT_ALLOCATION,
                options={
                    "items": _split_items(items_text),
                    "total": int(total_text) if total_text.isdigit() else 100,
                },
            )

    if annotation.startswith("RANKING:"):
        return ParsedQuestion(
            prompt=prompt,
            type=QuestionType.RANKING,
            options={"items": _split_items(annotation[len("RANKING:"):])},
        )

    return ParsedQuestion(prompt=prompt, type=SIMPLE_TYPES.get(annotation, QuestionType.TEXT))


def parse_questionnaire_markdown(content: str) -> List[ParsedQuestion]:
    """Every numbered question line in the document, in order."""
    questions = []
    for line in content.splitlines():
        match = QUESTION_LINE_PATTERN.match(line.strip())
        if match:
            questions.append(parse_annotation(match.group(2)))
    return questions


class QuestionnaireSeeder:
    """Inserts parsed questions that are not already in the questionnaire."""

    def __init__(self, db: Session):
        self.db = db

    def _existing_prompts(self) -> set:
        rows = (
            self.db.query(QuestionnaireQuestion.prompt)
            .filter(
                QuestionnaireQuestion.is_active.is_(True),
                QuestionnaireQuestion.deleted_at.is_(None),
            )
            .all()
        )
        return {prompt for (prompt,) in rows}

    def seed(self, questions: List[ParsedQuestion], weight: float = 1.0) -> int:
        """
        Seed questions, skipping prompts that already exist.

        Returns:
            Number of questions created
        """
        existing = self._existing_prompts()
        next_order = (self.db.query(func.max(QuestionnaireQuestion.order)).scalar() or 0) + 1
        created = 0

        try:
            for parsed in questions:
                if not parsed.prompt or parsed.prompt in existing:
                    continue
                self.db.add(QuestionnaireQuestion(
                    prompt=parsed.prompt,
                    type=parsed.type.value,
                    options=parsed.options,
                    ml_weight=weight,
                    order=next_order,
                ))
                existing.add(parsed.prompt)
                next_order += 1
                created += 1
            self.db.commit()
        except Exception as e:
            logger.error(f"Error seeding questionnaire: {e}")
            self.db.rollback()
            raise

        logger.info(f"Seeded {created} questionnaire questions ({len(questions) - created} skipped)")
        return created
