#!/usr/bin/env python3
"""
Questionnaire seeding CLI.

Reads the questionnaire markdown document and inserts any questions that are
not already in the database.

Usage: python scripts/seed_questionnaire.py questions.md [--weight 1.0] [--dry-run]
"""

import sys
import argparse
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.database.connection import SessionLocal, init_db
from app.services.questionnaire_seeder import QuestionnaireSeeder, parse_questionnaire_markdown
from app.utils.logger import get_logger

logger = get_logger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Seed questionnaire questions from markdown")
    parser.add_argument("path", type=Path, help="Questionnaire markdown file")
    parser.add_argument("--weight", type=float, default=1.0, help="Importance weight for new questions")
    parser.add_argument("--dry-run", action="store_true", help="Parse and report without writing")
    args = parser.parse_args(argv)

    if not args.path.exists():
        logger.error(f"File not found: {args.path}")
        return 1
    if args.weight < 0:
        logger.error("--weight must not be negative")
        return 1

    questions = parse_questionnaire_markdown(args.path.read_text(encoding="utf-8"))
    logger.info(f"Parsed {len(questions)} questions from {args.path}")

    if args.dry_run:
        for question in questions:
            logger.info(f"[{question.type.value}] {question.prompt}")
        return 0

    init_db()
    db = SessionLocal()
    try:
        created = QuestionnaireSeeder(db).seed(questions, weight=args.weight)
    finally:
        db.close()

    logger.info(f"Created {created} questions")
    return 0


if __name__ == "__main__":
    sys.exit(main())
