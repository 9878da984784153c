#!/usr/bin/env python3
"""
Load the default survey definition (themes and questions) into the database.

Safe to run repeatedly: rows that already exist are skipped.

Usage:
    python scripts/seed_survey.py
"""
import logging
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from sme_assessment.core.database_utils import get_db_session
from sme_assessment.survey_seed import seed_survey

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("seed_survey")


def main() -> int:
    try:
        with get_db_session() as db:
            themes, questions = seed_survey(db)
    except Exception as e:
        logger.error(f"Error seeding survey: {e}")
        return 1
    print(f"Survey seeded: {themes} new themes, {questions} new questions")
    return 0


if __name__ == "__main__":
    sys.exit(main())
