"""Default survey definition and an idempotent loader for it.

Each theme entry is ``(name, description, weight, questions)`` and each
question is ``(text, reverse_scored)``. Reverse-scored items are phrased so
that agreeing indicates a weakness.
"""

import logging
from typing import List, Sequence, Tuple

from sqlalchemy.orm import Session

from sme_assessment.models.survey import Question, Theme

logger = logging.getLogger(__name__)

QuestionDef = Tuple[str, bool]
ThemeDef = Tuple[str, str, float, Sequence[QuestionDef]]

DEFAULT_SURVEY: List[ThemeDef] = [
    (
        "Problem Identification and Market Need",
        "How well the business understands the problem it solves and who has it.",
        1.0,
        [
            ("My business has a clear problem it's trying to solve.", False),
            ("The problem affects a large population.", False),
            ("I have validated the problem with potential customers.", False),
            ("The problem is urgent and requires immediate attention.", False),
            ("My solution addresses the root cause of the problem.", False),
            ("I understand the problem better than my competitors.", False),
            ("The problem is likely to persist or grow over time.", False),
        ],
    ),
    (
        "Business Positioning and Target Market",
        "Clarity of the target market and how the business is positioned in it.",
        1.0,
        [
            ("My business targets end users directly (B2C).", False),
            ("I have clearly defined my target market.", False),
            ("I understand my customers' needs and preferences.", False),
            ("My target market is large enough to sustain growth.", False),
            ("I have identified my ideal customer profile.", False),
            ("My positioning is clear and differentiated.", False),
            ("I regularly gather feedback from my target market.", False),
        ],
    ),
    (
        "Financial Management",
        "Bookkeeping discipline, cash-flow control and access to finance.",
        1.5,
        [
            ("I keep up-to-date records of income and expenses.", False),
            ("I prepare a cash-flow forecast at least quarterly.", False),
            ("I separate business and personal finances.", False),
            ("I often struggle to pay suppliers on time.", True),
            ("I know the profit margin of each product or service.", False),
        ],
    ),
    (
        "Operations and Processes",
        "Repeatability and resilience of day-to-day operations.",
        1.0,
        [
            ("Key processes in my business are documented.", False),
            ("Work stops when I am not personally present.", True),
            ("I track a small set of operational performance indicators.", False),
            ("I review and improve processes regularly.", False),
        ],
    ),
]


def seed_survey(db: Session, survey: Sequence[ThemeDef] = DEFAULT_SURVEY) -> Tuple[int, int]:
    """
    Insert missing themes and questions; existing rows (matched by theme name
    and question text) are left untouched. Returns (themes_created, questions_created).
    """
    themes_created = 0
    questions_created = 0

    for theme_order, (name, description, weight, questions) in enumerate(survey, start=1):
        theme = db.query(Theme).filter(Theme.name == name).first()
        if theme is None:
            theme = Theme(name=name, description=description, weight=weight, order_index=theme_order)
            db.add(theme)
            db.flush()
            themes_created += 1

        existing_texts = {
            text for (text,) in db.query(Question.text).filter(Question.theme_id == theme.id).all()
        }
        for question_order, (text, reverse_scored) in enumerate(questions, start=1):
            if text in existing_texts:
                continue
            db.add(
                Question(
                    theme_id=theme.id,
                    text=text,
                    order_index=question_order,
                    reverse_scored=reverse_scored,
                )
            )
            questions_created += 1

    db.commit()
    logger.info(f"Survey seed: {themes_created} themes and {questions_created} questions created")
    return themes_created, questions_created
