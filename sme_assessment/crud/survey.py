from typing import List
from sqlalchemy.orm import Session, selectinload
from sme_assessment.models.survey import Theme, Question


class CRUDSurvey:
    def active_themes(self, db: Session) -> List[Theme]:
        return (
            db.query(Theme)
            .filter(Theme.is_active.is_(True))
            .order_by(Theme.order_index, Theme.id)
            .all()
        )

    def active_questions(self, db: Session) -> List[Question]:
        # Questions under a deactivated theme are not offered either
        return (
            db.query(Question)
            .join(Theme, Question.theme_id == Theme.id)
            .filter(Question.is_active.is_(True), Theme.is_active.is_(True))
            .order_by(Theme.order_index, Question.order_index, Question.id)
            .all()
        )

    def themes_with_questions(self, db: Session) -> List[dict]:
        """Active themes in display order, each with its active questions."""
        themes = (
            db.query(Theme)
            .options(selectinload(Theme.questions))
            .filter(Theme.is_active.is_(True))
            .order_by(Theme.order_index, Theme.id)
            .all()
        )
        return [
            {
                "id": t.id,
                "name": t.name,
                "description": t.description,
                "questions": [
                    {
                        "id": q.id,
                        "text": q.text,
                        "help_text": q.help_text,
                    }
                    for q in t.questions
                    if q.is_active
                ],
            }
            for t in themes
        ]


survey = CRUDSurvey()
