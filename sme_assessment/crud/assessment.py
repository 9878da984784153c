from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from sme_assessment.models.assessment import Assessment, Response, STATUS_DRAFT, STATUS_IN_PROGRESS
from sme_assessment.schemas.assessment import ResponseIn
from sme_assessment.utils.timezone import utc_now


class CRUDAssessment:
    def create(self, db: Session, *, user_id: int, business_profile_id: int) -> Assessment:
        db_obj = Assessment(
            user_id=user_id,
            business_profile_id=business_profile_id,
            status=STATUS_DRAFT,
            created_by=user_id,
            updated_by=user_id,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_for_user(self, db: Session, *, id: int, user_id: int) -> Optional[Assessment]:
        return (
            db.query(Assessment)
            .filter(
                Assessment.id == id,
                Assessment.user_id == user_id,
                Assessment.deleted_at.is_(None),
            )
            .first()
        )

    def list_for_user(
        self, db: Session, *, user_id: int, status: Optional[str] = None, skip: int = 0, limit: int = 20
    ) -> Tuple[List[Assessment], int]:
        query = db.query(Assessment).filter(
            Assessment.user_id == user_id, Assessment.deleted_at.is_(None)
        )
        if status:
            query = query.filter(Assessment.status == status)
        total = query.count()
        rows = (
            query.order_by(Assessment.started_at.desc(), Assessment.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        return rows, total

    def upsert_responses(
        self, db: Session, *, db_obj: Assessment, responses: List[ResponseIn], user_id: int
    ) -> int:
        """Insert or overwrite one response per question; returns the stored response count."""
        existing = {
            r.question_id: r
            for r in db.query(Response).filter(Response.assessment_id == db_obj.id).all()
        }
        for item in responses:
            row = existing.get(item.question_id)
            if row is None:
                row = Response(assessment_id=db_obj.id, question_id=item.question_id)
                existing[item.question_id] = row
            row.score = item.score
            row.comment = item.comment
            db.add(row)

        db_obj.status = STATUS_IN_PROGRESS
        db_obj.updated_by = user_id
        db.add(db_obj)
        db.commit()
        return len(existing)

    def responses(self, db: Session, *, assessment_id: int) -> List[Response]:
        return db.query(Response).filter(Response.assessment_id == assessment_id).all()

    def soft_delete(self, db: Session, *, db_obj: Assessment, user_id: int) -> Assessment:
        db_obj.deleted_at = utc_now()
        db_obj.updated_by = user_id
        db.add(db_obj)
        db.commit()
        return db_obj


assessment = CRUDAssessment()
