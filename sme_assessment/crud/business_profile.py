from typing import Optional
from sqlalchemy.orm import Session
from sme_assessment.models.business_profile import BusinessProfile
from sme_assessment.schemas.business_profile import BusinessProfileCreate, BusinessProfileUpdate


class CRUDBusinessProfile:
    def get_by_user(self, db: Session, *, user_id: int) -> Optional[BusinessProfile]:
        return (
            db.query(BusinessProfile)
            .filter(BusinessProfile.user_id == user_id, BusinessProfile.deleted_at.is_(None))
            .first()
        )

    def create(self, db: Session, *, obj_in: BusinessProfileCreate, user_id: int) -> BusinessProfile:
        db_obj = BusinessProfile(
            **obj_in.model_dump(),
            user_id=user_id,
            created_by=user_id,
            updated_by=user_id,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update(self, db: Session, *, db_obj: BusinessProfile, obj_in: BusinessProfileUpdate, user_id: int) -> BusinessProfile:
        update_data = obj_in.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(db_obj, field, value)
        db_obj.updated_by = user_id

        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj


business_profile = CRUDBusinessProfile()
