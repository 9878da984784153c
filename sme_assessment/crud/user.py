from typing import Optional
from sqlalchemy.orm import Session
from sme_assessment.core.security import get_password_hash, verify_password
from sme_assessment.models.user import User
from sme_assessment.schemas.user import UserCreate
from sme_assessment.utils.timezone import utc_now


class CRUDUser:
    def create(self, db: Session, *, obj_in: UserCreate, role: str = "user") -> User:
        db_obj = User(
            email=obj_in.email.lower(),
            hashed_password=get_password_hash(obj_in.password),
            full_name=obj_in.full_name.strip(),
            role=role,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get(self, db: Session, id: int) -> Optional[User]:
        return db.query(User).filter(User.id == id, User.deleted_at.is_(None)).first()

    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return (
            db.query(User)
            .filter(User.email == email.lower(), User.deleted_at.is_(None))
            .first()
        )

    def authenticate(self, db: Session, *, email: str, password: str) -> Optional[User]:
        user = self.get_by_email(db, email=email)
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    def record_login(self, db: Session, *, db_obj: User) -> User:
        db_obj.last_login_at = utc_now()
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def is_active(self, user: User) -> bool:
        return user.is_active

    def is_admin(self, user: User) -> bool:
        return user.is_admin


# Create instance that can be imported directly
user = CRUDUser()
