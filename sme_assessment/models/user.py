from sqlalchemy import Column, Integer, String, DateTime, Boolean
from sqlalchemy.orm import relationship
from sme_assessment.db.base import Base
from sme_assessment.utils.timezone import utc_now


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="user")  # user | admin
    is_active = Column(Boolean, nullable=False, default=True)
    email_verified_at = Column(DateTime, nullable=True)
    last_login_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)
    deleted_at = Column(DateTime, nullable=True)

    # Relationships
    business_profile = relationship(
        "BusinessProfile", back_populates="user", uselist=False, foreign_keys="BusinessProfile.user_id"
    )
    assessments = relationship("Assessment", back_populates="user", foreign_keys="Assessment.user_id")

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
