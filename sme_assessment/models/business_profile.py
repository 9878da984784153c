from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sme_assessment.db.base import Base
from sme_assessment.utils.timezone import utc_now


class BusinessProfile(Base):
    __tablename__ = "business_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    business_name = Column(String(255), nullable=False)
    sector = Column(String(128), nullable=False)
    country = Column(String(128), nullable=False)
    city = Column(String(128), nullable=False)
    employee_count = Column(Integer, nullable=False, default=0)
    registration_type = Column(String(64), nullable=True)
    contact_email = Column(String(255), nullable=True)
    contact_phone = Column(String(64), nullable=True)

    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    updated_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)
    deleted_at = Column(DateTime, nullable=True)

    user = relationship("User", back_populates="business_profile", foreign_keys=[user_id])
