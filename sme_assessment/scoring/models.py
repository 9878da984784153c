from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    DateTime,
    ForeignKey,
    Index,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from sme_assessment.db.base import Base
from sme_assessment.utils.timezone import utc_now


class ThemeScore(Base):
    __tablename__ = "theme_scores"

    id = Column(Integer, primary_key=True, index=True)
    assessment_id = Column(Integer, ForeignKey("assessments.id", ondelete="CASCADE"), nullable=False, index=True)
    theme_id = Column(Integer, ForeignKey("themes.id"), nullable=False)
    mean_score = Column(Float, nullable=False)
    percentage = Column(Float, nullable=False)
    performance_band = Column(String(32), nullable=True)

    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    theme = relationship("Theme")

    __table_args__ = (
        UniqueConstraint("assessment_id", "theme_id", name="uq_theme_scores_assessment_theme"),
        Index("idx_theme_scores_assessment_theme", "assessment_id", "theme_id"),
    )


class AssessmentSummary(Base):
    __tablename__ = "assessment_summaries"

    id = Column(Integer, primary_key=True, index=True)
    assessment_id = Column(Integer, ForeignKey("assessments.id", ondelete="CASCADE"), nullable=False, unique=True)
    composite_mean = Column(Float, nullable=False)
    composite_percentage = Column(Float, nullable=False)
    performance_band = Column(String(32), nullable=False)

    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)
