from typing import Optional
from pydantic import BaseModel


class ThemeScoreOut(BaseModel):
    theme_id: int
    theme_name: Optional[str] = None
    mean_score: float
    percentage: float
    performance_band: Optional[str] = None


class ScoreSummaryOut(BaseModel):
    composite_mean: Optional[float] = None
    composite_percentage: Optional[float] = None
    performance_band: Optional[str] = None

    class Config:
        from_attributes = True


class RecomputeResult(BaseModel):
    assessment_id: int
    summary: ScoreSummaryOut
    theme_scores: int
