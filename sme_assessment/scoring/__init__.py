"""Assessment scoring package.

This module contains:
- A pure engine turning survey responses into theme and composite scores
- SQLAlchemy models for the persisted score rows
- Pydantic schemas for score output
- A service that loads active survey data, runs the engine and upserts results

The internal recompute endpoint in this package is gated by admin auth.
"""

from .engine import (
    ScoringResult,
    ScoreSummary,
    ThemeScoreResult,
    calculate_scores,
    effective_score,
    percentage,
    performance_band,
    theme_mean,
)
from .models import ThemeScore, AssessmentSummary
