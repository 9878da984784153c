from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass

from sqlalchemy.orm import Session

from sme_assessment import crud
from sme_assessment.core.exceptions import NotFoundError, ValidationFailedError
from sme_assessment.models.assessment import Assessment, STATUS_COMPLETED
from sme_assessment.models.survey import Theme
from sme_assessment.utils.timezone import utc_now
from .models import ThemeScore, AssessmentSummary
from .engine import ScoringResult, calculate_scores, performance_band

logger = logging.getLogger(__name__)


@dataclass
class ScoringInputs:
    responses: List[Any]
    questions: List[Any]
    themes: List[Theme]


class AssessmentScoringService:
    def __init__(self, db: Session):
        self.db = db

    def load_inputs(self, assessment_id: int) -> ScoringInputs:
        return ScoringInputs(
            responses=crud.assessment.responses(self.db, assessment_id=assessment_id),
            questions=crud.survey.active_questions(self.db),
            themes=crud.survey.active_themes(self.db),
        )

    def _lock_assessment(self, assessment_id: int) -> Assessment:
        # Serialises concurrent submissions of the same assessment (no-op on SQLite)
        assessment = (
            self.db.query(Assessment)
            .filter(Assessment.id == assessment_id, Assessment.deleted_at.is_(None))
            .with_for_update()
            .first()
        )
        if assessment is None:
            raise NotFoundError("Assessment not found")
        return assessment

    # High-level compute API
    def score_assessment(
        self,
        assessment_id: int,
        *,
        user_id: Optional[int] = None,
        require_complete: bool = True,
        mark_completed: bool = True,
    ) -> Tuple[Assessment, ScoringResult]:
        """
        Score an assessment and persist theme scores and summary in one transaction.

        Raises ValidationFailedError when responses are missing (if
        ``require_complete``) or when nothing could be scored.
        """
        try:
            assessment = self._lock_assessment(assessment_id)
            inputs = self.load_inputs(assessment_id)

            total_questions = len(inputs.questions)
            if require_complete and len(inputs.responses) < total_questions:
                missing = total_questions - len(inputs.responses)
                raise ValidationFailedError(
                    "Incomplete assessment",
                    details=[{"field": "responses", "message": f"Missing {missing} responses"}],
                )

            result = calculate_scores(inputs.responses, inputs.questions, inputs.themes)
            if result.summary.composite_mean is None:
                raise ValidationFailedError("Assessment has no scorable responses")

            self._upsert_theme_scores(assessment_id, result)
            self._upsert_summary(assessment_id, result)

            if mark_completed:
                assessment.status = STATUS_COMPLETED
                assessment.completed_at = utc_now()
            if user_id is not None:
                assessment.updated_by = user_id
            self.db.add(assessment)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(assessment)
        logger.info(
            f"Scored assessment {assessment_id}: composite={result.summary.composite_mean} "
            f"band={result.summary.performance_band} themes={len(result.theme_scores)}"
        )
        return assessment, result

    def _upsert_theme_scores(self, assessment_id: int, result: ScoringResult) -> None:
        existing = {
            row.theme_id: row
            for row in self.db.query(ThemeScore).filter(ThemeScore.assessment_id == assessment_id).all()
        }
        scored_theme_ids = set()
        for ts in result.theme_scores:
            scored_theme_ids.add(ts.theme_id)
            row = existing.get(ts.theme_id)
            if row is None:
                row = ThemeScore(assessment_id=assessment_id, theme_id=ts.theme_id)
            row.mean_score = ts.mean_score
            row.percentage = ts.percentage
            row.performance_band = performance_band(ts.mean_score)
            self.db.add(row)

        # Drop rows for themes that are no longer scored
        for theme_id, row in existing.items():
            if theme_id not in scored_theme_ids:
                self.db.delete(row)

    def _upsert_summary(self, assessment_id: int, result: ScoringResult) -> None:
        summary = (
            self.db.query(AssessmentSummary)
            .filter(AssessmentSummary.assessment_id == assessment_id)
            .first()
        )
        if summary is None:
            summary = AssessmentSummary(assessment_id=assessment_id)
        summary.composite_mean = result.summary.composite_mean
        summary.composite_percentage = result.summary.composite_percentage
        summary.performance_band = result.summary.performance_band
        self.db.add(summary)

    # Read side
    def get_summary(self, assessment_id: int) -> Optional[AssessmentSummary]:
        return (
            self.db.query(AssessmentSummary)
            .filter(AssessmentSummary.assessment_id == assessment_id)
            .first()
        )

    def get_theme_scores(self, assessment_id: int) -> List[Dict[str, Any]]:
        """Stored theme scores in the themes' display order."""
        rows = (
            self.db.query(ThemeScore, Theme)
            .join(Theme, ThemeScore.theme_id == Theme.id)
            .filter(ThemeScore.assessment_id == assessment_id)
            .order_by(Theme.order_index, Theme.id)
            .all()
        )
        return [
            {
                "theme_id": ts.theme_id,
                "theme_name": theme.name,
                "mean_score": ts.mean_score,
                "percentage": ts.percentage,
                "performance_band": ts.performance_band,
            }
            for ts, theme in rows
        ]
