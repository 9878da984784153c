from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from sme_assessment.api import deps
from sme_assessment.models.assessment import Assessment, STATUS_COMPLETED
from .services import AssessmentScoringService
from .schemas import RecomputeResult, ScoreSummaryOut


router = APIRouter(prefix="/internal/scoring", tags=["scoring-internal"])


@router.post("/recompute", response_model=RecomputeResult)
def recompute_assessment(
    assessment_id: int = Query(..., ge=1),
    db: Session = Depends(deps.get_db),
    _: Any = Depends(deps.get_current_active_admin),
):
    """Re-score a completed assessment against the current survey definition."""
    assessment = (
        db.query(Assessment)
        .filter(Assessment.id == assessment_id, Assessment.deleted_at.is_(None))
        .first()
    )
    if not assessment or assessment.status != STATUS_COMPLETED:
        raise HTTPException(status_code=404, detail="Assessment not found or not completed")

    svc = AssessmentScoringService(db)
    _, result = svc.score_assessment(
        assessment_id, require_complete=False, mark_completed=False
    )
    return RecomputeResult(
        assessment_id=assessment_id,
        summary=ScoreSummaryOut(**result.to_dict()["summary"]),
        theme_scores=len(result.theme_scores),
    )
