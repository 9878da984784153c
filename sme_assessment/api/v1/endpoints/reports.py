import io
import logging
from datetime import timedelta
from typing import Any
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
from sme_assessment import crud
from sme_assessment.api import deps
from sme_assessment.core.config import settings
from sme_assessment.models.assessment import STATUS_COMPLETED
from sme_assessment.models.report import PdfReport
from sme_assessment.models.user import User
from sme_assessment.scoring.services import AssessmentScoringService
from sme_assessment.services.pdf_report import ReportData, render_assessment_pdf
from sme_assessment.utils.timezone import utc_now

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{assessment_id}/pdf")
def download_pdf_report(
    assessment_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    """Generate and download the PDF report of a completed assessment."""
    assessment = crud.assessment.get_for_user(db, id=assessment_id, user_id=current_user.id)
    if not assessment or assessment.status != STATUS_COMPLETED:
        raise HTTPException(status_code=404, detail="Assessment not found or not completed")

    svc = AssessmentScoringService(db)
    summary = svc.get_summary(assessment.id)
    if summary is None:
        raise HTTPException(status_code=400, detail="Assessment results not available")

    profile = assessment.business_profile
    data = ReportData(
        business_name=profile.business_name,
        sector=profile.sector,
        completed_at=assessment.completed_at,
        summary={
            "composite_mean": summary.composite_mean,
            "composite_percentage": summary.composite_percentage,
            "performance_band": summary.performance_band,
        },
        theme_scores=svc.get_theme_scores(assessment.id),
    )

    try:
        pdf_bytes = render_assessment_pdf(data)
    except Exception as exc:
        logger.error(f"PDF rendering failed for assessment {assessment_id}: {exc}")
        raise HTTPException(status_code=500, detail="Unable to generate PDF right now.") from exc

    filename = f"assessment-report-{assessment_id}.pdf"
    db.add(
        PdfReport(
            assessment_id=assessment.id,
            filename=filename,
            file_size=len(pdf_bytes),
            generated_by=current_user.id,
            expires_at=utc_now() + timedelta(days=settings.REPORT_EXPIRY_DAYS),
        )
    )
    db.commit()

    headers = {"Content-Disposition": f'attachment; filename="{filename}"'}
    return StreamingResponse(io.BytesIO(pdf_bytes), media_type="application/pdf", headers=headers)
