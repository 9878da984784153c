import logging
import math
from typing import Any, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from sme_assessment import crud
from sme_assessment.api import deps
from sme_assessment.core.exceptions import ConflictError, ValidationFailedError
from sme_assessment.models.assessment import Assessment, ASSESSMENT_STATUSES, STATUS_COMPLETED
from sme_assessment.models.assessment import Response as ResponseRow
from sme_assessment.models.survey import Question, Theme
from sme_assessment.models.user import User
from sme_assessment.schemas import assessment as schemas
from sme_assessment.scoring.models import AssessmentSummary
from sme_assessment.scoring.schemas import ScoreSummaryOut
from sme_assessment.scoring.services import AssessmentScoringService

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_owned_assessment(db: Session, assessment_id: int, user: User) -> Assessment:
    assessment = crud.assessment.get_for_user(db, id=assessment_id, user_id=user.id)
    if not assessment:
        raise HTTPException(status_code=404, detail="Assessment not found")
    return assessment


def _get_completed_assessment(db: Session, assessment_id: int, user: User) -> Assessment:
    assessment = crud.assessment.get_for_user(db, id=assessment_id, user_id=user.id)
    if not assessment or assessment.status != STATUS_COMPLETED:
        raise HTTPException(status_code=404, detail="Assessment not found or not completed")
    return assessment


def _profile_ref(assessment: Assessment) -> dict:
    profile = assessment.business_profile
    return {"id": profile.id, "name": profile.business_name, "sector": profile.sector}


def _summary_out(summary: Optional[AssessmentSummary]) -> Optional[ScoreSummaryOut]:
    if summary is None:
        return None
    return ScoreSummaryOut.model_validate(summary)


@router.post("/", response_model=schemas.AssessmentCreated, status_code=status.HTTP_201_CREATED)
def create_assessment(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    profile = crud.business_profile.get_by_user(db, user_id=current_user.id)
    if not profile:
        raise ValidationFailedError("Business profile required before creating assessment")

    assessment = crud.assessment.create(db, user_id=current_user.id, business_profile_id=profile.id)
    logger.info(f"User {current_user.id} started assessment {assessment.id}")
    return {
        "id": assessment.id,
        "status": assessment.status,
        "started_at": assessment.started_at,
        "themes": crud.survey.themes_with_questions(db),
    }


@router.get("/", response_model=schemas.AssessmentList)
def list_assessments(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status_filter: Optional[str] = Query(None, alias="status"),
) -> Any:
    if status_filter and status_filter not in ASSESSMENT_STATUSES:
        raise ValidationFailedError(f"Unknown status '{status_filter}'")

    rows, total = crud.assessment.list_for_user(
        db, user_id=current_user.id, status=status_filter, skip=(page - 1) * limit, limit=limit
    )
    summaries = {}
    if rows:
        summaries = {
            s.assessment_id: s
            for s in db.query(AssessmentSummary)
            .filter(AssessmentSummary.assessment_id.in_([a.id for a in rows]))
            .all()
        }

    return {
        "data": [
            {
                "id": a.id,
                "status": a.status,
                "started_at": a.started_at,
                "completed_at": a.completed_at,
                "summary": _summary_out(summaries.get(a.id)),
            }
            for a in rows
        ],
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "total_pages": math.ceil(total / limit),
            "has_next": page * limit < total,
            "has_prev": page > 1,
        },
    }


@router.get("/{assessment_id}", response_model=schemas.AssessmentDetail)
def read_assessment(
    assessment_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    assessment = _get_owned_assessment(db, assessment_id, current_user)
    return {
        "id": assessment.id,
        "status": assessment.status,
        "started_at": assessment.started_at,
        "completed_at": assessment.completed_at,
        "business_profile": _profile_ref(assessment),
        "themes": crud.survey.themes_with_questions(db),
    }


@router.put("/{assessment_id}/responses", response_model=schemas.ResponsesProgress)
def save_responses(
    assessment_id: int,
    body: schemas.ResponsesUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    assessment = _get_owned_assessment(db, assessment_id, current_user)
    if assessment.status == STATUS_COMPLETED:
        raise ConflictError("Completed assessments cannot be modified")

    active_ids = {q.id for q in crud.survey.active_questions(db)}
    unknown = sorted({r.question_id for r in body.responses} - active_ids)
    if unknown:
        raise ValidationFailedError(
            "Validation failed",
            details=[{"field": "question_id", "message": f"Unknown or inactive question {qid}"} for qid in unknown],
        )

    completed = crud.assessment.upsert_responses(
        db, db_obj=assessment, responses=body.responses, user_id=current_user.id
    )
    return {
        "id": assessment.id,
        "status": assessment.status,
        "completed_responses": completed,
        "total_questions": len(active_ids),
    }


@router.post("/{assessment_id}/submit", response_model=schemas.AssessmentSubmitted)
def submit_assessment(
    assessment_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    _get_owned_assessment(db, assessment_id, current_user)

    svc = AssessmentScoringService(db)
    assessment, result = svc.score_assessment(assessment_id, user_id=current_user.id)

    return {
        "id": assessment.id,
        "status": assessment.status,
        "completed_at": assessment.completed_at,
        "summary": result.to_dict()["summary"],
        "theme_scores": svc.get_theme_scores(assessment.id),
    }


@router.get("/{assessment_id}/results", response_model=schemas.AssessmentResults)
def read_results(
    assessment_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    assessment = _get_completed_assessment(db, assessment_id, current_user)
    svc = AssessmentScoringService(db)

    rows = (
        db.query(ResponseRow, Question, Theme)
        .join(Question, ResponseRow.question_id == Question.id)
        .join(Theme, Question.theme_id == Theme.id)
        .filter(ResponseRow.assessment_id == assessment.id)
        .order_by(Theme.order_index, Question.order_index, Question.id)
        .all()
    )
    grouped = {}
    for response, question, theme in rows:
        group = grouped.setdefault(
            theme.id, {"theme_id": theme.id, "theme_name": theme.name, "responses": []}
        )
        group["responses"].append(
            {
                "question_id": question.id,
                "question_text": question.text,
                "score": response.score,
                "comment": response.comment,
            }
        )

    return {
        "id": assessment.id,
        "completed_at": assessment.completed_at,
        "business_profile": _profile_ref(assessment),
        "summary": _summary_out(svc.get_summary(assessment.id)),
        "theme_scores": svc.get_theme_scores(assessment.id),
        "responses": list(grouped.values()),
    }


@router.delete("/{assessment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_assessment(
    assessment_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> None:
    assessment = _get_owned_assessment(db, assessment_id, current_user)
    crud.assessment.soft_delete(db, db_obj=assessment, user_id=current_user.id)
    logger.info(f"User {current_user.id} deleted assessment {assessment_id}")
