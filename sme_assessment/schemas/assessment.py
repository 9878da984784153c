from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from sme_assessment.scoring.schemas import ScoreSummaryOut, ThemeScoreOut


class QuestionOut(BaseModel):
    id: int
    text: str
    help_text: Optional[str] = None


class ThemeWithQuestions(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    questions: List[QuestionOut] = []


class ResponseIn(BaseModel):
    question_id: int
    score: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None


class ResponsesUpdate(BaseModel):
    responses: List[ResponseIn] = Field(..., min_length=1)


class ResponsesProgress(BaseModel):
    id: int
    status: str
    completed_responses: int
    total_questions: int


class BusinessProfileRef(BaseModel):
    id: int
    name: str
    sector: str


class AssessmentCreated(BaseModel):
    id: int
    status: str
    started_at: datetime
    themes: List[ThemeWithQuestions]


class AssessmentDetail(AssessmentCreated):
    completed_at: Optional[datetime] = None
    business_profile: BusinessProfileRef


class AssessmentListItem(BaseModel):
    id: int
    status: str
    started_at: datetime
    completed_at: Optional[datetime] = None
    summary: Optional[ScoreSummaryOut] = None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class AssessmentList(BaseModel):
    data: List[AssessmentListItem]
    pagination: Pagination


class AssessmentSubmitted(BaseModel):
    id: int
    status: str
    completed_at: datetime
    summary: ScoreSummaryOut
    theme_scores: List[ThemeScoreOut]


class AnsweredQuestion(BaseModel):
    question_id: int
    question_text: str
    score: int
    comment: Optional[str] = None


class ThemeResponses(BaseModel):
    theme_id: int
    theme_name: str
    responses: List[AnsweredQuestion]


class AssessmentResults(BaseModel):
    id: int
    completed_at: Optional[datetime] = None
    business_profile: BusinessProfileRef
    summary: Optional[ScoreSummaryOut] = None
    theme_scores: List[ThemeScoreOut]
    responses: List[ThemeResponses]
