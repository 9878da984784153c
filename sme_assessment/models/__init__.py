from .user import User
from .business_profile import BusinessProfile
from .survey import Theme, Question
from .assessment import Assessment, Response
from .report import PdfReport
from sme_assessment.scoring.models import ThemeScore, AssessmentSummary

__all__ = [
    "User", "BusinessProfile", "Theme", "Question", "Assessment", "Response",
    "PdfReport", "ThemeScore", "AssessmentSummary",
]
