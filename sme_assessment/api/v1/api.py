from fastapi import APIRouter

from sme_assessment.api.v1.endpoints import auth
from sme_assessment.api.v1.endpoints import business_profiles
from sme_assessment.api.v1.endpoints import assessments
from sme_assessment.api.v1.endpoints import reports

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(business_profiles.router, prefix="/business-profiles", tags=["business-profiles"])
api_router.include_router(assessments.router, prefix="/assessments", tags=["assessments"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
