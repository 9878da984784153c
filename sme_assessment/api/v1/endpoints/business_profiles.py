from typing import Any
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sme_assessment import crud
from sme_assessment.api import deps
from sme_assessment.models.user import User
from sme_assessment.schemas.business_profile import (
    BusinessProfile,
    BusinessProfileCreate,
    BusinessProfileUpdate,
)

router = APIRouter()


@router.post("/", response_model=BusinessProfile, status_code=status.HTTP_201_CREATED)
def create_business_profile(
    *,
    db: Session = Depends(deps.get_db),
    profile_in: BusinessProfileCreate,
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    if crud.business_profile.get_by_user(db, user_id=current_user.id):
        raise HTTPException(status_code=409, detail="Business profile already exists")
    return crud.business_profile.create(db, obj_in=profile_in, user_id=current_user.id)


@router.get("/me", response_model=BusinessProfile)
def read_business_profile(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    profile = crud.business_profile.get_by_user(db, user_id=current_user.id)
    if not profile:
        raise HTTPException(status_code=404, detail="Business profile not found")
    return profile


@router.put("/me", response_model=BusinessProfile)
def update_business_profile(
    *,
    db: Session = Depends(deps.get_db),
    profile_in: BusinessProfileUpdate,
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    if not profile_in.model_dump(exclude_unset=True):
        raise HTTPException(status_code=400, detail="No fields to update")
    profile = crud.business_profile.get_by_user(db, user_id=current_user.id)
    if not profile:
        raise HTTPException(status_code=404, detail="Business profile not found")
    return crud.business_profile.update(db, db_obj=profile, obj_in=profile_in, user_id=current_user.id)
