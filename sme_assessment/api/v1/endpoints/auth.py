import logging
from typing import Any
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sme_assessment import crud
from sme_assessment.api import deps
from sme_assessment.core import security
from sme_assessment.core.config import settings
from sme_assessment.models.user import User
from sme_assessment.schemas.user import (
    LoginRequest,
    LoginResponse,
    RefreshRequest,
    RegisterResponse,
    Token,
    User as UserSchema,
    UserCreate,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _issue_tokens(user: User) -> dict:
    return {
        "access_token": security.create_access_token(user.id, role=user.role),
        "refresh_token": security.create_refresh_token(user.id),
        "token_type": "bearer",
        "expires_in": settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    }


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    *,
    db: Session = Depends(deps.get_db),
    user_in: UserCreate,
) -> Any:
    """
    Create new user.
    """
    ok, reason = security.validate_password_strength(user_in.password)
    if not ok:
        raise HTTPException(status_code=400, detail=reason)

    if crud.user.get_by_email(db, email=user_in.email):
        raise HTTPException(status_code=409, detail="Email already registered")

    user = crud.user.create(db, obj_in=user_in)
    logger.info(f"Registered user {user.id}")
    tokens = _issue_tokens(user)
    return {
        **UserSchema.model_validate(user).model_dump(),
        "access_token": tokens["access_token"],
        "refresh_token": tokens["refresh_token"],
    }


@router.post("/login", response_model=LoginResponse)
def login(
    *,
    db: Session = Depends(deps.get_db),
    credentials: LoginRequest,
) -> Any:
    """
    Exchange email and password for an access/refresh token pair.
    """
    user = crud.user.authenticate(db, email=credentials.email, password=credentials.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid email or password")
    if not crud.user.is_active(user):
        raise HTTPException(status_code=403, detail="Account is deactivated")

    user = crud.user.record_login(db, db_obj=user)
    return {**_issue_tokens(user), "user": UserSchema.model_validate(user)}


@router.post("/refresh", response_model=Token)
def refresh_token(
    *,
    db: Session = Depends(deps.get_db),
    body: RefreshRequest,
) -> Any:
    """Refresh access token using a refresh token"""
    payload = security.decode_token(body.refresh_token)
    if not payload or payload.get("type") != "refresh":
        raise HTTPException(status_code=401, detail="Invalid refresh token")

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid refresh token")

    user = crud.user.get(db, id=user_id)
    if not user or not crud.user.is_active(user):
        raise HTTPException(status_code=401, detail="User not found")
    return _issue_tokens(user)


@router.post("/logout")
def logout(current_user: User = Depends(deps.get_current_active_user)) -> Any:
    # Tokens are stateless; clients discard them
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=UserSchema)
def read_current_user(current_user: User = Depends(deps.get_current_active_user)) -> Any:
    return current_user
