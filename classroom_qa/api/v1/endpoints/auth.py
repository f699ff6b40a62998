# classroom_qa/api/v1/endpoints/auth.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from classroom_qa.core.exceptions import raise_invalid_credentials, raise_user_not_found
from classroom_qa.core.security import authenticate_user, create_access_token, get_current_user
from classroom_qa.db.session import get_db
from classroom_qa.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
)
from classroom_qa.schemas.user import UserEnvelope, to_user_public
from classroom_qa.services import user_service

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register_user(payload: RegisterRequest, db: Session = Depends(get_db)):
    user = user_service.register_user(db, obj_in=payload)
    return AuthResponse(user=to_user_public(user), token=create_access_token(user))


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user = authenticate_user(db, payload.email, payload.password)
    if not user:
        # same answer for unknown email and wrong password
        raise_invalid_credentials()
    return AuthResponse(user=to_user_public(user), token=create_access_token(user))


@router.get("/me", response_model=UserEnvelope)
def read_me(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    user = user_service.get_user(db, current_user.id)
    if not user:
        raise_user_not_found()
    return UserEnvelope(user=to_user_public(user))


@router.put("/profile", response_model=UserEnvelope)
def update_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Students set their nickname and whether it is shown instead of "anonymous".
    """
    user = user_service.get_user(db, current_user.id)
    if not user:
        raise_user_not_found()
    user = user_service.update_profile(db, user=user, obj_in=payload)
    return UserEnvelope(user=to_user_public(user))
