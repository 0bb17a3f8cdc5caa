# src/mini_social/api/endpoints/auth.py
"""Authentication endpoints for the Mini Social API."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from mini_social.api.dependencies import SessionDep
from mini_social.core.security import create_access_token
from mini_social.schemas.user import AuthResponse, LoginRequest, RegisterRequest
from mini_social.services.user_service import (
    EmailAlreadyRegisteredError,
    authenticate_user,
    register_user,
    to_auth_response,
)

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/register",
    summary="Register a new account",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
)
def register(payload: RegisterRequest, db: SessionDep) -> AuthResponse:
    """Create an account and return it with a fresh bearer token."""
    try:
        user = register_user(db, payload)
    except EmailAlreadyRegisteredError as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists",
        ) from err

    return to_auth_response(user, create_access_token(user.id))


@router.post(
    "/login",
    summary="Authenticate with email and password",
    status_code=status.HTTP_200_OK,
    response_model=AuthResponse,
)
def login(payload: LoginRequest, db: SessionDep) -> AuthResponse:
    """Verify credentials and issue a bearer token."""
    user = authenticate_user(db, payload.email, payload.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    return to_auth_response(user, create_access_token(user.id))
