# src/mini_social/api/endpoints/users.py
"""User profile endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from mini_social.api.dependencies import CurrentUserDep, SessionDep
from mini_social.schemas.user import UserResponse
from mini_social.services.user_service import get_user, to_user_response

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}", response_model=UserResponse)
def get_user_profile(
    user_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> UserResponse:
    """Return a user's public profile."""
    user = get_user(db, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return to_user_response(user)
