"""Shared API dependencies for authentication and common functionality."""

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from mini_social.core.security import InvalidTokenError, decode_access_token
from mini_social.core.settings import settings
from mini_social.db.session import get_db
from mini_social.models import User
from mini_social.services.media import ImageHostClient, UploadFailedError, get_media_uploader
from mini_social.services.rate_limit import RateLimitService, get_rate_limiter
from mini_social.services.user_service import get_user

logger = logging.getLogger(__name__)

# HTTP Bearer scheme; missing credentials are handled below so they map to 401.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _resolve_user(credentials: HTTPAuthorizationCredentials, db: Session) -> User:
    try:
        user_id = decode_access_token(credentials.credentials)
    except InvalidTokenError as err:
        logger.debug("Rejected bearer token: %s", err)
        raise _unauthorized("Token invalid") from err

    user = get_user(db, user_id)
    if user is None:
        raise _unauthorized("User not found")
    return user


def get_current_user(credentials: CredentialsDep, db: SessionDep) -> User:
    """Get the current authenticated user from the bearer token.

    Raises:
        HTTPException: 401 if the header is missing or malformed, the token
            fails verification, or the user no longer exists.
    """
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Not authorized")
    return _resolve_user(credentials, db)


def get_optional_user(credentials: CredentialsDep, db: SessionDep) -> User | None:
    """Like :func:`get_current_user` but anonymous callers yield ``None``.

    A token that is presented must still be valid.
    """
    if credentials is None or not credentials.credentials:
        return None
    return _resolve_user(credentials, db)


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]
MediaUploaderDep = Annotated[ImageHostClient, Depends(get_media_uploader)]
RateLimiterDep = Annotated[RateLimitService, Depends(get_rate_limiter)]


def enforce_rate_limit(request: Request, limiter: RateLimiterDep) -> None:
    """Reject the request with 429 once its client exhausts the current window."""
    if not settings.rate_limit_enabled:
        return
    client_key = request.client.host if request.client else "anonymous"
    decision = limiter.hit(client_key)
    if not decision.allowed:
        logger.info("Rate limit exceeded for %s", client_key)
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many requests, please try again later",
            headers={"Retry-After": str(decision.retry_after)},
        )


async def upload_inline_image(uploader: ImageHostClient, image_base64: str | None) -> str:
    """Upload an optional inline image, returning ``""`` when there is none.

    Raises:
        HTTPException: 400 carrying the upstream detail if the upload fails.
    """
    if not image_base64:
        return ""
    try:
        return await uploader.upload(image_base64)
    except UploadFailedError as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Upload failed: {err.detail}",
        ) from err
