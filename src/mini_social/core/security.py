"""Password digests and signed session tokens."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from werkzeug.security import check_password_hash, generate_password_hash

from mini_social.core.settings import settings


class InvalidTokenError(ValueError):
    """Raised when a session token fails signature, expiry or claim checks."""


def hash_password(password: str) -> str:
    """Return a salted one-way digest of ``password``."""
    return generate_password_hash(password)


def verify_password(password: str, digest: str) -> bool:
    """Return True if ``password`` matches the stored ``digest``."""
    return check_password_hash(digest, password)


def create_access_token(user_id: int, *, expires_delta: timedelta | None = None) -> str:
    """Issue a signed token for ``user_id``.

    Args:
        user_id: Identifier stored in the ``sub`` claim.
        expires_delta: Lifetime override; defaults to the configured lifetime
            (seven days).

    Returns:
        Encoded JWT string.
    """
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    now = datetime.now(UTC)
    claims: dict[str, object] = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + lifetime,
    }
    encoded_jwt: str = jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> int:
    """Verify ``token`` and return the user id it was issued for.

    Raises:
        InvalidTokenError: If the signature is invalid, the token has expired,
            or the ``sub`` claim is missing or not a user id.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as err:
        raise InvalidTokenError(str(err)) from err

    subject = payload.get("sub")
    if subject is None:
        raise InvalidTokenError("Token has no subject")
    try:
        return int(subject)
    except (TypeError, ValueError) as err:
        raise InvalidTokenError("Token subject is not a user id") from err
