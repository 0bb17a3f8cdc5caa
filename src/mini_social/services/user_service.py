"""Registration, credential checks and user lookups."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mini_social.core import security
from mini_social.models import User
from mini_social.schemas.user import AuthResponse, RegisterRequest, UserResponse

__all__ = [
    "EmailAlreadyRegisteredError",
    "authenticate_user",
    "get_user",
    "get_user_by_email",
    "register_user",
    "to_auth_response",
    "to_user_response",
]


class EmailAlreadyRegisteredError(ValueError):
    """Raised when registering an email that already has an account."""


def get_user(db: Session, user_id: int) -> User | None:
    """Return a single user by primary key."""
    return db.get(User, user_id)


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.scalars(select(User).where(User.email == email)).first()


def register_user(db: Session, payload: RegisterRequest) -> User:
    """Persist a new user with a hashed password.

    Raises:
        EmailAlreadyRegisteredError: If the email is taken, including when a
            concurrent registration wins the unique constraint.
    """
    if get_user_by_email(db, payload.email) is not None:
        raise EmailAlreadyRegisteredError(payload.email)

    user = User(
        firstname=payload.firstname,
        lastname=payload.lastname,
        email=payload.email,
        password_hash=security.hash_password(payload.password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise EmailAlreadyRegisteredError(payload.email) from err
    db.refresh(user)
    return user


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Return the user if ``password`` matches the digest stored for ``email``."""
    user = get_user_by_email(db, email)
    if user is None or not security.verify_password(password, user.password_hash):
        return None
    return user


def to_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        firstname=user.firstname,
        lastname=user.lastname,
        email=user.email,
    )


def to_auth_response(user: User, token: str) -> AuthResponse:
    return AuthResponse(
        id=user.id,
        firstname=user.firstname,
        lastname=user.lastname,
        email=user.email,
        token=token,
    )
