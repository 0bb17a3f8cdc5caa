"""Tests for password digests and session tokens."""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from mini_social.core.security import (
    InvalidTokenError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from mini_social.core.settings import settings


def test_password_digest_round_trip() -> None:
    digest = hash_password("hunter2")
    assert digest != "hunter2"
    assert verify_password("hunter2", digest) is True
    assert verify_password("hunter3", digest) is False


def test_password_digests_are_salted() -> None:
    assert hash_password("same") != hash_password("same")


def test_token_carries_user_id() -> None:
    assert decode_access_token(create_access_token(42)) == 42


def test_token_expires_after_seven_days() -> None:
    token = create_access_token(42)
    claims = jwt.get_unverified_claims(token)
    lifetime = claims["exp"] - claims["iat"]
    assert lifetime == int(timedelta(days=7).total_seconds())


def test_expired_token_rejected() -> None:
    token = create_access_token(42, expires_delta=timedelta(seconds=-1))
    with pytest.raises(InvalidTokenError):
        decode_access_token(token)


def test_tampered_token_rejected() -> None:
    token = create_access_token(42)
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload, signature[::-1]])
    with pytest.raises(InvalidTokenError):
        decode_access_token(tampered)


def test_token_without_subject_rejected() -> None:
    token = jwt.encode(
        {"exp": datetime.now(UTC) + timedelta(minutes=5)},
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    with pytest.raises(InvalidTokenError):
        decode_access_token(token)
