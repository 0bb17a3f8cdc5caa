# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from mini_social.core.security import create_access_token, hash_password
from mini_social.db.session import Store
from mini_social.db.session import get_db as app_get_session
from mini_social.main import app as fastapi_app
from mini_social.models import Post, User
from mini_social.services.media import UploadFailedError, get_media_uploader

FAKE_IMAGE_URL = "https://i.ibb.co/test/image.png"


class FakeMediaUploader:
    """Stands in for the image host; records uploads or fails on demand."""

    def __init__(self) -> None:
        self.uploads: list[str] = []
        self.error: str | None = None

    async def upload(self, image_base64: str) -> str:
        if self.error is not None:
            raise UploadFailedError(self.error)
        self.uploads.append(image_base64)
        return FAKE_IMAGE_URL


@pytest.fixture()
def test_store() -> Iterator[Store]:
    store = Store("sqlite://", poolclass=StaticPool)
    store.connect()
    try:
        yield store
    finally:
        store.drop_tables()
        store.dispose()


@pytest.fixture()
def db_session(test_store: Store) -> Iterator[Session]:
    session = test_store.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, test_store: Store) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        session = test_store.session()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture(autouse=True)
def media_uploader(app: FastAPI) -> Iterator[FakeMediaUploader]:
    """Replace the image host client with an in-memory fake."""
    uploader = FakeMediaUploader()
    app.dependency_overrides[get_media_uploader] = lambda: uploader
    try:
        yield uploader
    finally:
        app.dependency_overrides.pop(get_media_uploader, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory persisting users with a known password."""

    def _make_user(
        firstname: str,
        lastname: str,
        email: str,
        password: str = "correct horse battery staple",
    ) -> User:
        user = User(
            firstname=firstname,
            lastname=lastname,
            email=email,
            password_hash=hash_password(password),
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return the primary test user."""
    return make_user("Ada", "Lovelace", "ada@example.com")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create and return a second persisted user."""
    return make_user("Alan", "Turing", "alan@example.com")


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return {"Authorization": f"Bearer {create_access_token(test_user.id)}"}


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return {"Authorization": f"Bearer {create_access_token(other_user.id)}"}


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Return a factory persisting posts directly through the ORM."""

    def _make_post(author: User, content: str = "Hello world", privacy: str | None = "public") -> Post:
        post = Post(user_id=author.id, content=content, image="", privacy=privacy)
        db_session.add(post)
        db_session.commit()
        db_session.refresh(post)
        return post

    return _make_post


@pytest.fixture()
def test_post(make_post: Callable[..., Post], test_user: User) -> Post:
    """Create a baseline public post by the primary test user."""
    return make_post(test_user, "Test post content")
