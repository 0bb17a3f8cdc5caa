"""Tests for store readiness and the session dependency."""

from types import SimpleNamespace

import pytest
from fastapi import HTTPException, status
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from mini_social.core.settings import settings
from mini_social.db import session as session_module
from mini_social.db.session import Store, StoreNotReadyError, get_db


def test_store_hands_out_sessions_only_after_connect() -> None:
    store = Store("sqlite://", poolclass=StaticPool)
    assert store.ready is False
    with pytest.raises(StoreNotReadyError):
        store.session()

    store.connect()
    try:
        assert store.ready is True
        with store.session() as db:
            assert db is not None
    finally:
        store.dispose()
    assert store.ready is False


def test_get_db_returns_503_before_connect(monkeypatch) -> None:
    monkeypatch.setattr(session_module, "store", Store("sqlite://", poolclass=StaticPool))
    with pytest.raises(HTTPException) as excinfo:
        next(get_db())
    assert excinfo.value.status_code == status.HTTP_503_SERVICE_UNAVAILABLE


class _EngineRecorder:
    """Captures create_engine calls; non-sqlite URLs get a stand-in engine."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict]] = []

    def __call__(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if url.startswith("sqlite"):
            return create_engine(url, **kwargs)
        return SimpleNamespace(dialect=SimpleNamespace(name="postgresql"))


def test_sqlite_store_passes_lock_timeout(monkeypatch) -> None:
    recorder = _EngineRecorder()
    monkeypatch.setattr(session_module, "create_engine", recorder)

    Store("sqlite://", timeout=7.5, poolclass=StaticPool)

    _, kwargs = recorder.calls[0]
    assert kwargs["connect_args"] == {"check_same_thread": False, "timeout": 7.5}


def test_postgres_store_bounds_checkout_connect_and_statements(monkeypatch) -> None:
    recorder = _EngineRecorder()
    monkeypatch.setattr(session_module, "create_engine", recorder)

    Store("postgresql+psycopg://app@db/social", timeout=2.5)

    _, kwargs = recorder.calls[0]
    assert kwargs["pool_timeout"] == 2.5
    assert kwargs["pool_pre_ping"] is True
    assert kwargs["connect_args"]["connect_timeout"] == 2
    assert kwargs["connect_args"]["options"] == "-c statement_timeout=2500"


def test_application_store_uses_configured_timeout() -> None:
    assert session_module.store.timeout == settings.database_timeout_seconds


def test_in_memory_store_shares_one_connection_across_threads() -> None:
    store = Store("sqlite://")
    try:
        assert isinstance(store.engine.pool, StaticPool)
    finally:
        store.dispose()
