"""Database store configuration and the session dependency."""

from __future__ import annotations

import logging
from collections.abc import Generator
from typing import Any

from fastapi import HTTPException, status
from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from mini_social.core.settings import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Ensure model modules are imported so that metadata is populated when create_all runs.
import mini_social.models  # noqa: E402,F401


class StoreNotReadyError(RuntimeError):
    """Raised when a session is requested before the store has connected."""


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    # SQLite ships with foreign key enforcement off; ON DELETE CASCADE needs it.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Store:
    """Owns the engine and session factory for one database.

    Sessions are only handed out after :meth:`connect` has verified that the
    database is reachable. ``timeout`` is in seconds: SQLite uses it as the
    lock wait, other databases as the pool checkout and connect limit (and on
    PostgreSQL the statement timeout).
    """

    def __init__(self, url: str, *, timeout: float | None = None, **engine_kwargs: Any) -> None:
        connect_args: dict[str, Any] = {}
        if url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
            if url in ("sqlite://", "sqlite:///:memory:"):
                # Handlers run on worker threads; they must all see one in-memory database.
                engine_kwargs.setdefault("poolclass", StaticPool)
            if timeout is not None:
                connect_args["timeout"] = timeout
        else:
            engine_kwargs.setdefault("pool_pre_ping", True)
            if timeout is not None:
                engine_kwargs.setdefault("pool_timeout", timeout)
                if url.startswith("postgresql"):
                    connect_args["connect_timeout"] = max(1, int(timeout))
                    connect_args["options"] = f"-c statement_timeout={int(timeout * 1000)}"
        engine_kwargs.setdefault("connect_args", connect_args)
        self.url = url
        self.timeout = timeout
        self.engine = create_engine(url, **engine_kwargs)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        self.session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine,
        )
        self._ready = False

    @property
    def ready(self) -> bool:
        return self._ready

    def connect(self, *, create_tables: bool = True) -> None:
        """Probe the database and optionally create missing tables."""
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        if create_tables:
            Base.metadata.create_all(bind=self.engine)
        self._ready = True
        logger.info("Store connected (%s)", self.engine.url.render_as_string(hide_password=True))

    def dispose(self) -> None:
        self._ready = False
        self.engine.dispose()

    def session(self) -> Session:
        """Return a new session bound to this store."""
        if not self._ready:
            raise StoreNotReadyError("Store has not been connected")
        return self.session_factory()

    def drop_tables(self) -> None:
        Base.metadata.drop_all(bind=self.engine)


store = Store(
    settings.database_url,
    timeout=settings.database_timeout_seconds,
    echo=settings.sql_debug,
)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    try:
        db = store.session()
    except StoreNotReadyError as err:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service is starting up",
        ) from err
    try:
        yield db
    finally:
        db.close()
