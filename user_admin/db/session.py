"""Database engine and session management.

One engine (and its connection pool) is created lazily on first use and
shared by every request in the process. Each request gets its own short
lived ``Session`` from that engine through the ``get_session`` dependency.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterator

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from user_admin.core.config import DatabaseSettings, settings
from user_admin.db.models import Base

logger = logging.getLogger(__name__)

_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None
_engine_lock = threading.Lock()


def build_engine(db_settings: DatabaseSettings, app_env: str = "production") -> Engine:
    """Create an engine for the configured URL.

    SQLite gets ``check_same_thread=False`` because sessions are used from the
    endpoint thread pool; an in-memory SQLite URL also gets a ``StaticPool`` so
    every session sees the same database.
    """

    url = make_url(db_settings.url)
    kwargs: dict = {
        "echo": db_settings.resolve_echo(app_env),
        "pool_pre_ping": db_settings.pool_pre_ping,
    }
    if url.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


def get_engine() -> Engine:
    """Return the process-wide engine, creating it on first call."""

    global _engine, _session_factory
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                engine = build_engine(settings.database, settings.app_env)
                _session_factory = sessionmaker(bind=engine, expire_on_commit=False)
                _engine = engine
                logger.info(
                    "database.engine_created",
                    extra={"backend": engine.url.get_backend_name()},
                )
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    get_engine()
    assert _session_factory is not None
    return _session_factory


def init_database() -> None:
    """Create the users table if missing and check connectivity."""

    engine = get_engine()
    Base.metadata.create_all(engine)
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    logger.info("Database initialized successfully")


def close_database() -> None:
    """Dispose of the pool; the next ``get_engine()`` call builds a new one."""

    global _engine, _session_factory
    with _engine_lock:
        if _engine is not None:
            _engine.dispose()
        _engine = None
        _session_factory = None
    logger.info("Database connections closed")


def get_session() -> Iterator[Session]:
    """FastAPI dependency yielding a session bound to the shared engine."""

    session = get_session_factory()()
    try:
        yield session
    finally:
        session.close()
