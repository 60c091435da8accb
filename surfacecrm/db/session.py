from __future__ import annotations

import atexit
import logging
import os
import shutil
import tempfile

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from surfacecrm.core.config import normalize_database_url, settings

logger = logging.getLogger(__name__)

MEMORY_DATABASE_URL = "sqlite://"


def _database_url(url: str | None) -> str:
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")

    # Settings may have picked DATABASE_URL straight from the environment
    return normalize_database_url(url)


def build_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        # One shared connection, otherwise every checkout gets its own empty in-memory database
        if url in (MEMORY_DATABASE_URL, "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, future=True, **kwargs)

    return create_engine(url, future=True, pool_pre_ping=True)


DATABASE_URL = _database_url(getattr(settings, "database_url", None) or os.getenv("DATABASE_URL"))

engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Set once the configured database was unreachable at startup
_fallback_engine: Engine | None = None


def get_engine() -> Engine:
    return SessionLocal.kw["bind"]


def _remove_fallback_dir(path: str) -> None:
    shutil.rmtree(path, ignore_errors=True)


def use_memory_fallback() -> Engine:
    """
    Re-bind the session factory to a throwaway SQLite file for this process.

    A file (not sqlite://) so every session gets its own connection and
    transaction; the directory is removed at interpreter exit.
    """
    global _fallback_engine

    directory = tempfile.mkdtemp(prefix="surfacecrm-")
    atexit.register(_remove_fallback_dir, directory)

    fallback = build_engine(f"sqlite:///{os.path.join(directory, 'crm.db')}")
    _fallback_engine = fallback
    SessionLocal.configure(bind=fallback)
    logger.warning(
        "Storage degraded: using a temporary SQLite store instead of %s",
        engine.url.render_as_string(hide_password=True),
    )
    return fallback


def storage_backend() -> str:
    current = get_engine()
    if current is _fallback_engine or str(current.url) == MEMORY_DATABASE_URL:
        return "memory"
    return current.dialect.name


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
