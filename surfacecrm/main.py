from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import OperationalError

from surfacecrm.api.router import api_router
from surfacecrm.core.config import settings
from surfacecrm.core.errors import register_exception_handlers
from surfacecrm.core.logging import configure_logging
from surfacecrm.db import session as db_session
from surfacecrm.db.base import Base
from surfacecrm.web.router import web_router

# Import models so Base knows them
from surfacecrm.models import ActivityLog, Customer, EmailLog, Note  # noqa: F401

logger = logging.getLogger("surfacecrm")


def init_storage() -> str:
    """
    Create tables on the configured database. If it cannot be reached and
    fallback is enabled, continue on a temporary SQLite file instead.
    Returns the active backend name.
    """
    try:
        Base.metadata.create_all(bind=db_session.get_engine())
    except OperationalError as exc:
        if not settings.storage_fallback:
            logger.error("Database unreachable and STORAGE_FALLBACK is off: %s", exc)
            raise
        logger.warning("Database unreachable (%s); falling back to temporary local storage", exc.orig)
        Base.metadata.create_all(bind=db_session.use_memory_fallback())
    return db_session.storage_backend()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title=settings.app_name, version=settings.version)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.get("/health")
    def health():
        # Simple liveness check + basic deploy info
        return {
            "status": "ok",
            "service": settings.app_name,
            "version": app.version,
            "env": settings.env,
            "storage": db_session.storage_backend(),
        }

    @app.on_event("startup")
    def _startup():
        # Create tables (Alembic migrations are the path for schema changes)
        backend = init_storage()
        logger.info("%s v%s started (storage: %s)", settings.app_name, app.version, backend)

    app.include_router(api_router, prefix="/api")
    app.include_router(web_router)
    return app


app = create_app()
