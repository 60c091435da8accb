"""
Error taxonomy for the CRM and the FastAPI handlers that translate it.

Services raise these; endpoints never build error responses by hand for them.
  - NotFoundError            -> 404
  - RecordValidationError    -> 400
  - StorageUnavailableError  -> 503 (also raised for SQLAlchemy OperationalError)
  - anything else            -> 500, generic message outside dev
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from surfacecrm.core.config import settings

logger = logging.getLogger(__name__)


class CRMError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(CRMError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id: str | None = None):
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


class RecordValidationError(CRMError):
    status_code = status.HTTP_400_BAD_REQUEST


class ImportFileError(RecordValidationError):
    """The uploaded spreadsheet could not be read at all."""


class StorageUnavailableError(CRMError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, detail: str = "Storage unavailable"):
        super().__init__(detail)


def _field_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    errors = []
    for err in exc.errors():
        # loc looks like ("body", "email") or ("query", "limit")
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append({"field": ".".join(loc), "message": err.get("msg", "Invalid value")})
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(CRMError)
    async def _crm_error(request: Request, exc: CRMError):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def _request_validation(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Validation failed", "errors": _field_errors(exc)},
        )

    @app.exception_handler(OperationalError)
    async def _storage_down(request: Request, exc: OperationalError):
        logger.error("Storage error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Storage unavailable"},
        )

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        detail = f"{type(exc).__name__}: {exc}" if settings.is_dev else "Internal server error"
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": detail})
