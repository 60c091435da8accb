from __future__ import annotations

from pydantic import Field

from surfacecrm.schemas.base import CamelModel


class ImportRowError(CamelModel):
    row: int
    message: str


class ImportResult(CamelModel):
    imported: int = 0
    failed: int = 0
    errors: list[ImportRowError] = Field(default_factory=list)
