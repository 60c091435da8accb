from __future__ import annotations

import datetime as dt

from pydantic import Field

from surfacecrm.schemas.base import CamelModel, NonBlankStr


class NoteCreate(CamelModel):
    text: NonBlankStr
    next_step: str = ""
    is_key: bool = False
    images: list[str] = Field(default_factory=list)


class NoteUpdate(NoteCreate):
    pass


class NoteOut(CamelModel):
    id: str
    customer_id: str
    text: str
    next_step: str
    is_key: bool
    images: list[str]
    timestamp: dt.datetime
