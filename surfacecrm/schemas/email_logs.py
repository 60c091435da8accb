from __future__ import annotations

import datetime as dt

from pydantic import AliasChoices, Field

from surfacecrm.schemas.base import CamelModel, NonBlankStr


class EmailLogCreate(CamelModel):
    subject: NonBlankStr
    # Older clients post the body as "summary"
    content: NonBlankStr = Field(validation_alias=AliasChoices("content", "summary"))
    sent_by: str = ""


class EmailLogOut(CamelModel):
    id: str
    customer_id: str
    subject: str
    content: str
    sent_by: str
    date: dt.datetime
