from __future__ import annotations

import datetime as dt
import uuid

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> dt.datetime:
    # Stored naive, always UTC
    return dt.datetime.now(dt.timezone.utc).replace(tzinfo=None)
