from __future__ import annotations

import datetime as dt

from surfacecrm.schemas.base import CamelModel


class ActivityLogOut(CamelModel):
    id: str
    customer_id: str
    action: str
    description: str
    timestamp: dt.datetime
    customer_name: str | None = None
