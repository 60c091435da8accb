from __future__ import annotations

from surfacecrm.schemas.base import CamelModel
from surfacecrm.schemas.customers import CustomerOut


class FollowUpGroupOut(CamelModel):
    date: str
    urgency: str
    customers: list[CustomerOut]
