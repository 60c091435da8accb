"""
Follow-up calendar: bucket customers by next follow-up day and classify urgency.

Dates are calendar days (YYYY-MM-DD strings); "today" is passed in so callers
and tests control the clock.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from surfacecrm.core.config import settings
from surfacecrm.models.customer import Customer


class FollowUpUrgency(str, Enum):
    OVERDUE = "overdue"
    DUE_SOON = "due_soon"
    FUTURE = "future"


@dataclass
class FollowUpGroup:
    date: str
    urgency: FollowUpUrgency
    customers: list[Any] = field(default_factory=list)


def _as_date(day: dt.date | str) -> dt.date:
    if isinstance(day, dt.datetime):
        return day.date()
    if isinstance(day, dt.date):
        return day
    return dt.date.fromisoformat(day[:10])


def classify_follow_up(
    day: dt.date | str,
    today: dt.date,
    due_soon_days: int | None = None,
) -> FollowUpUrgency:
    """
    day < today                        -> overdue
    today <= day < today + due_soon    -> due soon
    otherwise                          -> future
    """
    window = settings.due_soon_days if due_soon_days is None else due_soon_days
    d = _as_date(day)
    if d < today:
        return FollowUpUrgency.OVERDUE
    if d < today + dt.timedelta(days=window):
        return FollowUpUrgency.DUE_SOON
    return FollowUpUrgency.FUTURE


def group_follow_ups(
    customers: Iterable[Any],
    today: dt.date,
    due_soon_days: int | None = None,
) -> list[FollowUpGroup]:
    """One group per distinct next_follow_up_date, ascending; customers without a date are left out."""
    buckets: dict[str, list[Any]] = {}
    for customer in customers:
        day = customer.next_follow_up_date
        if not day:
            continue
        buckets.setdefault(day, []).append(customer)

    return [
        FollowUpGroup(date=day, urgency=classify_follow_up(day, today, due_soon_days), customers=members)
        for day, members in sorted(buckets.items())
    ]


def get_customers_with_upcoming_follow_ups(
    db: Session,
    days: int | None = None,
    today: dt.date | None = None,
) -> list[Customer]:
    """Customers due in [today, today + days], inclusive, earliest first."""
    today = today or dt.date.today()
    days = settings.follow_up_window_days if days is None else days
    start = today.isoformat()
    end = (today + dt.timedelta(days=days)).isoformat()

    # ISO day strings order the same way as the dates they encode
    stmt = (
        select(Customer)
        .where(Customer.next_follow_up_date != "")
        .where(Customer.next_follow_up_date >= start, Customer.next_follow_up_date <= end)
        .order_by(Customer.next_follow_up_date.asc(), Customer.created_at.asc())
    )
    return list(db.scalars(stmt))


def get_customers_needing_attention(db: Session) -> list[Customer]:
    """
    Hot leads and pinned customers.

    Overdue follow-ups are deliberately not part of this rule.
    """
    stmt = (
        select(Customer)
        .where(or_(Customer.is_hot_lead.is_(True), Customer.is_pinned.is_(True)))
        .order_by(Customer.created_at.asc())
    )
    return list(db.scalars(stmt))
