from __future__ import annotations

import datetime as dt

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from surfacecrm.models.customer import Customer
from surfacecrm.schemas.customers import CustomerStatus
from surfacecrm.schemas.dashboard import DashboardStats


def _count(db: Session, *conditions) -> int:
    stmt = select(func.count()).select_from(Customer)
    if conditions:
        stmt = stmt.where(*conditions)
    return db.scalar(stmt) or 0


def get_dashboard_stats(db: Session, today: dt.date | None = None) -> DashboardStats:
    today_str = (today or dt.date.today()).isoformat()
    scheduled = Customer.next_follow_up_date != ""

    by_status = {s.value: 0 for s in CustomerStatus}
    for status, count in db.execute(select(Customer.status, func.count()).group_by(Customer.status)):
        by_status[status] = count

    return DashboardStats(
        total_customers=_count(db),
        hot_leads=_count(db, Customer.is_hot_lead.is_(True)),
        pinned=_count(db, Customer.is_pinned.is_(True)),
        follow_ups_scheduled=_count(db, scheduled),
        due_today=_count(db, Customer.next_follow_up_date == today_str),
        overdue=_count(db, scheduled, Customer.next_follow_up_date < today_str),
        by_status=by_status,
    )
