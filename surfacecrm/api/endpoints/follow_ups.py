from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from surfacecrm.db.session import get_db
from surfacecrm.schemas.customers import CustomerOut
from surfacecrm.schemas.follow_ups import FollowUpGroupOut
from surfacecrm.services import customer_service, follow_ups

router = APIRouter()


@router.get("", response_model=list[CustomerOut])
def upcoming_follow_ups(
    days: int | None = Query(None, ge=0, le=366),
    db: Session = Depends(get_db),
):
    """Customers due today through today + days (default window from settings)."""
    return follow_ups.get_customers_with_upcoming_follow_ups(db, days)


@router.get("/calendar", response_model=list[FollowUpGroupOut])
def follow_up_calendar(db: Session = Depends(get_db)):
    """Every scheduled follow-up day with its customers, marked overdue / due_soon / future."""
    groups = follow_ups.group_follow_ups(customer_service.list_customers(db), today=dt.date.today())
    return [
        FollowUpGroupOut(
            date=g.date,
            urgency=g.urgency.value,
            customers=[CustomerOut.model_validate(c) for c in g.customers],
        )
        for g in groups
    ]
