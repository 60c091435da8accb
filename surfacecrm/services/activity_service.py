"""Activity recorder: append-only audit trail per customer."""

from __future__ import annotations

import logging
from enum import Enum

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from surfacecrm.core.errors import RecordValidationError
from surfacecrm.models.activity_log import ActivityLog
from surfacecrm.models.customer import Customer

logger = logging.getLogger(__name__)


class ActivityAction(str, Enum):
    HOT_LEAD_ADDED = "Hot Lead Added"
    HOT_LEAD_REMOVED = "Hot Lead Removed"
    CUSTOMER_PINNED = "Customer Pinned"
    CUSTOMER_UNPINNED = "Customer Unpinned"
    EMAIL_LOGGED = "Email Logged"


def record(
    db: Session,
    customer_id: str,
    action: ActivityAction | str,
    description: str = "",
) -> ActivityLog:
    """
    Append one entry for customer_id.

    Flushes but does not commit: the caller owns the transaction so the entry
    lands together with the mutation it describes.
    Raises RecordValidationError if the customer does not exist.
    """
    if db.get(Customer, customer_id) is None:
        raise RecordValidationError(f"Cannot record activity for unknown customer {customer_id}")

    label = action.value if isinstance(action, ActivityAction) else action
    entry = ActivityLog(customer_id=customer_id, action=label, description=description)
    db.add(entry)
    db.flush()
    logger.debug("Activity %r recorded for customer %s", label, customer_id)
    return entry


def list_all(db: Session, limit: int | None = None) -> list[ActivityLog]:
    """Most recent first across all customers, optionally capped."""
    stmt = (
        select(ActivityLog)
        .options(joinedload(ActivityLog.customer))
        .order_by(ActivityLog.timestamp.desc())
    )
    if limit:
        stmt = stmt.limit(limit)
    return list(db.scalars(stmt))


def list_for_customer(db: Session, customer_id: str) -> list[ActivityLog]:
    stmt = (
        select(ActivityLog)
        .options(joinedload(ActivityLog.customer))
        .where(ActivityLog.customer_id == customer_id)
        .order_by(ActivityLog.timestamp.desc())
    )
    return list(db.scalars(stmt))
