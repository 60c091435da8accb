"""Record store for customers: CRUD, flag toggles and the delete cascade."""

from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from surfacecrm.core.errors import NotFoundError, RecordValidationError
from surfacecrm.db.base import utcnow
from surfacecrm.models.activity_log import ActivityLog
from surfacecrm.models.customer import Customer
from surfacecrm.models.email_log import EmailLog
from surfacecrm.models.note import Note
from surfacecrm.schemas.customers import CustomerCreate, CustomerPatch
from surfacecrm.services import activity_service
from surfacecrm.services.activity_service import ActivityAction

logger = logging.getLogger(__name__)

# API sort key (camelCase, as the client sends it) -> column
SORTABLE_FIELDS = {
    "name": Customer.name,
    "country": Customer.country,
    "city": Customer.city,
    "status": Customer.status,
    "priority": Customer.priority,
    "customerType": Customer.customer_type,
    "nextFollowUpDate": Customer.next_follow_up_date,
    "createdAt": Customer.created_at,
    "updatedAt": Customer.updated_at,
}


def get_customer_or_404(db: Session, customer_id: str) -> Customer:
    customer = db.get(Customer, customer_id)
    if customer is None:
        raise NotFoundError("Customer", customer_id)
    return customer


def list_customers(db: Session, sort: str | None = None, descending: bool = False) -> list[Customer]:
    """Insertion order unless a sort field is given."""
    if sort:
        column = SORTABLE_FIELDS.get(sort)
        if column is None:
            raise RecordValidationError(
                f"Cannot sort by '{sort}'. Allowed: {', '.join(sorted(SORTABLE_FIELDS))}"
            )
        order = column.desc() if descending else column.asc()
    else:
        order = Customer.created_at.asc()

    return list(db.scalars(select(Customer).order_by(order, Customer.created_at.asc())))


def create_customer(db: Session, payload: CustomerCreate) -> Customer:
    data = payload.model_dump(mode="json")
    now = utcnow()
    customer = Customer(**data, created_at=now, updated_at=now)
    db.add(customer)
    db.commit()
    db.refresh(customer)
    logger.info("Created customer %s (%s)", customer.id, customer.name)
    return customer


def update_customer(db: Session, customer_id: str, payload: CustomerCreate | CustomerPatch) -> Customer:
    """
    CustomerCreate replaces every field (omitted ones fall back to defaults);
    CustomerPatch only touches the fields that were sent.
    """
    customer = get_customer_or_404(db, customer_id)

    if isinstance(payload, CustomerPatch):
        data = {k: v for k, v in payload.model_dump(mode="json", exclude_unset=True).items() if v is not None}
    else:
        data = payload.model_dump(mode="json")

    for k, v in data.items():
        setattr(customer, k, v)
    customer.updated_at = utcnow()

    db.add(customer)
    db.commit()
    db.refresh(customer)
    return customer


def delete_customer(db: Session, customer_id: str) -> None:
    """
    Delete the customer with its notes, email logs and activity logs.
    Single transaction: either everything goes or nothing does.
    """
    customer = get_customer_or_404(db, customer_id)

    try:
        db.execute(delete(Note).where(Note.customer_id == customer_id))
        db.execute(delete(EmailLog).where(EmailLog.customer_id == customer_id))
        db.execute(delete(ActivityLog).where(ActivityLog.customer_id == customer_id))
        db.delete(customer)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Delete cascade failed for customer %s; rolled back", customer_id)
        raise

    logger.info("Deleted customer %s and its notes, email logs and activity", customer_id)


def _toggle(
    db: Session,
    customer_id: str,
    attr: str,
    on: tuple[ActivityAction, str],
    off: tuple[ActivityAction, str],
) -> Customer:
    customer = get_customer_or_404(db, customer_id)

    value = not getattr(customer, attr)
    setattr(customer, attr, value)
    customer.updated_at = utcnow()

    action, description = on if value else off
    activity_service.record(db, customer_id, action, description)

    db.commit()
    db.refresh(customer)
    logger.info("Customer %s: %s", customer_id, action.value)
    return customer


def toggle_hot_lead(db: Session, customer_id: str) -> Customer:
    return _toggle(
        db,
        customer_id,
        "is_hot_lead",
        on=(ActivityAction.HOT_LEAD_ADDED, "Customer was marked as Hot Lead"),
        off=(ActivityAction.HOT_LEAD_REMOVED, "Customer was removed from Hot Lead"),
    )


def toggle_pinned(db: Session, customer_id: str) -> Customer:
    return _toggle(
        db,
        customer_id,
        "is_pinned",
        on=(ActivityAction.CUSTOMER_PINNED, "Customer was pinned"),
        off=(ActivityAction.CUSTOMER_UNPINNED, "Customer was unpinned"),
    )
