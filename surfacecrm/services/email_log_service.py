from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from surfacecrm.core.errors import NotFoundError
from surfacecrm.models.email_log import EmailLog
from surfacecrm.schemas.email_logs import EmailLogCreate
from surfacecrm.services import activity_service
from surfacecrm.services.activity_service import ActivityAction
from surfacecrm.services.customer_service import get_customer_or_404

logger = logging.getLogger(__name__)


def list_email_logs_for_customer(db: Session, customer_id: str) -> list[EmailLog]:
    """Newest first."""
    stmt = select(EmailLog).where(EmailLog.customer_id == customer_id).order_by(EmailLog.date.desc())
    return list(db.scalars(stmt))


def create_email_log(db: Session, customer_id: str, payload: EmailLogCreate) -> EmailLog:
    """Store the email and record an "Email Logged" activity in the same commit."""
    get_customer_or_404(db, customer_id)

    email_log = EmailLog(customer_id=customer_id, **payload.model_dump())
    db.add(email_log)
    activity_service.record(
        db,
        customer_id,
        ActivityAction.EMAIL_LOGGED,
        f'Email "{payload.subject}" was logged',
    )
    db.commit()
    db.refresh(email_log)
    logger.info("Email logged for customer %s", customer_id)
    return email_log


def delete_email_log(db: Session, email_log_id: str) -> None:
    email_log = db.get(EmailLog, email_log_id)
    if email_log is None:
        raise NotFoundError("Email log", email_log_id)
    db.delete(email_log)
    db.commit()
