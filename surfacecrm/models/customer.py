from __future__ import annotations

import datetime as dt
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from surfacecrm.db.base import Base, new_id, utcnow

if TYPE_CHECKING:
    from surfacecrm.models.activity_log import ActivityLog
    from surfacecrm.models.email_log import EmailLog
    from surfacecrm.models.note import Note


class Customer(Base):
    __tablename__ = "customers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    # Identity / contact
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    contact_person: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    website: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    # Location
    country: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    region: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    city: Mapped[str] = mapped_column(String(120), nullable=False)

    # Classification (values constrained by schemas.customers enums)
    customer_type: Mapped[str] = mapped_column(String(32), nullable=False, default="Other")
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="Lead", index=True)
    priority: Mapped[str] = mapped_column(String(16), nullable=False, default="Medium")
    value_tier: Mapped[str] = mapped_column(String(16), nullable=False, default="Standard")
    direct_import: Mapped[str] = mapped_column(String(16), nullable=False, default="No")
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    # Workflow flags
    is_returning_customer: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_hot_lead: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_pinned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # YYYY-MM-DD or "" (calendar days, not timestamps)
    last_follow_up_date: Mapped[str] = mapped_column(String(10), nullable=False, default="")
    next_follow_up_date: Mapped[str] = mapped_column(String(10), nullable=False, default="", index=True)

    requirements: Mapped[str] = mapped_column(Text, nullable=False, default="")
    last_contact_notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    key_meeting_points: Mapped[str] = mapped_column(Text, nullable=False, default="")

    created_at: Mapped[dt.datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    # Deleted explicitly by customer_service.delete_customer in one transaction
    notes: Mapped[list["Note"]] = relationship("Note", back_populates="customer", passive_deletes=True)
    email_logs: Mapped[list["EmailLog"]] = relationship("EmailLog", back_populates="customer", passive_deletes=True)
    activity_logs: Mapped[list["ActivityLog"]] = relationship(
        "ActivityLog",
        back_populates="customer",
        passive_deletes=True,
    )
