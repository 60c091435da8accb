from __future__ import annotations

import datetime as dt
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from surfacecrm.db.base import Base, new_id, utcnow

if TYPE_CHECKING:
    from surfacecrm.models.customer import Customer


class EmailLog(Base):
    __tablename__ = "email_logs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    customer_id: Mapped[str] = mapped_column(ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)

    subject: Mapped[str] = mapped_column(String(500), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    sent_by: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    date: Mapped[dt.datetime] = mapped_column(DateTime, nullable=False, default=utcnow, index=True)

    customer: Mapped["Customer"] = relationship("Customer", back_populates="email_logs")
