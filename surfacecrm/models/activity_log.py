from __future__ import annotations

import datetime as dt
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from surfacecrm.db.base import Base, new_id, utcnow

if TYPE_CHECKING:
    from surfacecrm.models.customer import Customer


class ActivityLog(Base):
    """Append-only audit entry. Never updated; removed only with its customer."""

    __tablename__ = "activity_logs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    customer_id: Mapped[str] = mapped_column(ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)

    action: Mapped[str] = mapped_column(String(120), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    timestamp: Mapped[dt.datetime] = mapped_column(DateTime, nullable=False, default=utcnow, index=True)

    customer: Mapped["Customer"] = relationship("Customer", back_populates="activity_logs")

    @property
    def customer_name(self) -> str | None:
        return self.customer.name if self.customer is not None else None
