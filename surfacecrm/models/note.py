from __future__ import annotations

import datetime as dt
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from surfacecrm.db.base import Base, new_id, utcnow

if TYPE_CHECKING:
    from surfacecrm.models.customer import Customer


class Note(Base):
    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    customer_id: Mapped[str] = mapped_column(ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)

    text: Mapped[str] = mapped_column(Text, nullable=False)
    next_step: Mapped[str] = mapped_column(Text, nullable=False, default="")
    is_key: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Base64 data URLs or links to externally stored blobs, in display order
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    timestamp: Mapped[dt.datetime] = mapped_column(DateTime, nullable=False, default=utcnow, index=True)

    customer: Mapped["Customer"] = relationship("Customer", back_populates="notes")
