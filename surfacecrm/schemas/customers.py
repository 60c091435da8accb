from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Any

from pydantic import EmailStr, Field, field_validator

from surfacecrm.schemas.base import CamelModel, NonBlankStr


class CustomerType(str, Enum):
    RETAILER = "Retailer"
    DISTRIBUTOR = "Distributor"
    CONTRACTOR = "Contractor"
    DESIGNER = "Designer"
    ARCHITECT = "Architect"
    BUILDER = "Builder"
    OTHER = "Other"


class CustomerStatus(str, Enum):
    LEAD = "Lead"
    EMAIL_SENT = "Email Sent"
    MEETING_SCHEDULED = "Meeting Scheduled"
    NEGOTIATION = "Negotiation"
    WON = "Won"
    LOST = "Lost"


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class ValueTier(str, Enum):
    PREMIUM = "Premium"
    STANDARD = "Standard"
    BASIC = "Basic"
    UNSET = ""


class DirectImport(str, Enum):
    YES = "Yes"
    NO = "No"
    DISTRIBUTOR = "Distributor"
    UNSET = ""


def normalize_day(value: Any) -> str:
    """
    Follow-up dates are calendar days stored as YYYY-MM-DD.
    "" / None mean unset; a trailing time part is dropped.
    """
    if value is None:
        return ""
    if isinstance(value, dt.datetime):
        return value.date().isoformat()
    if isinstance(value, dt.date):
        return value.isoformat()

    text = str(value).strip()
    if not text:
        return ""
    try:
        return dt.date.fromisoformat(text[:10]).isoformat()
    except ValueError:
        raise ValueError("must be a YYYY-MM-DD date") from None


def split_tags(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [str(tag).strip() for tag in value if str(tag).strip()]


class CustomerFields(CamelModel):
    region: str = ""
    phone: str = ""
    website: str = ""

    customer_type: CustomerType = CustomerType.OTHER
    status: CustomerStatus = CustomerStatus.LEAD
    priority: Priority = Priority.MEDIUM
    value_tier: ValueTier = ValueTier.STANDARD
    direct_import: DirectImport = DirectImport.NO
    tags: list[str] = Field(default_factory=list)

    is_returning_customer: bool = False
    is_hot_lead: bool = False
    is_pinned: bool = False

    last_follow_up_date: str = ""
    next_follow_up_date: str = ""

    requirements: str = ""
    last_contact_notes: str = ""
    key_meeting_points: str = ""

    @field_validator("last_follow_up_date", "next_follow_up_date", mode="before")
    @classmethod
    def normalize_dates(cls, v: Any) -> str:
        return normalize_day(v)

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v: Any) -> list[str]:
        return split_tags(v)


class CustomerCreate(CustomerFields):
    """POST and PUT body. Omitted optional fields take their defaults."""

    name: NonBlankStr
    contact_person: NonBlankStr
    email: EmailStr
    country: NonBlankStr
    city: NonBlankStr


class CustomerPatch(CamelModel):
    """PATCH body: only the fields sent are changed."""

    name: NonBlankStr | None = None
    contact_person: NonBlankStr | None = None
    email: EmailStr | None = None
    country: NonBlankStr | None = None
    city: NonBlankStr | None = None
    region: str | None = None
    phone: str | None = None
    website: str | None = None

    customer_type: CustomerType | None = None
    status: CustomerStatus | None = None
    priority: Priority | None = None
    value_tier: ValueTier | None = None
    direct_import: DirectImport | None = None
    tags: list[str] | None = None

    is_returning_customer: bool | None = None
    is_hot_lead: bool | None = None
    is_pinned: bool | None = None

    last_follow_up_date: str | None = None
    next_follow_up_date: str | None = None

    requirements: str | None = None
    last_contact_notes: str | None = None
    key_meeting_points: str | None = None

    @field_validator("last_follow_up_date", "next_follow_up_date", mode="before")
    @classmethod
    def normalize_dates(cls, v: Any) -> str | None:
        return None if v is None else normalize_day(v)

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v: Any) -> list[str] | None:
        return None if v is None else split_tags(v)


class CustomerOut(CustomerFields):
    id: str
    name: str
    contact_person: str
    email: str
    country: str
    city: str

    created_at: dt.datetime
    updated_at: dt.datetime
