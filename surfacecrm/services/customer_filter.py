"""
Customer list filtering.

Pure and synchronous: works on any sequence of objects exposing the Customer
attributes (ORM rows or CustomerOut), never touches the database.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Iterable, TypeVar

T = TypeVar("T")

# CustomerFilter field -> customer attribute compared by exact equality
EQUALITY_FIELDS = ("country", "status", "priority", "customer_type")


@dataclass(frozen=True)
class CustomerFilter:
    """Empty string means "no constraint" for every field."""

    search: str = ""
    country: str = ""
    status: str = ""
    priority: str = ""
    customer_type: str = ""

    @classmethod
    def from_params(cls, **params: Any) -> "CustomerFilter":
        known = {f.name for f in fields(cls)}
        return cls(**{k: (v or "").strip() for k, v in params.items() if k in known})

    @property
    def is_empty(self) -> bool:
        return not any(getattr(self, f.name) for f in fields(self))


def _as_text(value: Any) -> str:
    # str-based enums compare equal to their value but format differently
    return value.value if hasattr(value, "value") else (value or "")


def matches_search(customer: Any, term: str) -> bool:
    """Case-insensitive substring over name, each tag, and requirements."""
    needle = term.lower()
    if needle in (customer.name or "").lower():
        return True
    if any(needle in (tag or "").lower() for tag in (customer.tags or [])):
        return True
    return needle in (customer.requirements or "").lower()


def matches(customer: Any, criteria: CustomerFilter) -> bool:
    for name in EQUALITY_FIELDS:
        wanted = getattr(criteria, name)
        if wanted and _as_text(getattr(customer, name)) != wanted:
            return False
    if criteria.search and not matches_search(customer, criteria.search):
        return False
    return True


def filter_customers(customers: Iterable[T], criteria: CustomerFilter | None = None) -> list[T]:
    """Stable: matching customers come back in their input order."""
    if criteria is None or criteria.is_empty:
        return list(customers)
    return [c for c in customers if matches(c, criteria)]


def distinct_countries(customers: Iterable[Any]) -> list[str]:
    """Sorted country values for the filter drop-down."""
    return sorted({c.country for c in customers if c.country})
