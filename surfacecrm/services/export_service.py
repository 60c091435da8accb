"""Customer export to XLSX / CSV, one row per customer, human-readable headers."""

from __future__ import annotations

import csv
import datetime as dt
import io
from typing import Any, Callable, Iterable

from openpyxl import Workbook
from openpyxl.styles import Font

from surfacecrm.core.config import settings
from surfacecrm.core.errors import RecordValidationError


def _yes_no(value: bool) -> str:
    return "Yes" if value else "No"


def _enum_text(value: Any) -> str:
    return value.value if hasattr(value, "value") else (value or "")


# Header -> cell value; import_mapper.FIELD_ALIASES accepts every header here
EXPORT_COLUMNS: list[tuple[str, Callable[[Any], Any]]] = [
    ("Customer Name", lambda c: c.name),
    ("Country", lambda c: c.country),
    ("Region", lambda c: c.region),
    ("City", lambda c: c.city),
    ("Contact Person", lambda c: c.contact_person),
    ("Email", lambda c: c.email),
    ("Phone", lambda c: c.phone),
    ("Website", lambda c: c.website),
    ("Type", lambda c: _enum_text(c.customer_type)),
    ("Status", lambda c: _enum_text(c.status)),
    ("Priority", lambda c: _enum_text(c.priority)),
    ("Requirements", lambda c: c.requirements),
    ("Value Tier", lambda c: _enum_text(c.value_tier)),
    ("Direct Import", lambda c: _enum_text(c.direct_import)),
    ("Last Follow-up", lambda c: c.last_follow_up_date),
    ("Next Follow-up", lambda c: c.next_follow_up_date),
    ("Last Contact Notes", lambda c: c.last_contact_notes),
    ("Key Meeting Points", lambda c: c.key_meeting_points),
    ("Returning Customer", lambda c: _yes_no(c.is_returning_customer)),
    ("Hot Lead", lambda c: _yes_no(c.is_hot_lead)),
    ("Pinned", lambda c: _yes_no(c.is_pinned)),
    ("Tags", lambda c: ", ".join(c.tags or [])),
]

EXPORT_FORMATS = {
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "csv": "text/csv; charset=utf-8",
}


def export_headers() -> list[str]:
    return [header for header, _ in EXPORT_COLUMNS]


def export_rows(customers: Iterable[Any]) -> list[list[Any]]:
    return [[getter(c) for _, getter in EXPORT_COLUMNS] for c in customers]


def write_xlsx(customers: Iterable[Any]) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "Customers"

    ws.append(export_headers())
    for cell in ws[1]:
        cell.font = Font(bold=True)
    for row in export_rows(customers):
        ws.append(row)

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def write_csv(customers: Iterable[Any]) -> bytes:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(export_headers())
    writer.writerows(export_rows(customers))
    # BOM so Excel opens it as UTF-8
    return buffer.getvalue().encode("utf-8-sig")


def export_filename(fmt: str, today: dt.date | None = None) -> str:
    today = today or dt.date.today()
    return f"{settings.export_filename_prefix}_{today.isoformat()}.{fmt}"


def export_customers(customers: Iterable[Any], fmt: str = "xlsx") -> tuple[bytes, str, str]:
    """Returns (content, media type, filename)."""
    fmt = (fmt or "xlsx").lower()
    if fmt not in EXPORT_FORMATS:
        raise RecordValidationError(f"Unsupported export format '{fmt}'. Use xlsx or csv.")

    content = write_xlsx(customers) if fmt == "xlsx" else write_csv(customers)
    return content, EXPORT_FORMATS[fmt], export_filename(fmt)
