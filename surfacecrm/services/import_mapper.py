"""
Bulk customer import from spreadsheets.

Three steps, each usable on its own:
  - read_spreadsheet_rows: CSV / XLSX bytes -> list of {column name: raw value}
  - map_row: one loose row -> canonical, typed customer fields
  - import_rows: validate + store each row, isolating failures per row

Column names are matched case-insensitively against a short alias list per
field; the first alias holding a non-empty value wins. The export headers
(see export_service.EXPORT_COLUMNS) are always among the aliases so an
exported file imports back unchanged.
"""

from __future__ import annotations

import csv
import datetime as dt
import io
import logging
import zipfile
from typing import Any, TypeAlias

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from pydantic import ValidationError
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from surfacecrm.core.errors import CRMError, ImportFileError, StorageUnavailableError
from surfacecrm.schemas.customers import CustomerCreate
from surfacecrm.schemas.imports import ImportResult, ImportRowError
from surfacecrm.services import customer_service

logger = logging.getLogger(__name__)

RawRow: TypeAlias = dict[str, Any]

SUPPORTED_EXTENSIONS = ("csv", "xlsx", "xlsm")


# =============================================================================
# Alias tables
# =============================================================================

# Canonical field -> accepted column names, in priority order (lower-case)
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "name": ("name", "company", "customer name", "company name"),
    "contact_person": ("contactperson", "contact", "contact_person", "contact person"),
    "email": ("email", "e-mail", "email address"),
    "phone": ("phone", "phone number", "telephone"),
    "country": ("country",),
    "region": ("region", "state", "province"),
    "city": ("city",),
    "website": ("website", "web", "url"),
    "customer_type": ("customertype", "customer_type", "type", "customer type"),
    "requirements": ("requirements",),
    "status": ("status",),
    "priority": ("priority",),
    "tags": ("tags",),
    "is_returning_customer": ("isreturningcustomer", "returning", "returning customer"),
    "value_tier": ("valuetier", "value_tier", "value tier"),
    "direct_import": ("directimport", "direct_import", "direct import"),
    "last_follow_up_date": ("lastfollowupdate", "last_follow_up", "last follow-up", "last follow-up date"),
    "next_follow_up_date": ("nextfollowupdate", "next_follow_up", "next follow-up", "next follow-up date"),
    "last_contact_notes": ("lastcontactnotes", "last_contact_notes", "last contact notes"),
    "key_meeting_points": ("keymeetingpoints", "key_meeting_points", "key meeting points"),
    "is_hot_lead": ("ishotlead", "hot_lead", "hot lead"),
    "is_pinned": ("ispinned", "pinned"),
}

# Canonical enum field -> (lower-case value -> canonical value, fallback)
ENUM_ALIASES: dict[str, tuple[dict[str, str], str]] = {
    "customer_type": (
        {
            "retailer": "Retailer",
            "distributor": "Distributor",
            "contractor": "Contractor",
            "designer": "Designer",
            "architect": "Architect",
            "builder": "Builder",
            "other": "Other",
        },
        "Other",
    ),
    "status": (
        {
            "lead": "Lead",
            "email sent": "Email Sent",
            "email_sent": "Email Sent",
            "meeting scheduled": "Meeting Scheduled",
            "meeting_scheduled": "Meeting Scheduled",
            "negotiation": "Negotiation",
            "won": "Won",
            "lost": "Lost",
        },
        "Lead",
    ),
    "priority": ({"high": "High", "medium": "Medium", "low": "Low"}, "Medium"),
    "value_tier": ({"premium": "Premium", "standard": "Standard", "basic": "Basic"}, "Standard"),
    "direct_import": ({"yes": "Yes", "no": "No", "distributor": "Distributor"}, "No"),
}

TEXT_FIELDS = (
    "name",
    "contact_person",
    "email",
    "phone",
    "country",
    "region",
    "city",
    "website",
    "requirements",
    "last_contact_notes",
    "key_meeting_points",
)
BOOLEAN_FIELDS = ("is_returning_customer", "is_hot_lead", "is_pinned")
DATE_FIELDS = ("last_follow_up_date", "next_follow_up_date")

FALSY_STRINGS = frozenset({"", "no", "false", "0", "n", "off"})

DATE_FORMATS = ("%Y-%m-%d", "%Y/%m/%d", "%m/%d/%Y", "%m-%d-%Y")


# =============================================================================
# Value coercion
# =============================================================================

def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    # Spreadsheet cells hand back whole numbers (phone numbers, zip codes) as floats
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def map_enum(field: str, value: Any) -> str:
    table, fallback = ENUM_ALIASES[field]
    return table.get(to_text(value).lower(), fallback)


def map_tags(value: Any) -> list[str]:
    if _is_blank(value):
        return []
    if isinstance(value, (list, tuple)):
        items = value
    else:
        items = to_text(value).split(",")
    return [to_text(tag) for tag in items if to_text(tag)]


def coerce_bool(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip().lower() not in FALSY_STRINGS
    return bool(value)


def coerce_date(value: Any) -> str:
    """
    Accepts date/datetime cells and the common text layouts; anything
    unparseable is dropped to "" rather than failing the row.
    """
    if isinstance(value, dt.datetime):
        return value.date().isoformat()
    if isinstance(value, dt.date):
        return value.isoformat()

    text = to_text(value)
    if not text:
        return ""

    if "T" in text:
        try:
            return dt.datetime.fromisoformat(text.replace("Z", "+00:00")).date().isoformat()
        except ValueError:
            pass

    for fmt in DATE_FORMATS:
        try:
            return dt.datetime.strptime(text, fmt).date().isoformat()
        except ValueError:
            continue

    logger.debug("Dropping unparseable follow-up date %r", text)
    return ""


# =============================================================================
# Row mapping
# =============================================================================

def _index_row(row: RawRow) -> dict[str, Any]:
    index: dict[str, Any] = {}
    for key, value in row.items():
        if key is None:
            continue
        index.setdefault(str(key).strip().lower(), value)
    return index


def resolve_column(index: dict[str, Any], field: str) -> Any:
    for alias in FIELD_ALIASES[field]:
        value = index.get(alias)
        if not _is_blank(value):
            return value
    return None


def map_row(row: RawRow) -> dict[str, Any]:
    """
    Normalize one loosely named row into canonical customer fields.

    The result is fully typed (strings, enum values, bools, list of tags) and
    ready for CustomerCreate; required fields that were missing come back as "".
    """
    index = _index_row(row)
    mapped: dict[str, Any] = {}

    for field in TEXT_FIELDS:
        mapped[field] = to_text(resolve_column(index, field))
    for field in ENUM_ALIASES:
        mapped[field] = map_enum(field, resolve_column(index, field))
    for field in BOOLEAN_FIELDS:
        mapped[field] = coerce_bool(resolve_column(index, field))
    for field in DATE_FIELDS:
        mapped[field] = coerce_date(resolve_column(index, field))
    mapped["tags"] = map_tags(resolve_column(index, "tags"))

    return mapped


def to_customer_create(row: RawRow) -> CustomerCreate:
    return CustomerCreate.model_validate(map_row(row))


# =============================================================================
# File reading
# =============================================================================

def _file_extension(filename: str) -> str:
    return filename.rsplit(".", 1)[-1].lower() if "." in filename else ""


def _read_csv(content: bytes) -> list[RawRow]:
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        # Excel on Windows saves CSV as cp1252 more often than not
        text = content.decode("cp1252", errors="replace")

    try:
        reader = csv.DictReader(io.StringIO(text))
        return [row for row in reader if any(not _is_blank(v) for k, v in row.items() if k is not None)]
    except csv.Error as exc:
        raise ImportFileError(f"Could not parse CSV file: {exc}") from exc


def _read_xlsx(content: bytes) -> list[RawRow]:
    try:
        workbook = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as exc:
        raise ImportFileError(f"Could not open spreadsheet: {exc}") from exc

    try:
        if not workbook.worksheets:
            return []
        sheet = workbook.worksheets[0]
        rows = sheet.iter_rows(values_only=True)
        header = next(rows, None)
        if header is None:
            return []

        columns = [to_text(h) for h in header]
        result: list[RawRow] = []
        for values in rows:
            if all(_is_blank(v) for v in values):
                continue
            result.append({col: val for col, val in zip(columns, values) if col})
        return result
    finally:
        workbook.close()


def read_spreadsheet_rows(filename: str, content: bytes) -> list[RawRow]:
    """Rows of the first sheet (or the CSV), keyed by the header row."""
    ext = _file_extension(filename or "")
    if ext not in SUPPORTED_EXTENSIONS:
        raise ImportFileError(
            f"Unsupported file type '.{ext}'. Upload one of: {', '.join('.' + e for e in SUPPORTED_EXTENSIONS)}"
        )
    if not content:
        raise ImportFileError("The uploaded file is empty.")

    if ext == "csv":
        return _read_csv(content)
    return _read_xlsx(content)


# =============================================================================
# Import
# =============================================================================

def _validation_message(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else err.get("msg", "invalid"))
    return "; ".join(parts)


def import_rows(db: Session, rows: list[RawRow]) -> ImportResult:
    """
    Create one customer per row. A bad row is counted and skipped; only an
    unreachable database aborts the batch. Row numbers in the result are
    1-based data rows.
    """
    result = ImportResult()

    for number, row in enumerate(rows, start=1):
        try:
            payload = to_customer_create(row)
            customer_service.create_customer(db, payload)
        except ValidationError as exc:
            message = _validation_message(exc)
        except OperationalError as exc:
            # Database gone: every remaining row would fail the same way
            db.rollback()
            logger.error("Import aborted at row %d: %s", number, exc)
            raise StorageUnavailableError() from exc
        except (CRMError, SQLAlchemyError) as exc:
            db.rollback()
            message = str(exc)
        else:
            result.imported += 1
            continue

        result.failed += 1
        result.errors.append(ImportRowError(row=number, message=message))
        logger.warning("Import row %d skipped: %s", number, message)

    logger.info("Import finished: %d imported, %d failed", result.imported, result.failed)
    return result


def import_file(db: Session, filename: str, content: bytes) -> ImportResult:
    return import_rows(db, read_spreadsheet_rows(filename, content))
