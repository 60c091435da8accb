from __future__ import annotations

from fastapi import APIRouter, Depends, File, Query, Response, UploadFile, status
from sqlalchemy.orm import Session

from surfacecrm.db.session import get_db
from surfacecrm.schemas.activity_logs import ActivityLogOut
from surfacecrm.schemas.customers import CustomerCreate, CustomerOut, CustomerPatch
from surfacecrm.schemas.email_logs import EmailLogCreate, EmailLogOut
from surfacecrm.schemas.imports import ImportResult
from surfacecrm.schemas.notes import NoteCreate, NoteOut
from surfacecrm.services import (
    activity_service,
    customer_service,
    email_log_service,
    export_service,
    follow_ups,
    import_mapper,
    note_service,
)
from surfacecrm.services.customer_filter import CustomerFilter, filter_customers

router = APIRouter()


# ----------------------------
# Collection
# ----------------------------

@router.get("", response_model=list[CustomerOut])
def list_customers(
    search: str | None = Query(None),
    country: str | None = Query(None),
    status_: str | None = Query(None, alias="status"),
    priority: str | None = Query(None),
    customer_type: str | None = Query(None, alias="customerType"),
    sort: str | None = Query(None, description="name, country, city, status, priority, customerType, nextFollowUpDate, createdAt, updatedAt"),
    order: str = Query("asc", pattern="^(asc|desc)$"),
    db: Session = Depends(get_db),
):
    """
    All customers, optionally filtered.
    Equality filters are exact; search matches name, tags or requirements.
    """
    rows = customer_service.list_customers(db, sort=sort, descending=(order == "desc"))
    criteria = CustomerFilter.from_params(
        search=search,
        country=country,
        status=status_,
        priority=priority,
        customer_type=customer_type,
    )
    return filter_customers(rows, criteria)


@router.post("", response_model=CustomerOut, status_code=status.HTTP_201_CREATED)
def create_customer(payload: CustomerCreate, db: Session = Depends(get_db)):
    return customer_service.create_customer(db, payload)


@router.get("/needs-attention", response_model=list[CustomerOut])
def customers_needing_attention(db: Session = Depends(get_db)):
    """Hot leads and pinned customers."""
    return follow_ups.get_customers_needing_attention(db)


@router.get("/export")
def export_customers(
    fmt: str = Query("xlsx", alias="format", pattern="^(xlsx|csv)$"),
    db: Session = Depends(get_db),
):
    content, media_type, filename = export_service.export_customers(customer_service.list_customers(db), fmt)
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/import", response_model=ImportResult)
def import_customers(file: UploadFile = File(...), db: Session = Depends(get_db)):
    """
    Upload .xlsx or .csv. Rows that fail are counted and reported; they do not stop the import.
    """
    content = file.file.read()
    return import_mapper.import_file(db, file.filename or "", content)


# ----------------------------
# Single customer
# ----------------------------

@router.get("/{customer_id}", response_model=CustomerOut)
def get_customer(customer_id: str, db: Session = Depends(get_db)):
    return customer_service.get_customer_or_404(db, customer_id)


@router.put("/{customer_id}", response_model=CustomerOut)
def replace_customer(customer_id: str, payload: CustomerCreate, db: Session = Depends(get_db)):
    return customer_service.update_customer(db, customer_id, payload)


@router.patch("/{customer_id}", response_model=CustomerOut)
def update_customer(customer_id: str, payload: CustomerPatch, db: Session = Depends(get_db)):
    return customer_service.update_customer(db, customer_id, payload)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(customer_id: str, db: Session = Depends(get_db)):
    customer_service.delete_customer(db, customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.api_route("/{customer_id}/toggle-hot-lead", methods=["PATCH", "POST"], response_model=CustomerOut)
def toggle_hot_lead(customer_id: str, db: Session = Depends(get_db)):
    return customer_service.toggle_hot_lead(db, customer_id)


@router.api_route("/{customer_id}/toggle-pinned", methods=["PATCH", "POST"], response_model=CustomerOut)
def toggle_pinned(customer_id: str, db: Session = Depends(get_db)):
    return customer_service.toggle_pinned(db, customer_id)


# ----------------------------
# Owned records
# ----------------------------

@router.get("/{customer_id}/notes", response_model=list[NoteOut])
def list_notes(customer_id: str, db: Session = Depends(get_db)):
    customer_service.get_customer_or_404(db, customer_id)
    return note_service.list_notes_for_customer(db, customer_id)


@router.post("/{customer_id}/notes", response_model=NoteOut, status_code=status.HTTP_201_CREATED)
def create_note(customer_id: str, payload: NoteCreate, db: Session = Depends(get_db)):
    return note_service.create_note(db, customer_id, payload)


@router.get("/{customer_id}/email-logs", response_model=list[EmailLogOut])
def list_email_logs(customer_id: str, db: Session = Depends(get_db)):
    customer_service.get_customer_or_404(db, customer_id)
    return email_log_service.list_email_logs_for_customer(db, customer_id)


@router.post("/{customer_id}/email-logs", response_model=EmailLogOut, status_code=status.HTTP_201_CREATED)
def create_email_log(customer_id: str, payload: EmailLogCreate, db: Session = Depends(get_db)):
    return email_log_service.create_email_log(db, customer_id, payload)


@router.get("/{customer_id}/activity-logs", response_model=list[ActivityLogOut])
def list_activity_logs(customer_id: str, db: Session = Depends(get_db)):
    customer_service.get_customer_or_404(db, customer_id)
    return activity_service.list_for_customer(db, customer_id)
