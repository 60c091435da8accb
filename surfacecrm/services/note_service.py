from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from surfacecrm.core.errors import NotFoundError
from surfacecrm.models.note import Note
from surfacecrm.schemas.notes import NoteCreate, NoteUpdate
from surfacecrm.services.customer_service import get_customer_or_404


def get_note_or_404(db: Session, note_id: str) -> Note:
    note = db.get(Note, note_id)
    if note is None:
        raise NotFoundError("Note", note_id)
    return note


def list_notes_for_customer(db: Session, customer_id: str) -> list[Note]:
    """Newest first."""
    stmt = select(Note).where(Note.customer_id == customer_id).order_by(Note.timestamp.desc())
    return list(db.scalars(stmt))


def create_note(db: Session, customer_id: str, payload: NoteCreate) -> Note:
    get_customer_or_404(db, customer_id)

    note = Note(customer_id=customer_id, **payload.model_dump())
    db.add(note)
    db.commit()
    db.refresh(note)
    return note


def update_note(db: Session, note_id: str, payload: NoteUpdate) -> Note:
    note = get_note_or_404(db, note_id)
    for k, v in payload.model_dump().items():
        setattr(note, k, v)
    db.add(note)
    db.commit()
    db.refresh(note)
    return note


def delete_note(db: Session, note_id: str) -> None:
    note = get_note_or_404(db, note_id)
    db.delete(note)
    db.commit()


def toggle_key_note(db: Session, note_id: str) -> Note:
    note = get_note_or_404(db, note_id)
    note.is_key = not note.is_key
    db.add(note)
    db.commit()
    db.refresh(note)
    return note
