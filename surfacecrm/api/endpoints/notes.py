from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from surfacecrm.db.session import get_db
from surfacecrm.schemas.notes import NoteOut, NoteUpdate
from surfacecrm.services import note_service

router = APIRouter()


@router.get("/{note_id}", response_model=NoteOut)
def get_note(note_id: str, db: Session = Depends(get_db)):
    return note_service.get_note_or_404(db, note_id)


@router.put("/{note_id}", response_model=NoteOut)
def update_note(note_id: str, payload: NoteUpdate, db: Session = Depends(get_db)):
    return note_service.update_note(db, note_id, payload)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_note(note_id: str, db: Session = Depends(get_db)):
    note_service.delete_note(db, note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{note_id}/toggle-key", response_model=NoteOut)
def toggle_key_note(note_id: str, db: Session = Depends(get_db)):
    return note_service.toggle_key_note(db, note_id)
