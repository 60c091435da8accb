from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from surfacecrm.db.session import get_db
from surfacecrm.services import email_log_service

router = APIRouter()


@router.delete("/{email_log_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_email_log(email_log_id: str, db: Session = Depends(get_db)):
    email_log_service.delete_email_log(db, email_log_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
