from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from surfacecrm.db.session import get_db
from surfacecrm.schemas.activity_logs import ActivityLogOut
from surfacecrm.services import activity_service

router = APIRouter()


@router.get("", response_model=list[ActivityLogOut])
def list_activity_logs(
    limit: int | None = Query(None, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    """Global feed, newest first. Every entry unless limit is given."""
    return activity_service.list_all(db, limit=limit)
