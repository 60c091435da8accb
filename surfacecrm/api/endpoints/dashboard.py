from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from surfacecrm.db.session import get_db
from surfacecrm.schemas.dashboard import DashboardStats
from surfacecrm.services import dashboard_service

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
def dashboard_stats(db: Session = Depends(get_db)):
    """Counts for the dashboard cards."""
    return dashboard_service.get_dashboard_stats(db)
