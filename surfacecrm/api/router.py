from fastapi import APIRouter

from surfacecrm.api.endpoints import activity_logs
from surfacecrm.api.endpoints import customers
from surfacecrm.api.endpoints import dashboard
from surfacecrm.api.endpoints import email_logs
from surfacecrm.api.endpoints import follow_ups
from surfacecrm.api.endpoints import notes

api_router = APIRouter()

api_router.include_router(customers.router, prefix="/customers", tags=["customers"])
api_router.include_router(notes.router, prefix="/notes", tags=["notes"])
api_router.include_router(email_logs.router, prefix="/email-logs", tags=["email-logs"])
api_router.include_router(activity_logs.router, prefix="/activity-logs", tags=["activity"])
api_router.include_router(follow_ups.router, prefix="/follow-ups", tags=["follow-ups"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
