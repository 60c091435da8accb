from __future__ import annotations

from surfacecrm.schemas.base import CamelModel


class DashboardStats(CamelModel):
    total_customers: int
    hot_leads: int
    pinned: int
    follow_ups_scheduled: int
    due_today: int
    overdue: int
    by_status: dict[str, int]
