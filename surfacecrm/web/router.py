from __future__ import annotations

import datetime as dt
from pathlib import Path

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError
from sqlalchemy.orm import Session

from surfacecrm.core.config import settings
from surfacecrm.db.session import get_db
from surfacecrm.schemas.customers import CustomerCreate, CustomerStatus, CustomerType, Priority
from surfacecrm.services import activity_service, customer_service, dashboard_service, follow_ups
from surfacecrm.services.customer_filter import CustomerFilter, distinct_countries, filter_customers

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))
web_router = APIRouter()


def _customers_context(db: Session, criteria: CustomerFilter, error: str | None = None) -> dict:
    """Everything customers.html needs; the filter state travels in the query string only."""
    rows = customer_service.list_customers(db)
    return {
        "customers": filter_customers(rows, criteria),
        "total": len(rows),
        "filters": criteria,
        "countries": distinct_countries(rows),
        "statuses": [s.value for s in CustomerStatus],
        "priorities": [p.value for p in Priority],
        "customer_types": [t.value for t in CustomerType],
        "error": error,
    }


@web_router.get("/", response_class=HTMLResponse)
def home(request: Request):
    return RedirectResponse(url="/dashboard", status_code=302)


@web_router.get("/dashboard", response_class=HTMLResponse)
def dashboard(request: Request, db: Session = Depends(get_db)):
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "stats": dashboard_service.get_dashboard_stats(db),
            "attention": follow_ups.get_customers_needing_attention(db),
            "recent_activity": activity_service.list_all(db, limit=settings.activity_feed_limit),
        },
    )


@web_router.get("/customers", response_class=HTMLResponse)
def customers_page(
    request: Request,
    search: str | None = None,
    country: str | None = None,
    status: str | None = None,
    priority: str | None = None,
    customer_type: str | None = None,
    db: Session = Depends(get_db),
):
    criteria = CustomerFilter.from_params(
        search=search,
        country=country,
        status=status,
        priority=priority,
        customer_type=customer_type,
    )
    return templates.TemplateResponse(request, "customers.html", _customers_context(db, criteria))


@web_router.post("/customers")
def customers_create(
    request: Request,
    name: str = Form(""),
    contact_person: str = Form(""),
    email: str = Form(""),
    country: str = Form(""),
    city: str = Form(""),
    phone: str = Form(""),
    customer_type: str = Form("Other"),
    priority: str = Form("Medium"),
    tags: str = Form(""),
    requirements: str = Form(""),
    db: Session = Depends(get_db),
):
    try:
        payload = CustomerCreate(
            name=name,
            contact_person=contact_person,
            email=email,
            country=country,
            city=city,
            phone=phone,
            customer_type=customer_type,
            priority=priority,
            tags=tags,
            requirements=requirements,
        )
    except ValidationError as e:
        # Re-render the list with the problem shown above the form
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        return templates.TemplateResponse(
            request,
            "customers.html",
            _customers_context(db, CustomerFilter(), error=f"Please check: {fields}"),
            status_code=400,
        )

    customer_service.create_customer(db, payload)
    return RedirectResponse(url="/customers", status_code=302)


@web_router.get("/follow-ups", response_class=HTMLResponse)
def follow_ups_page(request: Request, db: Session = Depends(get_db)):
    today = dt.date.today()
    groups = follow_ups.group_follow_ups(customer_service.list_customers(db), today=today)
    return templates.TemplateResponse(request, "follow_ups.html", {"groups": groups, "today": today})
