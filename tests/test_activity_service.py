from __future__ import annotations

import datetime as dt

import pytest

from surfacecrm.core.errors import RecordValidationError
from surfacecrm.services import activity_service
from surfacecrm.services.activity_service import ActivityAction


def test_record_requires_existing_customer(db):
    with pytest.raises(RecordValidationError):
        activity_service.record(db, "missing", ActivityAction.CUSTOMER_PINNED)


def test_feed_is_newest_first_with_customer_names(db, make_customer):
    acme = make_customer(name="Acme")
    beta = make_customer(name="Beta")
    base = dt.datetime(2024, 1, 1, 12, 0)

    for offset, (customer, action) in enumerate(
        [
            (acme, ActivityAction.HOT_LEAD_ADDED),
            (beta, ActivityAction.CUSTOMER_PINNED),
            (acme, ActivityAction.HOT_LEAD_REMOVED),
        ]
    ):
        entry = activity_service.record(db, customer.id, action)
        entry.timestamp = base + dt.timedelta(minutes=offset)
    db.commit()

    feed = activity_service.list_all(db)
    assert [(e.customer_name, e.action) for e in feed] == [
        ("Acme", "Hot Lead Removed"),
        ("Beta", "Customer Pinned"),
        ("Acme", "Hot Lead Added"),
    ]

    assert len(activity_service.list_all(db, limit=2)) == 2
    assert [e.action for e in activity_service.list_for_customer(db, acme.id)] == [
        "Hot Lead Removed",
        "Hot Lead Added",
    ]


def test_free_text_action_is_stored_as_given(db, make_customer):
    customer = make_customer()
    entry = activity_service.record(db, customer.id, "Imported", "From spreadsheet")
    db.commit()
    assert entry.action == "Imported"
    assert entry.description == "From spreadsheet"
