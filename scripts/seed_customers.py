from __future__ import annotations

import datetime as dt

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from surfacecrm.db.base import Base, utcnow
from surfacecrm.db.session import SessionLocal, get_engine
from surfacecrm.models import Customer
from surfacecrm.schemas.customers import CustomerCreate
from surfacecrm.schemas.notes import NoteCreate
from surfacecrm.services import customer_service, note_service

SAMPLE_CUSTOMERS = [
    {
        "name": "Acme Tile Distributors",
        "isReturningCustomer": True,
        "country": "United States",
        "region": "California",
        "city": "Los Angeles",
        "contactPerson": "John Smith",
        "email": "john@acmetile.com",
        "phone": "+1-555-123-4567",
        "website": "www.acmetile.com",
        "customerType": "Distributor",
        "requirements": "Looking for high-end marble and granite tiles for luxury projects",
        "status": "Won",
        "priority": "High",
        "tags": ["Wholesale", "Luxury", "Commercial"],
        "valueTier": "Premium",
        "directImport": "Yes",
        "lastFollowUpDate": "2023-05-15",
        "nextFollowUpDate": "2023-06-01",
        "lastContactNotes": "Discussed new shipment of Italian marble",
        "keyMeetingPoints": "Wants to increase order volume by 20%",
    },
    {
        "name": "Modern Design Studio",
        "country": "Canada",
        "region": "Ontario",
        "city": "Toronto",
        "contactPerson": "Emma Wilson",
        "email": "emma@moderndesign.ca",
        "phone": "+1-555-987-6543",
        "website": "www.moderndesign.ca",
        "customerType": "Designer",
        "requirements": "Needs unique patterned tiles for boutique hotel project",
        "status": "Meeting Scheduled",
        "priority": "Medium",
        "tags": ["Boutique", "Hotel", "Interior"],
        "valueTier": "Standard",
        "directImport": "No",
        "lastFollowUpDate": "2023-05-20",
        "nextFollowUpDate": "2023-05-30",
        "lastContactNotes": "Sent samples of patterned ceramic tiles",
        "keyMeetingPoints": "Budget constraints, looking for bulk discount",
    },
    {
        "name": "Build Right Construction",
        "country": "United Kingdom",
        "region": "England",
        "city": "London",
        "contactPerson": "Robert Johnson",
        "email": "robert@buildright.co.uk",
        "phone": "+44-20-1234-5678",
        "website": "www.buildright.co.uk",
        "customerType": "Contractor",
        "requirements": "Large order of durable floor tiles for commercial building",
        "status": "Negotiation",
        "priority": "High",
        "tags": ["Commercial", "Large Scale", "Flooring"],
        "valueTier": "Premium",
        "directImport": "Distributor",
        "lastFollowUpDate": "2023-05-18",
        "nextFollowUpDate": "2023-05-28",
        "lastContactNotes": "Discussing price points for bulk order",
        "keyMeetingPoints": "Need delivery within 3 months",
    },
    {
        "name": "Elite Home Renovations",
        "isReturningCustomer": True,
        "country": "Australia",
        "region": "New South Wales",
        "city": "Sydney",
        "contactPerson": "Sarah Parker",
        "email": "sarah@elitehome.com.au",
        "phone": "+61-2-9876-5432",
        "website": "www.elitehome.com.au",
        "customerType": "Retailer",
        "requirements": "Searching for eco-friendly and sustainable tile options",
        "status": "Email Sent",
        "priority": "Low",
        "tags": ["Eco-friendly", "Residential", "Renovation"],
        "valueTier": "Standard",
        "directImport": "No",
        "lastFollowUpDate": "2023-05-10",
        "nextFollowUpDate": "2023-06-10",
        "lastContactNotes": "Sent catalog of sustainable tile options",
        "keyMeetingPoints": "Interested in green certification",
    },
    {
        "name": "Huang & Associates Architecture",
        "country": "Japan",
        "region": "Kanto",
        "city": "Tokyo",
        "contactPerson": "Ken Huang",
        "email": "ken@huangarchitects.jp",
        "phone": "+81-3-1234-5678",
        "website": "www.huangarchitects.jp",
        "customerType": "Architect",
        "requirements": "Specialty stone for traditional-modern fusion project",
        "status": "Lead",
        "priority": "Medium",
        "tags": ["Cultural", "Specialty", "High-end"],
        "valueTier": "Premium",
        "directImport": "Yes",
        "nextFollowUpDate": "2023-05-31",
        "lastContactNotes": "Initial inquiry about specialty stone options",
        "keyMeetingPoints": "Looking for exclusive materials",
    },
]


def _add_sample_notes(db: Session, customer: Customer) -> None:
    samples = [
        (
            15,
            NoteCreate(
                text=f"Initial meeting with {customer.contact_person}. Discussed requirements and potential products.",
                next_step="Send product catalog",
                is_key=True,
            ),
        ),
        (
            7,
            NoteCreate(
                text=f"Followed up about product options. {customer.contact_person} expressed interest in our premium line.",
                next_step="Prepare price quote",
            ),
        ),
    ]
    for days_ago, payload in samples:
        note = note_service.create_note(db, customer.id, payload)
        note.timestamp = utcnow() - dt.timedelta(days=days_ago)
    db.commit()


def main():
    Base.metadata.create_all(bind=get_engine())

    db: Session = SessionLocal()
    try:
        existing = db.scalar(select(func.count()).select_from(Customer)) or 0
        if existing:
            print(f"Customers table already has {existing} rows; nothing seeded.")
            return

        for data in SAMPLE_CUSTOMERS:
            customer = customer_service.create_customer(db, CustomerCreate.model_validate(data))
            _add_sample_notes(db, customer)
            print("Created customer:", customer.name)

        print(f"Seeded {len(SAMPLE_CUSTOMERS)} customers with notes.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
