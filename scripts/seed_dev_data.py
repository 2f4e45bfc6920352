#!/usr/bin/env python3
# File: scripts/seed_dev_data.py
"""
Seed a development database with a demo organization and a few events.
Safe to run repeatedly: existing rows (matched by slug / title) are left alone.
"""
import os
import sys
from datetime import datetime, timedelta

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from eventdesk import crud, schemas
from eventdesk.db.database import Base, SessionLocal, engine
from eventdesk.models.event import Event

DEMO_SLUG = "brooklyn-hearts-club"


def demo_events(organization_id: str):
    soon = datetime.utcnow().replace(hour=20, minute=0, second=0, microsecond=0) + timedelta(days=14)
    return [
        schemas.EventCreate(
            organization_id=organization_id,
            title="Underground Showcase: Rising Stars",
            description="An intimate evening featuring the city's most promising underground artists",
            date=soon,
            time="8:00 PM - 11:00 PM",
            location="The Underground",
            address="123 Indie Street, Brooklyn, NY 11201",
            price={"type": "paid", "amount": 15, "description": "Presale: $15 | Door: $20", "advancePrice": 15},
            capacity=75,
            registration_required=True,
            presale_enabled=True,
            status="presale",
        ),
        schemas.EventCreate(
            organization_id=organization_id,
            title="Open Mic & Community Jam",
            description="Free weekly gathering for musicians, poets, and creatives",
            date=soon - timedelta(days=7),
            time="7:00 PM - 10:00 PM",
            location="Collective Space",
            address="456 Community Ave, Brooklyn, NY 11215",
            price={"type": "free", "description": "Free event - donations appreciated"},
            registration_required=False,
            is_recurring=True,
            series={"name": "Tuesday Jams", "description": "Every Tuesday night"},
            status="published",
        ),
        schemas.EventCreate(
            organization_id=organization_id,
            title="Rooftop Sessions: Summer Finale",
            description="Our last rooftop show of the season",
            date=soon + timedelta(days=21),
            time="6:00 PM - 10:00 PM",
            location="Skyline Rooftop",
            address="789 Kent Ave, Brooklyn, NY 11249",
            price={
                "type": "group_deal",
                "amount": 25,
                "description": "$25 each, $20 each for groups of 4+",
                "groupDealDetails": {"minimumPeople": 4, "pricePerPerson": 20, "normalPricePerPerson": 25},
            },
            capacity=40,
            registration_required=True,
            status="sold_out",
        ),
    ]


def seed_dev_data():
    print("🌱 Starting development data seeding...")
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()

    try:
        organization = crud.organization.get_by_slug(db, slug=DEMO_SLUG)
        if not organization:
            organization = crud.organization.create_with_owner(
                db,
                obj_in=schemas.OrganizationCreate(
                    name="Brooklyn Hearts Club",
                    slug=DEMO_SLUG,
                    description="Intimate live music nights in Brooklyn",
                    contact_email="hello@brooklynheartsclub.com",
                    social_links={"instagram": "@brooklynheartsclub"},
                    settings={
                        "defaultLocation": "Brooklyn Venue Network",
                        "defaultAddress": "Various locations throughout Brooklyn, NY",
                        "theme": {"primaryColor": "#8b5cf6", "backgroundColor": "#0f0f23"},
                    },
                ),
                owner_id="dev-admin-user",
            )
            print(f"✅ Created organization: {organization.name} ({organization.id})")
        else:
            print(f"✅ Organization already exists: {organization.name}")

        for event_in in demo_events(organization.id):
            existing = (
                db.query(Event)
                .filter(Event.organization_id == organization.id, Event.title == event_in.title)
                .first()
            )
            if existing:
                print(f"   ↪ Event already exists: {existing.title}")
                continue
            event = crud.event.create(db, obj_in=event_in)
            print(f"   🎵 Created event: {event.title} [{event.status}]")

        print("🎉 Development data seeding completed")
    finally:
        db.close()


if __name__ == "__main__":
    seed_dev_data()
