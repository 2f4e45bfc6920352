import json
import os

# Must be set before eventdesk is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "development"
os.environ["SEND_EMAILS"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key"

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

import eventdesk.models  # noqa: F401  registers tables
from eventdesk import crud, schemas
from eventdesk.core.security import create_access_token
from eventdesk.db.database import Base, SessionLocal, engine
from eventdesk.main import app

EVENT_DATE = datetime(2026, 11, 20, 20, 0, 0)


@pytest.fixture(autouse=True)
def database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


def make_token(role: str = "admin", organization_ids: Optional[List[str]] = None, sub: str = "user-1") -> str:
    claims: Dict[str, Any] = {"sub": sub, "role": role, "email": f"{sub}@example.com"}
    if organization_ids is not None:
        claims["organization_ids"] = organization_ids
    return create_access_token(claims)


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {make_token('admin', sub='admin-1')}"}


@pytest.fixture
def organization(db):
    return crud.organization.create_with_owner(
        db,
        obj_in=schemas.OrganizationCreate(
            name="Brooklyn Hearts Club",
            slug="brooklyn-hearts-club",
            description="Live music nights",
            contact_email="hello@bhc.example.com",
            social_links={"instagram": "@bhc"},
            settings={"defaultLocation": "Brooklyn", "theme": {"primaryColor": "#8b5cf6"}},
        ),
        owner_id="owner-1",
    )


@pytest.fixture
def make_event(db, organization):
    def _make_event(**overrides):
        data = {
            "organization_id": organization.id,
            "title": "Rooftop Sessions",
            "date": EVENT_DATE,
            "price": {"type": "paid", "amount": 20, "description": "$20 at the door"},
            "capacity": 50,
            "registration_required": True,
            "status": "published",
        }
        data.update(overrides)
        return crud.event.create(db, obj_in=schemas.EventCreate(**data))

    return _make_event


def event_schema(**overrides) -> schemas.Event:
    """Stand-alone event for logic that needs no database."""
    data = {
        "id": "evt-1",
        "organization_id": "org-1",
        "title": "Rooftop Sessions",
        "date": EVENT_DATE,
        "price": {"type": "paid", "amount": 20},
        "capacity": 50,
        "registration_required": False,
        "status": "published",
        "created_at": EVENT_DATE - timedelta(days=30),
    }
    data.update(overrides)
    return schemas.Event(**data)


def registration_payload(event_id: str, registration_type: str, index: int = 0, **overrides) -> Dict[str, Any]:
    data = {
        "id": f"reg-{index}",
        "eventId": event_id,
        "name": f"Guest {index}",
        "email": f"guest{index}@example.com",
        "registrationType": registration_type,
        "createdAt": (EVENT_DATE - timedelta(days=10, minutes=-index)).isoformat(),
    }
    data.update(overrides)
    return data


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: Optional[str] = None):
        self.status_code = status_code
        self._payload = payload
        if text is not None:
            self.text = text
        elif payload is not None:
            self.text = json.dumps(payload)
        else:
            self.text = ""
        self.content = self.text.encode("utf-8")

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


@dataclass
class FakeSession:
    """Stands in for requests.Session: replays queued responses or raises queued errors."""
    responses: List[Any] = field(default_factory=list)
    calls: List[Dict[str, Any]] = field(default_factory=list)

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result
