# File: eventdesk/crud/event.py
from typing import List, Optional
from sqlalchemy.orm import Session
from eventdesk.crud.base import CRUDBase
from eventdesk.models.event import Event, EventStatus
from eventdesk.schemas.event import EventCreate, EventUpdate


class CRUDEvent(CRUDBase[Event, EventCreate, EventUpdate]):

    def get_multi(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[Event]:
        return db.query(Event).order_by(Event.date.desc()).offset(skip).limit(limit).all()

    def get_by_organization(
        self, db: Session, *, organization_id: str, skip: int = 0, limit: int = 100
    ) -> List[Event]:
        return (
            db.query(Event)
            .filter(Event.organization_id == organization_id)
            .order_by(Event.date.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_sold_out_by_organization(self, db: Session, *, organization_id: str) -> List[Event]:
        return (
            db.query(Event)
            .filter(
                Event.organization_id == organization_id,
                Event.status == EventStatus.SOLD_OUT.value,
            )
            .order_by(Event.date.asc())
            .all()
        )


event = CRUDEvent(Event)
