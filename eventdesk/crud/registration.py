# File: eventdesk/crud/registration.py
import logging
from datetime import datetime
from typing import List

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eventdesk.crud.base import CRUDBase, column_data
from eventdesk.models.event import Event
from eventdesk.models.registration import Registration, RegistrationType
from eventdesk.models.referral import ReferralAnswer
from eventdesk.models.waitlist_counter import WaitlistCounter
from eventdesk.schemas.registration import ReferralCreate, RegistrationCreate

logger = logging.getLogger(__name__)

MAX_CREATE_ATTEMPTS = 5


class RegistrationConflictError(Exception):
    """Sequence or waitlist position could not be assigned after repeated conflicts."""


class CRUDRegistration(CRUDBase[Registration, RegistrationCreate, RegistrationCreate]):

    def create_for_event(self, db: Session, *, obj_in: RegistrationCreate, event: Event) -> Registration:
        """
        Persist a registration for an event.

        Every registration takes the next per-event sequence number, which
        fixes creation order. Waitlist registrations also take the next
        position from the event's counter row, locked for the rest of the
        transaction. A uniqueness conflict (concurrent writers, two first-time
        seeds racing, or a backend without row locks) rolls back and starts over.
        """
        event_id = event.id
        organization_id = event.organization_id
        is_waitlist = obj_in.registration_type == RegistrationType.WAITLIST

        for attempt in range(1, MAX_CREATE_ATTEMPTS + 1):
            data = column_data(obj_in)
            data["organization_id"] = organization_id
            data["sequence"] = self._next_sequence(db, event_id)
            data["waitlist_position"] = (
                self._next_waitlist_position(db, event_id, resync=attempt > 1) if is_waitlist else None
            )

            db_obj = Registration(**data)
            db.add(db_obj)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                logger.warning(
                    f"Registration conflict for event {event_id} "
                    f"(attempt {attempt}/{MAX_CREATE_ATTEMPTS}): {str(e.orig)}"
                )
                continue

            db.refresh(db_obj)
            logger.info(
                f"Created {db_obj.registration_type} registration {db_obj.id} for event {event_id}"
                + (f" at waitlist position {db_obj.waitlist_position}" if is_waitlist else "")
            )
            return db_obj

        raise RegistrationConflictError(
            f"Could not record a registration for event {event_id} after {MAX_CREATE_ATTEMPTS} attempts"
        )

    def _next_sequence(self, db: Session, event_id: str) -> int:
        highest = (
            db.query(func.max(Registration.sequence))
            .filter(Registration.event_id == event_id)
            .scalar()
        )
        return (highest or 0) + 1

    def _next_waitlist_position(self, db: Session, event_id: str, resync: bool = False) -> int:
        counter = (
            db.query(WaitlistCounter)
            .filter(WaitlistCounter.event_id == event_id)
            .with_for_update()
            .first()
        )
        if counter is None:
            # First waitlist join since the counter existed: seed from what is already stored
            existing = self.count_waitlist(db, event_id=event_id)
            counter = WaitlistCounter(event_id=event_id, last_position=existing)
            db.add(counter)
        elif resync:
            # A conflict means a position at or above the counter is taken
            highest = (
                db.query(func.max(Registration.waitlist_position))
                .filter(Registration.event_id == event_id)
                .scalar()
            ) or 0
            counter.last_position = max(counter.last_position, highest)

        counter.last_position += 1
        return counter.last_position

    def count_waitlist(self, db: Session, *, event_id: str) -> int:
        return (
            db.query(func.count(Registration.id))
            .filter(
                Registration.event_id == event_id,
                Registration.registration_type == RegistrationType.WAITLIST.value,
            )
            .scalar()
        )

    def count_for_event(self, db: Session, *, event_id: str) -> int:
        return db.query(func.count(Registration.id)).filter(Registration.event_id == event_id).scalar()

    def get_by_event(self, db: Session, *, event_id: str) -> List[Registration]:
        """All registrations for an event, in creation order."""
        return (
            db.query(Registration)
            .filter(Registration.event_id == event_id)
            .order_by(Registration.created_at.asc(), Registration.sequence.asc(), Registration.id.asc())
            .all()
        )

    def get_waitlist(self, db: Session, *, event_id: str) -> List[Registration]:
        return (
            db.query(Registration)
            .filter(
                Registration.event_id == event_id,
                Registration.registration_type == RegistrationType.WAITLIST.value,
            )
            .order_by(Registration.waitlist_position.asc())
            .all()
        )

    def mark_email_sent(self, db: Session, *, db_obj: Registration) -> Registration:
        db_obj.email_sent = True
        db_obj.last_email_sent = datetime.utcnow()
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def save_referral(
        self, db: Session, *, registration_id: str, obj_in: ReferralCreate
    ) -> ReferralAnswer:
        """Store the survey answer for a registration, replacing an earlier one."""
        answer = (
            db.query(ReferralAnswer)
            .filter(ReferralAnswer.registration_id == registration_id)
            .first()
        )
        if answer is None:
            answer = ReferralAnswer(registration_id=registration_id)
        answer.source = obj_in.source
        answer.other_details = obj_in.other_details

        db.add(answer)
        db.commit()
        db.refresh(answer)
        return answer


registration = CRUDRegistration(Registration)
