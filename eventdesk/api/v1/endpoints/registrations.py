# File: eventdesk/api/v1/endpoints/registrations.py
import io
import logging
from typing import Any, List
from urllib.parse import quote

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from eventdesk import crud, schemas
from eventdesk.api import deps
from eventdesk.api.v1.endpoints.events import get_event_or_404
from eventdesk.core.email_service import email_service
from eventdesk.db.database import SessionLocal
from eventdesk.schemas.registration import EMAIL_REQUIRED_TYPES
from eventdesk.services.registration_export import build_csv, export_filename

logger = logging.getLogger(__name__)

router = APIRouter()


def send_confirmation_email(registration_id: str, event_title: str) -> None:
    """Background task: confirm a waitlist join or presale request by email."""
    db = SessionLocal()
    try:
        registration = crud.registration.get(db, id=registration_id)
        if not registration or not registration.email:
            return

        sent = email_service.send_registration_confirmation(
            to_email=registration.email,
            name=registration.name,
            event_title=event_title,
            registration_type=registration.registration_type,
            waitlist_position=registration.waitlist_position,
        )
        if sent:
            crud.registration.mark_email_sent(db, db_obj=registration)
        else:
            logger.warning(f"📧 Confirmation email not sent for registration {registration_id}")
    finally:
        db.close()


@router.post("", response_model=schemas.Registration, status_code=status.HTTP_201_CREATED)
def create_registration(
    *,
    db: Session = Depends(deps.get_db),
    registration_in: schemas.RegistrationCreate,
    background_tasks: BackgroundTasks,
) -> Any:
    """Record an RSVP, presale request or waitlist join. Public."""
    event = get_event_or_404(db, registration_in.event_id)
    event_title = event.title

    try:
        registration = crud.registration.create_for_event(db, obj_in=registration_in, event=event)
    except crud.RegistrationConflictError as e:
        logger.error(f"💥 {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Registrations are busy right now, please try again",
        )

    if registration.registration_type in EMAIL_REQUIRED_TYPES and registration.email:
        background_tasks.add_task(send_confirmation_email, registration.id, event_title)

    return registration


@router.post("/{registration_id}/referral", response_model=schemas.Referral, status_code=status.HTTP_201_CREATED)
def submit_referral(
    *,
    db: Session = Depends(deps.get_db),
    registration_id: str,
    referral_in: schemas.ReferralCreate,
) -> Any:
    """Optional "how did you hear about us" answer after an RSVP."""
    registration = crud.registration.get(db, id=registration_id)
    if not registration:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Registration not found")

    return crud.registration.save_referral(db, registration_id=registration.id, obj_in=referral_in)


@router.get("/event/{event_id}", response_model=List[schemas.Registration])
def list_event_registrations(
    *,
    db: Session = Depends(deps.get_db),
    event_id: str,
    principal: deps.AdminPrincipal = Depends(deps.get_current_admin),
) -> Any:
    """All registrations for an event, in creation order."""
    event = get_event_or_404(db, event_id)
    deps.ensure_can_manage(principal, event.organization_id)
    return crud.registration.get_by_event(db, event_id=event.id)


@router.get("/event/{event_id}/export")
def export_event_registrations(
    *,
    db: Session = Depends(deps.get_db),
    event_id: str,
    principal: deps.AdminPrincipal = Depends(deps.get_current_admin),
) -> StreamingResponse:
    """Download the event's registrations as CSV."""
    event = get_event_or_404(db, event_id)
    deps.ensure_can_manage(principal, event.organization_id)

    registrations = [
        schemas.Registration.model_validate(item)
        for item in crud.registration.get_by_event(db, event_id=event.id)
    ]
    content = build_csv(registrations)
    filename = export_filename(event.title)
    ascii_filename = filename.encode("ascii", "replace").decode("ascii").replace('"', "'")

    logger.info(f"📤 Exported {len(registrations)} registrations for event {event.id}")
    return StreamingResponse(
        io.BytesIO(content.encode("utf-8")),
        media_type="text/csv",
        headers={
            "Content-Disposition": (
                f'attachment; filename="{ascii_filename}"; filename*=UTF-8\'\'{quote(filename)}'
            )
        },
    )


@router.patch("/{registration_id}/email-sent", response_model=schemas.Registration)
def mark_email_sent(
    *,
    db: Session = Depends(deps.get_db),
    registration_id: str,
    principal: deps.AdminPrincipal = Depends(deps.get_current_admin),
) -> Any:
    registration = crud.registration.get(db, id=registration_id)
    if not registration:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Registration not found")
    deps.ensure_can_manage(principal, registration.organization_id)

    return crud.registration.mark_email_sent(db, db_obj=registration)
