# File: eventdesk/api/v1/endpoints/events.py
import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from eventdesk import crud, schemas
from eventdesk.api import deps
from eventdesk.models.event import Event
from eventdesk.services.capacity import summarize_capacity
from eventdesk.services.registration_intake import select_registration_action

logger = logging.getLogger(__name__)

router = APIRouter()


def get_event_or_404(db: Session, event_id: str) -> Event:
    event = crud.event.get(db, id=event_id)
    if not event:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    return event


@router.get("", response_model=List[schemas.Event])
def list_events(
    *,
    db: Session = Depends(deps.get_db),
    organization: Optional[str] = Query(None, description="Organization id"),
    skip: int = 0,
    limit: int = 100,
) -> Any:
    """Events, newest first. Public."""
    if organization:
        return crud.event.get_by_organization(db, organization_id=organization, skip=skip, limit=limit)
    return crud.event.get_multi(db, skip=skip, limit=limit)


@router.get("/{event_id}", response_model=schemas.EventDetail)
def get_event(
    *,
    db: Session = Depends(deps.get_db),
    event_id: str,
) -> Any:
    """Single event, with the registration action visitors are offered."""
    event = get_event_or_404(db, event_id)
    detail = schemas.EventDetail.model_validate(event)
    detail.registration_action = select_registration_action(detail).value
    return detail


@router.post("", response_model=schemas.Event, status_code=status.HTTP_201_CREATED)
def create_event(
    *,
    db: Session = Depends(deps.get_db),
    event_in: schemas.EventCreate,
    principal: deps.AdminPrincipal = Depends(deps.get_current_admin),
) -> Any:
    if not crud.organization.get(db, id=event_in.organization_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Organization not found")
    deps.ensure_can_manage(principal, event_in.organization_id)

    event = crud.event.create(db, obj_in=event_in)
    logger.info(f"📅 Event created: {event.id} '{event.title}' by {principal.user_id}")
    return event


@router.put("/{event_id}", response_model=schemas.Event)
def update_event(
    *,
    db: Session = Depends(deps.get_db),
    event_id: str,
    event_in: schemas.EventUpdate,
    principal: deps.AdminPrincipal = Depends(deps.get_current_admin),
) -> Any:
    event = get_event_or_404(db, event_id)
    deps.ensure_can_manage(principal, event.organization_id)

    event = crud.event.update(db, db_obj=event, obj_in=event_in)
    logger.info(f"📅 Event updated: {event.id} (status {event.status}) by {principal.user_id}")
    return event


@router.delete("/{event_id}", response_model=schemas.Message)
def delete_event(
    *,
    db: Session = Depends(deps.get_db),
    event_id: str,
    principal: deps.AdminPrincipal = Depends(deps.get_current_admin),
) -> Any:
    """Delete an event together with its registrations and counters."""
    event = get_event_or_404(db, event_id)
    deps.ensure_can_manage(principal, event.organization_id)

    crud.event.remove(db, id=event.id)
    logger.info(f"🗑️ Event deleted: {event_id} by {principal.user_id}")
    return {"message": "Event deleted successfully"}


@router.get("/{event_id}/manual-sales", response_model=schemas.ManualSales)
def get_manual_sales(
    *,
    db: Session = Depends(deps.get_db),
    event_id: str,
    principal: deps.AdminPrincipal = Depends(deps.get_current_admin),
) -> Any:
    event = get_event_or_404(db, event_id)
    deps.ensure_can_manage(principal, event.organization_id)

    row = crud.manual_sales.get(db, event_id=event.id)
    if row is None:
        return schemas.ManualSales(event_id=event.id, count=0)
    return row


@router.put("/{event_id}/manual-sales", response_model=schemas.ManualSales)
def set_manual_sales(
    *,
    db: Session = Depends(deps.get_db),
    event_id: str,
    sales_in: schemas.ManualSalesUpdate,
    principal: deps.AdminPrincipal = Depends(deps.get_current_admin),
) -> Any:
    """Record tickets sold outside the system. Shared by every admin of the organization."""
    event = get_event_or_404(db, event_id)
    deps.ensure_can_manage(principal, event.organization_id)

    return crud.manual_sales.set_count(
        db, event_id=event.id, count=sales_in.count, updated_by=principal.email or principal.user_id
    )


@router.get("/{event_id}/capacity", response_model=schemas.CapacitySummary)
def get_capacity(
    *,
    db: Session = Depends(deps.get_db),
    event_id: str,
    principal: deps.AdminPrincipal = Depends(deps.get_current_admin),
) -> Any:
    event = get_event_or_404(db, event_id)
    deps.ensure_can_manage(principal, event.organization_id)

    return summarize_capacity(
        event.capacity,
        crud.registration.count_for_event(db, event_id=event.id),
        crud.manual_sales.get_count(db, event_id=event.id),
    )
