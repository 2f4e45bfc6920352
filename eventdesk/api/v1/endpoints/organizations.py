# File: eventdesk/api/v1/endpoints/organizations.py
import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from eventdesk import crud, schemas
from eventdesk.api import deps

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=schemas.Organization, status_code=status.HTTP_201_CREATED)
def create_organization(
    *,
    db: Session = Depends(deps.get_db),
    organization_in: schemas.OrganizationCreate,
    principal: deps.AdminPrincipal = Depends(deps.get_current_admin),
) -> Any:
    """Create an organization (admin only)."""
    if principal.role != deps.ROLE_ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only admins can create organizations",
        )

    if crud.organization.get_by_slug(db, slug=organization_in.slug):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Organization with slug '{organization_in.slug}' already exists",
        )

    organization = crud.organization.create_with_owner(db, obj_in=organization_in, owner_id=principal.user_id)
    logger.info(f"🏢 Organization created: {organization.slug} by {principal.user_id}")
    return organization


@router.get("/{slug}", response_model=schemas.Organization)
def get_organization_by_slug(
    *,
    db: Session = Depends(deps.get_db),
    slug: str,
) -> Any:
    """Public organization page data."""
    organization = crud.organization.get_by_slug(db, slug=slug)
    if not organization:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Organization not found")
    return organization


@router.put("/{organization_id}", response_model=schemas.Organization)
def update_organization(
    *,
    db: Session = Depends(deps.get_db),
    organization_id: str,
    organization_in: schemas.OrganizationUpdate,
    principal: deps.AdminPrincipal = Depends(deps.get_current_admin),
) -> Any:
    organization = crud.organization.get(db, id=organization_id)
    if not organization:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Organization not found")
    deps.ensure_can_manage(principal, organization.id)

    organization = crud.organization.update(db, db_obj=organization, obj_in=organization_in)
    logger.info(f"🏢 Organization updated: {organization.slug} by {principal.user_id}")
    return organization


@router.get("/{organization_id}/waitlists", response_model=schemas.WaitlistOverview)
def get_waitlist_overview(
    *,
    db: Session = Depends(deps.get_db),
    organization_id: str,
    principal: deps.AdminPrincipal = Depends(deps.get_current_admin),
) -> Any:
    """Waitlists of every sold-out event of the organization, ordered by position."""
    organization = crud.organization.get(db, id=organization_id)
    if not organization:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Organization not found")
    deps.ensure_can_manage(principal, organization.id)

    event_waitlists = []
    for event in crud.event.get_sold_out_by_organization(db, organization_id=organization.id):
        entries = crud.registration.get_waitlist(db, event_id=event.id)
        event_waitlists.append(
            schemas.EventWaitlist(
                event_id=event.id,
                event_title=event.title,
                event_date=event.date,
                capacity=event.capacity,
                entries=[schemas.Registration.model_validate(entry) for entry in entries],
            )
        )

    return schemas.WaitlistOverview(
        organization_id=organization.id,
        total_events=len(event_waitlists),
        total_entries=sum(len(item.entries) for item in event_waitlists),
        events=event_waitlists,
    )
