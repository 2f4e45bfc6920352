# File: eventdesk/crud/organization.py
from typing import Optional
from sqlalchemy.orm import Session
from eventdesk.crud.base import CRUDBase, column_data
from eventdesk.models.organization import Organization
from eventdesk.schemas.organization import OrganizationCreate, OrganizationUpdate


class CRUDOrganization(CRUDBase[Organization, OrganizationCreate, OrganizationUpdate]):

    def get_by_slug(self, db: Session, *, slug: str) -> Optional[Organization]:
        return db.query(Organization).filter(Organization.slug == slug.strip().lower()).first()

    def create_with_owner(self, db: Session, *, obj_in: OrganizationCreate, owner_id: str) -> Organization:
        data = column_data(obj_in)
        data["owner_id"] = obj_in.owner_id or owner_id

        db_obj = Organization(**data)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj


organization = CRUDOrganization(Organization)
