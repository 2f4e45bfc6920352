"""
Data sources behind the public pages and the admin dashboard.

Which one a process uses follows from its ``EnvironmentConfig``:
development and sandbox talk to the database directly, staging and
production go through the REST API, and the hybrid source reads through
the API while writing directly.
"""
import abc
import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from eventdesk import crud, schemas
from eventdesk.client.api import ApiClient, ApiError, NetworkError
from eventdesk.core.config import settings
from eventdesk.core.environments import DataSourceType, EnvironmentConfig, EnvironmentConfigError
from eventdesk.services.registration_intake import select_registration_action
from eventdesk.services.registration_listing import NormalizedRegistrations, normalize_registrations

logger = logging.getLogger(__name__)

SchemaType = TypeVar("SchemaType", bound=BaseModel)


class DataSource(abc.ABC):
    @abc.abstractmethod
    def get_organization_by_slug(self, slug: str) -> Optional[schemas.Organization]: ...

    @abc.abstractmethod
    def update_organization(
        self, organization_id: str, update: schemas.OrganizationUpdate
    ) -> schemas.Organization: ...

    @abc.abstractmethod
    def list_events(self, organization_id: Optional[str] = None) -> List[schemas.Event]: ...

    @abc.abstractmethod
    def get_event(self, event_id: str) -> Optional[schemas.EventDetail]: ...

    @abc.abstractmethod
    def create_registration(self, registration: schemas.RegistrationCreate) -> schemas.Registration: ...

    @abc.abstractmethod
    def list_registrations(self, event_id: str) -> NormalizedRegistrations: ...

    @abc.abstractmethod
    def submit_referral(self, registration_id: str, referral: schemas.ReferralCreate) -> schemas.Referral: ...

    @abc.abstractmethod
    def get_manual_sales(self, event_id: str) -> int: ...

    @abc.abstractmethod
    def set_manual_sales(self, event_id: str, count: int) -> int: ...


def _wire(obj: BaseModel, exclude_unset: bool = False) -> dict:
    return obj.model_dump(mode="json", by_alias=True, exclude_unset=exclude_unset)


def _parse(schema: Type[SchemaType], payload: Any) -> SchemaType:
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        logger.error(f"Unexpected {schema.__name__} payload from API: {e.error_count()} error(s)")
        raise ApiError("Unexpected response from server") from e


class DatabaseDataSource(DataSource):
    """Direct storage access through the CRUD layer."""

    def __init__(self, session_factory: Callable[[], Session], actor: Optional[str] = None):
        self.session_factory = session_factory
        self.actor = actor

    @contextmanager
    def _session(self) -> Iterator[Session]:
        """Session scope; storage failures surface as ``NetworkError`` like a dropped API call."""
        db = None
        try:
            db = self.session_factory()
            yield db
        except SQLAlchemyError as e:
            logger.error(f"Database error in data source: {str(e)}")
            if db is not None:
                db.rollback()
            raise NetworkError() from e
        finally:
            if db is not None:
                db.close()

    def get_organization_by_slug(self, slug: str) -> Optional[schemas.Organization]:
        with self._session() as db:
            organization = crud.organization.get_by_slug(db, slug=slug)
            return schemas.Organization.model_validate(organization) if organization else None

    def update_organization(
        self, organization_id: str, update: schemas.OrganizationUpdate
    ) -> schemas.Organization:
        with self._session() as db:
            organization = crud.organization.get(db, id=organization_id)
            if not organization:
                raise ApiError("Organization not found", status=404)
            organization = crud.organization.update(db, db_obj=organization, obj_in=update)
            return schemas.Organization.model_validate(organization)

    def list_events(self, organization_id: Optional[str] = None) -> List[schemas.Event]:
        with self._session() as db:
            if organization_id:
                events = crud.event.get_by_organization(db, organization_id=organization_id)
            else:
                events = crud.event.get_multi(db)
            return [schemas.Event.model_validate(event) for event in events]

    def get_event(self, event_id: str) -> Optional[schemas.EventDetail]:
        with self._session() as db:
            event = crud.event.get(db, id=event_id)
            if not event:
                return None
            detail = schemas.EventDetail.model_validate(event)
            detail.registration_action = select_registration_action(detail).value
            return detail

    def create_registration(self, registration: schemas.RegistrationCreate) -> schemas.Registration:
        with self._session() as db:
            event = crud.event.get(db, id=registration.event_id)
            if not event:
                raise ApiError("Event not found", status=404)
            try:
                created = crud.registration.create_for_event(db, obj_in=registration, event=event)
            except crud.RegistrationConflictError as e:
                raise ApiError("Registrations are busy right now, please try again", status=409) from e
            return schemas.Registration.model_validate(created)

    def list_registrations(self, event_id: str) -> NormalizedRegistrations:
        with self._session() as db:
            registrations = crud.registration.get_by_event(db, event_id=event_id)
            return NormalizedRegistrations(
                items=[schemas.Registration.model_validate(item) for item in registrations]
            )

    def submit_referral(self, registration_id: str, referral: schemas.ReferralCreate) -> schemas.Referral:
        with self._session() as db:
            if not crud.registration.get(db, id=registration_id):
                raise ApiError("Registration not found", status=404)
            answer = crud.registration.save_referral(db, registration_id=registration_id, obj_in=referral)
            return schemas.Referral.model_validate(answer)

    def get_manual_sales(self, event_id: str) -> int:
        with self._session() as db:
            return crud.manual_sales.get_count(db, event_id=event_id)

    def set_manual_sales(self, event_id: str, count: int) -> int:
        with self._session() as db:
            if not crud.event.get(db, id=event_id):
                raise ApiError("Event not found", status=404)
            return crud.manual_sales.set_count(db, event_id=event_id, count=count, updated_by=self.actor).count


class ApiDataSource(DataSource):
    """Everything through the REST API."""

    def __init__(self, api_client: ApiClient):
        self.api = api_client

    def get_organization_by_slug(self, slug: str) -> Optional[schemas.Organization]:
        try:
            payload = self.api.organizations.get_by_slug(slug)
        except ApiError as e:
            if e.status == 404:
                return None
            raise
        return _parse(schemas.Organization, payload)

    def update_organization(
        self, organization_id: str, update: schemas.OrganizationUpdate
    ) -> schemas.Organization:
        payload = self.api.organizations.update(organization_id, _wire(update, exclude_unset=True))
        return _parse(schemas.Organization, payload)

    def list_events(self, organization_id: Optional[str] = None) -> List[schemas.Event]:
        payload = self.api.events.list(organization_id)
        if not isinstance(payload, list):
            raise ApiError("Unexpected response from server")
        return [_parse(schemas.Event, item) for item in payload]

    def get_event(self, event_id: str) -> Optional[schemas.EventDetail]:
        try:
            payload = self.api.events.get(event_id)
        except ApiError as e:
            if e.status == 404:
                return None
            raise
        return _parse(schemas.EventDetail, payload)

    def create_registration(self, registration: schemas.RegistrationCreate) -> schemas.Registration:
        payload = self.api.registrations.create(_wire(registration))
        return _parse(schemas.Registration, payload)

    def list_registrations(self, event_id: str) -> NormalizedRegistrations:
        return normalize_registrations(self.api.registrations.list_by_event(event_id))

    def submit_referral(self, registration_id: str, referral: schemas.ReferralCreate) -> schemas.Referral:
        payload = self.api.registrations.submit_referral(registration_id, _wire(referral))
        return _parse(schemas.Referral, payload)

    def get_manual_sales(self, event_id: str) -> int:
        return _parse(schemas.ManualSales, self.api.events.get_manual_sales(event_id)).count

    def set_manual_sales(self, event_id: str, count: int) -> int:
        return _parse(schemas.ManualSales, self.api.events.set_manual_sales(event_id, count)).count


class HybridDataSource(DataSource):
    """Reads through one source, writes through another."""

    def __init__(self, reader: DataSource, writer: DataSource):
        self.reader = reader
        self.writer = writer

    def get_organization_by_slug(self, slug: str) -> Optional[schemas.Organization]:
        return self.reader.get_organization_by_slug(slug)

    def update_organization(
        self, organization_id: str, update: schemas.OrganizationUpdate
    ) -> schemas.Organization:
        return self.writer.update_organization(organization_id, update)

    def list_events(self, organization_id: Optional[str] = None) -> List[schemas.Event]:
        return self.reader.list_events(organization_id)

    def get_event(self, event_id: str) -> Optional[schemas.EventDetail]:
        return self.reader.get_event(event_id)

    def create_registration(self, registration: schemas.RegistrationCreate) -> schemas.Registration:
        return self.writer.create_registration(registration)

    def list_registrations(self, event_id: str) -> NormalizedRegistrations:
        return self.reader.list_registrations(event_id)

    def submit_referral(self, registration_id: str, referral: schemas.ReferralCreate) -> schemas.Referral:
        return self.writer.submit_referral(registration_id, referral)

    def get_manual_sales(self, event_id: str) -> int:
        return self.reader.get_manual_sales(event_id)

    def set_manual_sales(self, event_id: str, count: int) -> int:
        return self.writer.set_manual_sales(event_id, count)


def build_data_source(
    environment: EnvironmentConfig,
    session_factory: Optional[Callable[[], Session]] = None,
    api_client: Optional[ApiClient] = None,
    token: Optional[str] = None,
) -> DataSource:
    """Pick the data source implementation for an environment."""

    def database_source() -> DatabaseDataSource:
        if session_factory is None:
            raise EnvironmentConfigError(
                f"Environment '{environment.name.value}' needs a database session factory"
            )
        return DatabaseDataSource(session_factory)

    def api_source() -> ApiDataSource:
        client = api_client or ApiClient(
            environment.api_base_url, timeout=settings.API_TIMEOUT_SECONDS, token=token
        )
        return ApiDataSource(client)

    logger.info(f"Using {environment.data_source.value} data source for {environment.name.value}")
    if environment.data_source == DataSourceType.DATABASE:
        return database_source()
    if environment.data_source == DataSourceType.API:
        return api_source()
    return HybridDataSource(reader=api_source(), writer=database_source())
