import pytest
from fastapi.testclient import TestClient

from eventdesk import crud, schemas
from eventdesk.client.api import ApiClient, ApiError
from eventdesk.client.data_source import (
    ApiDataSource,
    DatabaseDataSource,
    HybridDataSource,
    build_data_source,
)
from eventdesk.core.environments import (
    ENVIRONMENTS,
    DataSourceType,
    EnvironmentConfig,
    EnvironmentConfigError,
    EnvironmentName,
)
from eventdesk.db.database import SessionLocal
from eventdesk.main import app

from .conftest import FakeResponse, FakeSession, make_token


def waitlist_entry(event_id, name):
    return schemas.RegistrationCreate(
        event_id=event_id, registration_type="waitlist", name=name, email=f"{name.lower()}@x.com"
    )


@pytest.fixture
def database_source():
    return DatabaseDataSource(SessionLocal, actor="admin@example.com")


@pytest.fixture
def api_source():
    client = ApiClient("http://testserver/api/v1", session=TestClient(app), token=make_token())
    return ApiDataSource(client)


@pytest.mark.parametrize("source_name", ["database_source", "api_source"])
def test_sources_behave_the_same(request, source_name, organization, make_event):
    source = request.getfixturevalue(source_name)
    event = make_event(status="sold_out", capacity=10)

    assert source.get_organization_by_slug("brooklyn-hearts-club").id == organization.id
    assert source.get_organization_by_slug("nobody") is None
    assert [e.id for e in source.list_events(organization.id)] == [event.id]
    assert source.get_event(event.id).registration_action == "waitlist"
    assert source.get_event("missing") is None

    first = source.create_registration(waitlist_entry(event.id, "Ana"))
    second = source.create_registration(waitlist_entry(event.id, "Bo"))
    assert (first.waitlist_position, second.waitlist_position) == (1, 2)

    listed = source.list_registrations(event.id)
    assert [r.name for r in listed.items] == ["Ana", "Bo"]
    assert listed.warning is None

    assert source.set_manual_sales(event.id, 4) == 4
    assert source.get_manual_sales(event.id) == 4

    updated = source.update_organization(organization.id, schemas.OrganizationUpdate(about_story="Since 2019"))
    assert updated.about_story == "Since 2019"
    assert updated.name == "Brooklyn Hearts Club"


@pytest.mark.parametrize("source_name", ["database_source", "api_source"])
def test_missing_event_raises_not_found(request, source_name):
    source = request.getfixturevalue(source_name)

    with pytest.raises(ApiError) as exc_info:
        source.create_registration(waitlist_entry("missing", "Ana"))

    assert exc_info.value.status == 404
    assert exc_info.value.message == "Event not found"


def test_referral_through_database_source(database_source, make_event):
    event = make_event(price={"type": "free"})
    registration = database_source.create_registration(
        schemas.RegistrationCreate(event_id=event.id, registration_type="rsvp_yes", name="Cy")
    )

    answer = database_source.submit_referral(registration.id, schemas.ReferralCreate(source="friend"))

    assert answer.registration_id == registration.id
    assert answer.source == "friend"
    with pytest.raises(ApiError):
        database_source.submit_referral("missing", schemas.ReferralCreate(source="friend"))


def test_database_source_records_actor(database_source, db, make_event):
    event = make_event()
    database_source.set_manual_sales(event.id, 2)

    assert crud.manual_sales.get(db, event_id=event.id).updated_by == "admin@example.com"


def test_api_source_rejects_unexpected_payloads():
    session = FakeSession(responses=[FakeResponse(200, {"id": "evt-1"}), FakeResponse(200, {"not": "a list"})])
    source = ApiDataSource(ApiClient("https://api.example.com/api/v1", session=session))

    with pytest.raises(ApiError) as exc_info:
        source.get_event("evt-1")
    assert exc_info.value.message == "Unexpected response from server"

    with pytest.raises(ApiError):
        source.list_events()


def test_hybrid_reads_from_reader_and_writes_through_writer(api_source, database_source, make_event):
    class Recorder:
        def __init__(self, inner):
            self.inner = inner
            self.calls = []

        def __getattr__(self, name):
            self.calls.append(name)
            return getattr(self.inner, name)

    reader, writer = Recorder(api_source), Recorder(database_source)
    hybrid = HybridDataSource(reader=reader, writer=writer)
    event = make_event(status="sold_out")

    hybrid.create_registration(waitlist_entry(event.id, "Ana"))
    hybrid.set_manual_sales(event.id, 1)
    assert [r.name for r in hybrid.list_registrations(event.id).items] == ["Ana"]
    assert hybrid.get_manual_sales(event.id) == 1
    hybrid.get_event(event.id)

    assert writer.calls == ["create_registration", "set_manual_sales"]
    assert reader.calls == ["list_registrations", "get_manual_sales", "get_event"]


def test_build_data_source_follows_the_environment():
    development = build_data_source(ENVIRONMENTS[EnvironmentName.DEVELOPMENT], session_factory=SessionLocal)
    production = build_data_source(ENVIRONMENTS[EnvironmentName.PRODUCTION], token="abc")
    hybrid = build_data_source(
        EnvironmentConfig(
            name=EnvironmentName.STAGING,
            data_source=DataSourceType.HYBRID,
            api_base_url="https://api.example.com/api/v1",
        ),
        session_factory=SessionLocal,
    )

    assert isinstance(development, DatabaseDataSource)
    assert isinstance(production, ApiDataSource)
    assert production.api.base_url == "https://eventdesk-api.run.app/api/v1"
    assert production.api.token == "abc"
    assert isinstance(hybrid, HybridDataSource)
    assert isinstance(hybrid.reader, ApiDataSource)
    assert isinstance(hybrid.writer, DatabaseDataSource)


def test_database_environment_needs_a_session_factory():
    with pytest.raises(EnvironmentConfigError):
        build_data_source(ENVIRONMENTS[EnvironmentName.SANDBOX])
