import pytest
import requests

from eventdesk.client.api import NETWORK_ERROR_MESSAGE, ApiClient, ApiError, NetworkError

from .conftest import FakeResponse, FakeSession


def make_client(*responses, token=None):
    session = FakeSession(responses=list(responses))
    return ApiClient("https://api.example.com/api/v1/", timeout=3.5, token=token, session=session), session


def test_requests_carry_json_headers_timeout_and_token():
    client, session = make_client(FakeResponse(201, {"id": "reg-1"}), token="abc")

    result = client.registrations.create({"eventId": "evt-1", "name": "Ana"})

    assert result == {"id": "reg-1"}
    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "https://api.example.com/api/v1/registrations"
    assert call["json"] == {"eventId": "evt-1", "name": "Ana"}
    assert call["timeout"] == 3.5
    assert call["headers"]["Authorization"] == "Bearer abc"
    assert call["headers"]["Content-Type"] == "application/json"


def test_no_authorization_header_without_token():
    client, session = make_client(FakeResponse(200, []))
    client.events.list("org-1")
    assert "Authorization" not in session.calls[0]["headers"]
    assert session.calls[0]["params"] == {"organization": "org-1"}


def test_server_message_is_surfaced_verbatim():
    client, _ = make_client(FakeResponse(400, {"message": "Event is not accepting registrations", "status_code": 400}))

    with pytest.raises(ApiError) as exc_info:
        client.registrations.create({})

    assert exc_info.value.message == "Event is not accepting registrations"
    assert exc_info.value.status == 400
    assert exc_info.value.retryable is False
    assert not isinstance(exc_info.value, NetworkError)


def test_detail_is_used_when_there_is_no_message():
    client, _ = make_client(FakeResponse(404, {"detail": "Not Found"}))
    with pytest.raises(ApiError) as exc_info:
        client.events.get("missing")
    assert exc_info.value.message == "Not Found"


def test_error_without_json_body_gets_a_generic_message():
    client, _ = make_client(FakeResponse(502, text="Bad Gateway"))
    with pytest.raises(ApiError) as exc_info:
        client.events.get("evt-1")
    assert exc_info.value.status == 502
    assert "502" in exc_info.value.message


@pytest.mark.parametrize(
    "error",
    [requests.Timeout("read timed out"), requests.ConnectionError("connection refused")],
)
def test_transport_failures_become_network_errors(error):
    client, _ = make_client(error)

    with pytest.raises(NetworkError) as exc_info:
        client.registrations.list_by_event("evt-1")

    assert exc_info.value.status == 0
    assert exc_info.value.retryable is True
    assert exc_info.value.message == NETWORK_ERROR_MESSAGE
    assert isinstance(exc_info.value, ApiError)


def test_empty_body_returns_none_and_non_json_returns_text():
    client, _ = make_client(FakeResponse(204), FakeResponse(200, text="<html>maintenance</html>"))
    assert client.registrations.mark_email_sent("reg-1") is None
    assert client.registrations.list_by_event("evt-1") == "<html>maintenance</html>"


def test_group_paths():
    client, session = make_client(*[FakeResponse(200, {}) for _ in range(5)])

    client.organizations.get_by_slug("bhc")
    client.organizations.waitlists("org-1")
    client.events.set_manual_sales("evt-1", 7)
    client.events.capacity("evt-1")
    client.registrations.submit_referral("reg-1", {"source": "friend"})

    assert [(c["method"], c["url"].replace("https://api.example.com/api/v1", "")) for c in session.calls] == [
        ("GET", "/organizations/bhc"),
        ("GET", "/organizations/org-1/waitlists"),
        ("PUT", "/events/evt-1/manual-sales"),
        ("GET", "/events/evt-1/capacity"),
        ("POST", "/registrations/reg-1/referral"),
    ]
    assert session.calls[2]["json"] == {"count": 7}
