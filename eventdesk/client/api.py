"""
REST API client used by the staging/production data source.

Errors are mapped to two kinds the UI layer understands: ``ApiError`` carries a
server message that can be shown as-is, ``NetworkError`` means the request
never got an answer and a generic retry message should be shown instead.
"""
import logging
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Unable to reach the server. Please check your connection and try again."


class ApiError(Exception):
    """Application error reported by the API (4xx/5xx)."""

    retryable = False

    def __init__(self, message: str, status: int = 0):
        self.message = message
        self.status = status
        super().__init__(message)


class NetworkError(ApiError):
    """The request never reached the server, timed out, or got no response."""

    retryable = True

    def __init__(self, message: str = NETWORK_ERROR_MESSAGE):
        super().__init__(message, status=0)


def _error_message(response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        message = body.get("message") or body.get("detail")
        if isinstance(message, str) and message:
            return message
    return f"Request failed with status {response.status_code}"


class ApiClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        token: Optional[str] = None,
        session: Optional[Any] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.token = token
        self.session = session or requests.Session()

        self.organizations = OrganizationsApi(self)
        self.events = EventsApi(self)
        self.registrations = RegistrationsApi(self)

    def request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Send one request and return the decoded body (raw text when it is not JSON)."""
        url = f"{self.base_url}{path}"
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        logger.info(f"API request: {method} {url}")
        try:
            response = self.session.request(
                method, url, json=json, params=params, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"API request failed: {method} {url}: {str(e)}")
            raise NetworkError() from e

        if response.status_code >= 400:
            message = _error_message(response)
            logger.error(f"API error {response.status_code}: {method} {url}: {message}")
            raise ApiError(message, status=response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            logger.warning(f"Non-JSON response from {method} {url}")
            return response.text


class OrganizationsApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def get_by_slug(self, slug: str) -> Any:
        return self.client.request("GET", f"/organizations/{slug}")

    def create(self, data: Dict[str, Any]) -> Any:
        return self.client.request("POST", "/organizations", json=data)

    def update(self, organization_id: str, data: Dict[str, Any]) -> Any:
        return self.client.request("PUT", f"/organizations/{organization_id}", json=data)

    def waitlists(self, organization_id: str) -> Any:
        return self.client.request("GET", f"/organizations/{organization_id}/waitlists")


class EventsApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def list(self, organization_id: Optional[str] = None) -> Any:
        params = {"organization": organization_id} if organization_id else None
        return self.client.request("GET", "/events", params=params)

    def get(self, event_id: str) -> Any:
        return self.client.request("GET", f"/events/{event_id}")

    def create(self, data: Dict[str, Any]) -> Any:
        return self.client.request("POST", "/events", json=data)

    def update(self, event_id: str, data: Dict[str, Any]) -> Any:
        return self.client.request("PUT", f"/events/{event_id}", json=data)

    def delete(self, event_id: str) -> Any:
        return self.client.request("DELETE", f"/events/{event_id}")

    def get_manual_sales(self, event_id: str) -> Any:
        return self.client.request("GET", f"/events/{event_id}/manual-sales")

    def set_manual_sales(self, event_id: str, count: int) -> Any:
        return self.client.request("PUT", f"/events/{event_id}/manual-sales", json={"count": count})

    def capacity(self, event_id: str) -> Any:
        return self.client.request("GET", f"/events/{event_id}/capacity")


class RegistrationsApi:
    def __init__(self, client: ApiClient):
        self.client = client

    def create(self, data: Dict[str, Any]) -> Any:
        return self.client.request("POST", "/registrations", json=data)

    def list_by_event(self, event_id: str) -> Any:
        return self.client.request("GET", f"/registrations/event/{event_id}")

    def submit_referral(self, registration_id: str, data: Dict[str, Any]) -> Any:
        return self.client.request("POST", f"/registrations/{registration_id}/referral", json=data)

    def mark_email_sent(self, registration_id: str) -> Any:
        return self.client.request("PATCH", f"/registrations/{registration_id}/email-sent")
