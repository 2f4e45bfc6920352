"""
Registration listing helpers.

``GET /registrations/event/{id}`` has historically answered in four shapes::

    [ {...}, ... ]
    {"data": [ {...}, ... ]}
    {"registrations": [ {...}, ... ]}
    {"registrations": {"<id>": {...}, ...}}

``normalize_registrations`` is the only place that knows about them. It always
returns a list, and reports anything it had to drop as a warning instead of
raising, so a bad payload empties one panel rather than breaking it.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from eventdesk.models.registration import RegistrationType
from eventdesk.schemas.registration import Registration

logger = logging.getLogger(__name__)


@dataclass
class NormalizedRegistrations:
    items: List[Registration] = field(default_factory=list)
    warning: Optional[str] = None


def _unwrap(payload: Any) -> Optional[List[Any]]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        if isinstance(payload.get("data"), list):
            return payload["data"]
        registrations = payload.get("registrations")
        if isinstance(registrations, list):
            return registrations
        if isinstance(registrations, dict):
            items = []
            for key, value in registrations.items():
                # Keyed objects may leave the id to the key
                if isinstance(value, dict) and "id" not in value:
                    value = {**value, "id": key}
                items.append(value)
            return items
    return None


def normalize_registrations(payload: Any) -> NormalizedRegistrations:
    if payload is None:
        return NormalizedRegistrations()

    raw_items = _unwrap(payload)
    if raw_items is None:
        warning = f"Unexpected registrations response ({type(payload).__name__}); showing no registrations"
        logger.warning(warning)
        return NormalizedRegistrations(warning=warning)

    items: List[Registration] = []
    dropped = 0
    for raw in raw_items:
        try:
            items.append(Registration.model_validate(raw))
        except ValidationError as e:
            dropped += 1
            logger.warning(f"Dropping unreadable registration entry: {e.error_count()} error(s)")

    warning = None
    if dropped:
        warning = f"{dropped} registration(s) could not be read and were skipped"
    return NormalizedRegistrations(items=items, warning=warning)


def summarize_registrations(registrations: Iterable[Registration]) -> Dict[str, int]:
    summary = {"rsvpYes": 0, "rsvpMaybe": 0, "presaleRequests": 0, "waitlist": 0, "total": 0}
    keys = {
        RegistrationType.RSVP_YES.value: "rsvpYes",
        RegistrationType.RSVP_MAYBE.value: "rsvpMaybe",
        RegistrationType.PRESALE_REQUEST.value: "presaleRequests",
        RegistrationType.WAITLIST.value: "waitlist",
    }
    for registration in registrations:
        summary["total"] += 1
        key = keys.get(registration.registration_type)
        if key:
            summary[key] += 1
    return summary
