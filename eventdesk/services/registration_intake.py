"""
Which registration a visitor is offered for an event, and how the entered
fields become a valid ``RegistrationCreate``.
"""
import enum
from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError

from eventdesk.models.event import EventStatus, PriceType
from eventdesk.models.registration import RegistrationType
from eventdesk.schemas.event import Event
from eventdesk.schemas.registration import RegistrationCreate


class RegistrationAction(str, enum.Enum):
    WAITLIST = "waitlist"
    EXTERNAL_TICKETS = "external_tickets"
    PRESALE = "presale_request"
    RSVP = "rsvp"
    NONE = "none"


CONFIRMATION_MESSAGES: Dict[RegistrationAction, str] = {
    RegistrationAction.WAITLIST: "Added to Waitlist!",
    RegistrationAction.PRESALE: "Request Sent!",
    RegistrationAction.RSVP: "Interest Submitted!",
}

ACTION_REGISTRATION_TYPES: Dict[RegistrationAction, Tuple[RegistrationType, ...]] = {
    RegistrationAction.WAITLIST: (RegistrationType.WAITLIST,),
    RegistrationAction.PRESALE: (RegistrationType.PRESALE_REQUEST,),
    RegistrationAction.RSVP: (RegistrationType.RSVP_YES, RegistrationType.RSVP_MAYBE),
}


class RegistrationValidationError(ValueError):
    """Entered fields do not make a valid registration. Nothing was sent."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = errors
        super().__init__("; ".join(f"{field}: {message}" for field, message in errors.items()))


def select_registration_action(event: Event) -> RegistrationAction:
    """First matching rule wins."""
    if event.status == EventStatus.SOLD_OUT:
        return RegistrationAction.WAITLIST
    if event.eventbrite_url:
        return RegistrationAction.EXTERNAL_TICKETS
    if event.status == EventStatus.PRESALE or event.presale_enabled:
        return RegistrationAction.PRESALE
    if event.registration_required or event.price.type == PriceType.FREE:
        return RegistrationAction.RSVP
    return RegistrationAction.NONE


def _field_errors(exc: ValidationError) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    for error in exc.errors():
        field = str(error["loc"][-1]) if error["loc"] else "registration"
        message = error["msg"]
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.setdefault(field, message)
    return errors


def build_registration(
    event_id: str,
    registration_type: RegistrationType,
    fields: Dict[str, Any],
) -> RegistrationCreate:
    """
    Validate entered form fields for one registration kind.

    Raises RegistrationValidationError with a per-field message map.
    """
    try:
        return RegistrationCreate(event_id=event_id, registration_type=registration_type, **fields)
    except ValidationError as e:
        raise RegistrationValidationError(_field_errors(e)) from e


def registration_type_for(action: RegistrationAction, interest_level: Optional[RegistrationType] = None) -> RegistrationType:
    """Registration kind submitted for an action; RSVP uses the chosen interest level."""
    allowed = ACTION_REGISTRATION_TYPES.get(action)
    if not allowed:
        raise ValueError(f"Action '{action.value}' does not create a registration")
    if action == RegistrationAction.RSVP:
        level = interest_level or RegistrationType.RSVP_YES
        if level not in allowed:
            raise ValueError(f"Interest level must be one of {[t.value for t in allowed]}")
        return RegistrationType(level)
    return allowed[0]
