"""Registration form controller for the public event page."""
import enum
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from eventdesk import schemas
from eventdesk.client.api import ApiError, NetworkError
from eventdesk.client.data_source import DataSource
from eventdesk.models.registration import RegistrationType
from eventdesk.services.registration_intake import (
    CONFIRMATION_MESSAGES,
    RegistrationAction,
    RegistrationValidationError,
    build_registration,
    registration_type_for,
    select_registration_action,
)

logger = logging.getLogger(__name__)

VALIDATION_MESSAGE = "Please fix the highlighted fields."


class IntakeState(str, enum.Enum):
    EDITING = "editing"
    SUBMITTING = "submitting"
    CONFIRMED = "confirmed"


def _empty_fields() -> Dict[str, Any]:
    return {
        "name": "",
        "email": "",
        "phone": "",
        "notes": "",
        "subscribe_to_updates": False,
        "subscribe_to_newsletter": False,
    }


class RegistrationIntake:
    def __init__(self, data_source: DataSource, event: schemas.Event):
        self.data_source = data_source
        self.event = event
        self.action = select_registration_action(event)
        self.open()

    @property
    def ticket_url(self) -> Optional[str]:
        if self.action == RegistrationAction.EXTERNAL_TICKETS:
            return self.event.eventbrite_url
        return None

    @property
    def accepts_registrations(self) -> bool:
        return self.action in CONFIRMATION_MESSAGES

    def open(self) -> None:
        """Reset the form to a blank state."""
        self.fields: Dict[str, Any] = _empty_fields()
        self.interest_level = RegistrationType.RSVP_YES
        self.state = IntakeState.EDITING
        self.error: Optional[str] = None
        self.field_errors: Dict[str, str] = {}
        self.confirmation: Optional[str] = None
        self.registration: Optional[schemas.Registration] = None
        self.survey_pending = False

    def submit(self) -> Optional[schemas.Registration]:
        """
        Validate and send the form.

        Returns the created registration, or None when nothing was created; in
        that case ``error`` (and ``field_errors`` for validation problems) say
        why and the entered fields are left untouched.
        """
        if not self.accepts_registrations:
            logger.info(f"Event {self.event.id} offers '{self.action.value}', nothing to submit")
            return None

        self.error = None
        self.field_errors = {}
        try:
            registration_type = registration_type_for(self.action, self.interest_level)
            payload = build_registration(self.event.id, registration_type, self.fields)
        except RegistrationValidationError as e:
            self.field_errors = e.errors
            self.error = VALIDATION_MESSAGE
            return None
        except ValueError as e:
            self.field_errors = {"interest_level": str(e)}
            self.error = VALIDATION_MESSAGE
            return None

        self.state = IntakeState.SUBMITTING
        try:
            registration = self.data_source.create_registration(payload)
        except NetworkError as e:
            logger.warning(f"Registration for event {self.event.id} did not reach the server")
            self.error = e.message
            self.state = IntakeState.EDITING
            return None
        except ApiError as e:
            logger.warning(f"Registration for event {self.event.id} rejected: {e.message}")
            self.error = e.message
            self.state = IntakeState.EDITING
            return None

        self.registration = registration
        self.state = IntakeState.CONFIRMED
        self.confirmation = CONFIRMATION_MESSAGES[self.action]
        self.survey_pending = self.action == RegistrationAction.RSVP
        return registration

    def submit_survey(self, source: str, other_details: Optional[str] = None) -> bool:
        """Send the optional referral answer. Never blocks the confirmation."""
        if not self.survey_pending or self.registration is None:
            return False
        self.survey_pending = False

        try:
            referral = schemas.ReferralCreate(source=source, other_details=other_details)
            self.data_source.submit_referral(self.registration.id, referral)
        except ValidationError as e:
            logger.warning(f"Ignoring invalid referral answer for {self.registration.id}: {e.error_count()} error(s)")
            return False
        except ApiError as e:
            logger.warning(f"Referral answer for {self.registration.id} not saved: {e.message}")
            return False
        return True

    def skip_survey(self) -> None:
        self.survey_pending = False
