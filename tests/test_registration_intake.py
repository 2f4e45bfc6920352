import itertools

import pytest

from eventdesk.models.registration import RegistrationType
from eventdesk.services.registration_intake import (
    CONFIRMATION_MESSAGES,
    RegistrationAction,
    RegistrationValidationError,
    build_registration,
    registration_type_for,
    select_registration_action,
)

from .conftest import event_schema

STATUSES = ["draft", "presale", "published", "sold_out", "cancelled", "completed"]
PRICE_TYPES = ["free", "paid", "group_deal"]


def test_sold_out_offers_waitlist_even_with_ticket_link():
    event = event_schema(status="sold_out", eventbrite_url="https://tickets.example.com/x", presale_enabled=True)
    assert select_registration_action(event) == RegistrationAction.WAITLIST


def test_ticket_link_beats_presale():
    event = event_schema(status="presale", eventbrite_url="https://tickets.example.com/x")
    assert select_registration_action(event) == RegistrationAction.EXTERNAL_TICKETS


def test_presale_flag_or_status_offers_presale():
    assert select_registration_action(event_schema(status="presale")) == RegistrationAction.PRESALE
    assert select_registration_action(event_schema(presale_enabled=True)) == RegistrationAction.PRESALE


def test_free_or_registration_required_offers_rsvp():
    free = event_schema(price={"type": "free"})
    required = event_schema(registration_required=True)
    assert select_registration_action(free) == RegistrationAction.RSVP
    assert select_registration_action(required) == RegistrationAction.RSVP


def test_paid_event_without_flags_offers_nothing():
    assert select_registration_action(event_schema()) == RegistrationAction.NONE


def test_decision_table_is_exhaustive_and_ordered():
    combinations = itertools.product(
        STATUSES, [None, "https://tickets.example.com/x"], [False, True], [False, True], PRICE_TYPES
    )
    for status, ticket_url, presale_enabled, registration_required, price_type in combinations:
        event = event_schema(
            status=status,
            eventbrite_url=ticket_url,
            presale_enabled=presale_enabled,
            registration_required=registration_required,
            price={"type": price_type},
        )
        action = select_registration_action(event)
        assert action == select_registration_action(event)

        if status == "sold_out":
            assert action == RegistrationAction.WAITLIST
        elif ticket_url:
            assert action == RegistrationAction.EXTERNAL_TICKETS
        elif status == "presale" or presale_enabled:
            assert action == RegistrationAction.PRESALE
        elif registration_required or price_type == "free":
            assert action == RegistrationAction.RSVP
        else:
            assert action == RegistrationAction.NONE


def test_confirmation_messages_per_kind():
    assert CONFIRMATION_MESSAGES[RegistrationAction.WAITLIST] == "Added to Waitlist!"
    assert CONFIRMATION_MESSAGES[RegistrationAction.PRESALE] == "Request Sent!"
    assert CONFIRMATION_MESSAGES[RegistrationAction.RSVP] == "Interest Submitted!"


def test_presale_without_email_is_rejected():
    with pytest.raises(RegistrationValidationError) as exc_info:
        build_registration("evt-1", RegistrationType.PRESALE_REQUEST, {"name": "Bo"})
    assert "email" in exc_info.value.errors
    assert "required" in exc_info.value.errors["email"]


def test_waitlist_with_blank_email_is_rejected():
    with pytest.raises(RegistrationValidationError) as exc_info:
        build_registration("evt-1", RegistrationType.WAITLIST, {"name": "Ana", "email": "   "})
    assert "email" in exc_info.value.errors


def test_rsvp_email_is_optional_and_blanks_become_absent():
    registration = build_registration(
        "evt-1", RegistrationType.RSVP_MAYBE, {"name": "  Cy  ", "email": "", "phone": "", "notes": ""}
    )
    assert registration.name == "Cy"
    assert registration.email is None
    assert registration.phone is None
    assert registration.notes is None
    assert registration.registration_type == "rsvp_maybe"


def test_blank_name_is_rejected():
    with pytest.raises(RegistrationValidationError) as exc_info:
        build_registration("evt-1", RegistrationType.RSVP_YES, {"name": "   "})
    assert exc_info.value.errors["name"] == "Name is required"


def test_invalid_email_format_is_rejected():
    with pytest.raises(RegistrationValidationError) as exc_info:
        build_registration("evt-1", RegistrationType.RSVP_YES, {"name": "Di", "email": "not-an-email"})
    assert "email" in exc_info.value.errors


def test_registration_type_for_actions():
    assert registration_type_for(RegistrationAction.WAITLIST) == RegistrationType.WAITLIST
    assert registration_type_for(RegistrationAction.PRESALE) == RegistrationType.PRESALE_REQUEST
    assert registration_type_for(RegistrationAction.RSVP) == RegistrationType.RSVP_YES
    assert registration_type_for(RegistrationAction.RSVP, RegistrationType.RSVP_MAYBE) == RegistrationType.RSVP_MAYBE
    with pytest.raises(ValueError):
        registration_type_for(RegistrationAction.EXTERNAL_TICKETS)
    with pytest.raises(ValueError):
        registration_type_for(RegistrationAction.RSVP, RegistrationType.WAITLIST)
