from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field, ValidationInfo, field_validator

from eventdesk.models.referral import ReferralSource
from eventdesk.models.registration import RegistrationSource, RegistrationType
from eventdesk.schemas.common import CamelModel

# Kinds that must leave an email address behind
EMAIL_REQUIRED_TYPES = (RegistrationType.PRESALE_REQUEST, RegistrationType.WAITLIST)


class RegistrationCreate(CamelModel):
    """Body of POST /registrations. Shared by the API and the client intake form."""

    event_id: str = Field(..., min_length=1)
    registration_type: RegistrationType
    name: str
    email: Optional[EmailStr] = Field(None, validate_default=True)
    phone: Optional[str] = None
    notes: Optional[str] = None
    subscribe_to_updates: bool = False
    subscribe_to_newsletter: bool = False
    source: RegistrationSource = RegistrationSource.WEBSITE

    @field_validator("name", mode="before")
    @classmethod
    def name_not_blank(cls, v):
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("Name is required")
        return v

    @field_validator("email", "phone", "notes", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("email")
    @classmethod
    def email_required_for_kind(cls, v, info: ValidationInfo):
        registration_type = info.data.get("registration_type")
        if v is None and registration_type in EMAIL_REQUIRED_TYPES:
            raise ValueError("Email is required for presale requests and waitlist sign-ups")
        return v


class Registration(CamelModel):
    id: str
    event_id: str
    organization_id: Optional[str] = None
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    registration_type: RegistrationType
    notes: Optional[str] = None
    subscribe_to_updates: bool = False
    subscribe_to_newsletter: bool = False
    waitlist_position: Optional[int] = None
    source: RegistrationSource = RegistrationSource.WEBSITE
    email_sent: bool = False
    last_email_sent: Optional[datetime] = None
    created_at: datetime


class ReferralCreate(CamelModel):
    source: ReferralSource
    other_details: Optional[str] = None

    @field_validator("other_details", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


class Referral(ReferralCreate):
    id: str
    registration_id: str
    created_at: datetime


class EventWaitlist(CamelModel):
    event_id: str
    event_title: str
    event_date: datetime
    capacity: Optional[int] = None
    entries: List[Registration] = []


class WaitlistOverview(CamelModel):
    organization_id: str
    total_events: int
    total_entries: int
    events: List[EventWaitlist] = []
