import enum

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from eventdesk.models.base import BaseModel


class RegistrationType(str, enum.Enum):
    RSVP_YES = "rsvp_yes"
    RSVP_MAYBE = "rsvp_maybe"
    PRESALE_REQUEST = "presale_request"
    WAITLIST = "waitlist"


class RegistrationSource(str, enum.Enum):
    WEBSITE = "website"
    EVENTBRITE = "eventbrite"
    MANUAL = "manual"


class Registration(BaseModel):
    __tablename__ = "registrations"
    __table_args__ = (
        # Waitlist positions are unique per event; NULLs (non-waitlist rows) never collide
        UniqueConstraint("event_id", "waitlist_position", name="uq_registration_event_waitlist_position"),
        # Per-event creation order
        UniqueConstraint("event_id", "sequence", name="uq_registration_event_sequence"),
    )

    event_id = Column(String(32), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    organization_id = Column(String(32), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)

    # Attendee
    name = Column(String(255), nullable=False)
    email = Column(String(255))
    phone = Column(String(50))

    registration_type = Column(String(50), nullable=False)
    notes = Column(Text)
    subscribe_to_updates = Column(Boolean, nullable=False, default=False)
    subscribe_to_newsletter = Column(Boolean, nullable=False, default=False)
    sequence = Column(Integer)
    waitlist_position = Column(Integer)
    source = Column(String(50), nullable=False, default=RegistrationSource.WEBSITE.value)

    # Communication tracking
    email_sent = Column(Boolean, nullable=False, default=False)
    last_email_sent = Column(DateTime)

    event = relationship("Event", back_populates="registrations")
    referral = relationship("ReferralAnswer", uselist=False, back_populates="registration", cascade="all, delete-orphan")
