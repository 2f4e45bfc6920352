import enum

from sqlalchemy import Column, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from eventdesk.models.base import BaseModel


class ReferralSource(str, enum.Enum):
    FRIEND = "friend"
    INSTAGRAM = "instagram"
    EVENTBRITE = "eventbrite"
    GOOGLE = "google"
    FLYER = "flyer"
    WEBSITE = "website"
    NEWSLETTER = "newsletter"
    OTHER = "other"


class ReferralAnswer(BaseModel):
    __tablename__ = "referral_answers"

    registration_id = Column(
        String(32), ForeignKey("registrations.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    source = Column(String(50), nullable=False)
    other_details = Column(Text)

    registration = relationship("Registration", back_populates="referral")
