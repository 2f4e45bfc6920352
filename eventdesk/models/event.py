import enum

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from eventdesk.models.base import BaseModel


class EventStatus(str, enum.Enum):
    DRAFT = "draft"
    PRESALE = "presale"
    PUBLISHED = "published"
    SOLD_OUT = "sold_out"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class PriceType(str, enum.Enum):
    FREE = "free"
    PAID = "paid"
    GROUP_DEAL = "group_deal"


class Event(BaseModel):
    __tablename__ = "events"

    organization_id = Column(String(32), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    full_description = Column(Text, nullable=False, default="")

    # Date and time
    date = Column(DateTime, nullable=False)
    end_date = Column(DateTime)
    time = Column(String(50), nullable=False, default="")
    duration = Column(String(100))

    # Location
    location = Column(String(255), nullable=False, default="")
    address = Column(Text, nullable=False, default="")

    # Pricing: {type, amount, description, advancePrice, groupDealDetails}
    price = Column(JSON, nullable=False)

    # Capacity and registration
    capacity = Column(Integer)
    registration_required = Column(Boolean, nullable=False, default=False)
    eventbrite_url = Column(String(500))
    presale_enabled = Column(Boolean, default=False)

    # Series / recurring
    series = Column(JSON)
    is_recurring = Column(Boolean, nullable=False, default=False)
    recurring_dates = Column(JSON)

    # Media
    image_url = Column(String(500))
    images = Column(JSON)

    status = Column(String(50), nullable=False, default=EventStatus.DRAFT.value)

    # Relationships
    organization = relationship("Organization", back_populates="events")
    registrations = relationship("Registration", back_populates="event", cascade="all, delete-orphan")
    waitlist_counter = relationship("WaitlistCounter", uselist=False, cascade="all, delete-orphan")
    manual_sales = relationship("ManualSalesCount", uselist=False, cascade="all, delete-orphan")
