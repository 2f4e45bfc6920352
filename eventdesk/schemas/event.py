from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from eventdesk.models.event import EventStatus, PriceType
from eventdesk.schemas.common import CamelModel


class GroupDealDetails(CamelModel):
    minimum_people: int = Field(..., ge=1)
    price_per_person: float = Field(..., ge=0)
    normal_price_per_person: float = Field(..., ge=0)


class EventPrice(CamelModel):
    type: PriceType
    amount: Optional[float] = Field(None, ge=0)
    description: str = ""
    advance_price: Optional[float] = Field(None, ge=0)
    group_deal_details: Optional[GroupDealDetails] = None


class EventSeries(CamelModel):
    name: str
    description: Optional[str] = None


class RecurringDate(CamelModel):
    date: datetime
    theme: Optional[str] = None
    description: Optional[str] = None


class EventBase(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    full_description: str = ""
    date: datetime
    end_date: Optional[datetime] = None
    time: str = ""
    duration: Optional[str] = None
    location: str = ""
    address: str = ""
    price: EventPrice
    capacity: Optional[int] = Field(None, ge=0)
    registration_required: bool = False
    eventbrite_url: Optional[str] = None
    presale_enabled: Optional[bool] = False
    series: Optional[EventSeries] = None
    is_recurring: bool = False
    recurring_dates: Optional[List[RecurringDate]] = None
    image_url: Optional[str] = None
    images: Optional[List[str]] = None
    status: EventStatus = EventStatus.DRAFT


class EventCreate(EventBase):
    organization_id: str


class EventUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    full_description: Optional[str] = None
    date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    time: Optional[str] = None
    duration: Optional[str] = None
    location: Optional[str] = None
    address: Optional[str] = None
    price: Optional[EventPrice] = None
    capacity: Optional[int] = Field(None, ge=0)
    registration_required: Optional[bool] = None
    eventbrite_url: Optional[str] = None
    presale_enabled: Optional[bool] = None
    series: Optional[EventSeries] = None
    is_recurring: Optional[bool] = None
    recurring_dates: Optional[List[RecurringDate]] = None
    image_url: Optional[str] = None
    images: Optional[List[str]] = None
    status: Optional[EventStatus] = None

    @field_validator(
        "title", "description", "full_description", "date", "time", "location", "address",
        "price", "registration_required", "is_recurring", "status",
        mode="before",
    )
    @classmethod
    def not_null(cls, v):
        # Omit the field to leave it unchanged; these columns cannot be cleared
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class Event(EventBase):
    id: str
    organization_id: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class EventDetail(Event):
    """Public event view, carrying the registration action visitors are offered."""
    registration_action: Optional[str] = None
