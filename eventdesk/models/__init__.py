from .base import BaseModel
from .organization import Organization
from .event import Event, EventStatus, PriceType
from .registration import Registration, RegistrationType, RegistrationSource
from .waitlist_counter import WaitlistCounter
from .manual_sales import ManualSalesCount
from .referral import ReferralAnswer, ReferralSource
