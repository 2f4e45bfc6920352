from .common import CamelModel, Message
from .organization import (
    Organization, OrganizationCreate, OrganizationUpdate,
    OrganizationSettings, SocialLinks, ThemeSettings,
)
from .event import (
    Event, EventCreate, EventUpdate, EventDetail,
    EventPrice, EventSeries, GroupDealDetails, RecurringDate,
)
from .registration import (
    Registration, RegistrationCreate, Referral, ReferralCreate,
    EventWaitlist, WaitlistOverview, EMAIL_REQUIRED_TYPES,
)
from .capacity import CapacitySummary, ManualSales, ManualSalesUpdate
