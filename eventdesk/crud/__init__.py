from .organization import organization
from .event import event
from .registration import registration, RegistrationConflictError
from .manual_sales import manual_sales
