"""Admin panel listing one event's registrations."""
import enum
import logging
from typing import List, Optional, Tuple

from eventdesk import schemas
from eventdesk.client.api import ApiError
from eventdesk.client.data_source import DataSource
from eventdesk.services.capacity import summarize_capacity
from eventdesk.services.registration_export import build_csv, export_filename
from eventdesk.services.registration_listing import summarize_registrations

logger = logging.getLogger(__name__)


class ListingState(str, enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class RegistrationListing:
    def __init__(self, data_source: DataSource, event: schemas.Event):
        self.data_source = data_source
        self.event = event
        self.state = ListingState.IDLE
        self.registrations: List[schemas.Registration] = []
        self.summary = summarize_registrations([])
        self.warning: Optional[str] = None
        self.error: Optional[str] = None
        self.manual_sales = 0
        self.capacity: Optional[schemas.CapacitySummary] = None

    def refresh(self) -> None:
        """Fetch registrations and manual sales. On failure the last good list stays."""
        self.state = ListingState.LOADING
        self.error = None
        try:
            result = self.data_source.list_registrations(self.event.id)
            manual_sales = self.data_source.get_manual_sales(self.event.id)
        except ApiError as e:
            logger.warning(f"Could not load registrations for event {self.event.id}: {e.message}")
            self.error = e.message
            self.state = ListingState.ERROR
            return

        self.registrations = result.items
        self.warning = result.warning
        self.manual_sales = manual_sales
        self._recompute()
        self.state = ListingState.SUCCESS

    def set_manual_sales(self, count: int) -> bool:
        if count < 0:
            raise ValueError("Manual sales count cannot be negative")
        try:
            self.manual_sales = self.data_source.set_manual_sales(self.event.id, count)
        except ApiError as e:
            logger.warning(f"Could not save manual sales for event {self.event.id}: {e.message}")
            self.error = e.message
            return False
        self._recompute()
        return True

    def export(self) -> Tuple[str, str]:
        """CSV filename and content for the registrations on screen."""
        return export_filename(self.event.title), build_csv(self.registrations)

    def _recompute(self) -> None:
        self.summary = summarize_registrations(self.registrations)
        self.capacity = summarize_capacity(self.event.capacity, len(self.registrations), self.manual_sales)
