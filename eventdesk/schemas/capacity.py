from datetime import datetime
from typing import Optional

from pydantic import Field

from eventdesk.schemas.common import CamelModel


class ManualSales(CamelModel):
    event_id: str
    count: int = 0
    updated_by: Optional[str] = None
    updated_at: Optional[datetime] = None


class ManualSalesUpdate(CamelModel):
    count: int = Field(..., ge=0)


class CapacitySummary(CamelModel):
    capacity: Optional[int] = None
    registration_count: int = 0
    manual_sales: int = 0
    # None means unlimited
    remaining: Optional[int] = None
    status: str
