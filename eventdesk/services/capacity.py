"""Remaining-seat figures for an event. Display only; never stored."""
from typing import Optional

from eventdesk.schemas.capacity import CapacitySummary

ALMOST_FULL_THRESHOLD = 5

STATUS_FULL = "Full"
STATUS_ALMOST_FULL = "Almost Full"
STATUS_AVAILABLE = "Available"


def remaining_capacity(capacity: Optional[int], registration_count: int, manual_sales: int = 0) -> Optional[int]:
    """Seats left, or None when the event has no capacity limit."""
    if capacity is None:
        return None
    return max(0, capacity - registration_count - manual_sales)


def capacity_status(remaining: Optional[int]) -> str:
    if remaining is None:
        return STATUS_AVAILABLE
    if remaining <= 0:
        return STATUS_FULL
    if remaining <= ALMOST_FULL_THRESHOLD:
        return STATUS_ALMOST_FULL
    return STATUS_AVAILABLE


def summarize_capacity(capacity: Optional[int], registration_count: int, manual_sales: int = 0) -> CapacitySummary:
    remaining = remaining_capacity(capacity, registration_count, manual_sales)
    return CapacitySummary(
        capacity=capacity,
        registration_count=registration_count,
        manual_sales=manual_sales,
        remaining=remaining,
        status=capacity_status(remaining),
    )
