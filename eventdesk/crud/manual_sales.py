# File: eventdesk/crud/manual_sales.py
import logging
from typing import Optional
from sqlalchemy.orm import Session
from eventdesk.models.manual_sales import ManualSalesCount

logger = logging.getLogger(__name__)


class CRUDManualSales:
    """One counter row per event; a missing row reads as zero."""

    def get(self, db: Session, *, event_id: str) -> Optional[ManualSalesCount]:
        return db.query(ManualSalesCount).filter(ManualSalesCount.event_id == event_id).first()

    def get_count(self, db: Session, *, event_id: str) -> int:
        row = self.get(db, event_id=event_id)
        return row.count if row else 0

    def set_count(
        self, db: Session, *, event_id: str, count: int, updated_by: Optional[str] = None
    ) -> ManualSalesCount:
        if count < 0:
            raise ValueError("Manual sales count cannot be negative")

        row = self.get(db, event_id=event_id)
        previous = row.count if row else 0
        if row is None:
            row = ManualSalesCount(event_id=event_id)
        row.count = count
        row.updated_by = updated_by

        db.add(row)
        db.commit()
        db.refresh(row)
        logger.info(f"Manual sales for event {event_id}: {previous} -> {count} (by {updated_by})")
        return row


manual_sales = CRUDManualSales()
