from sqlalchemy import Column, ForeignKey, Integer, String

from eventdesk.models.base import BaseModel


class WaitlistCounter(BaseModel):
    """Last waitlist position handed out for an event. Locked row per event."""
    __tablename__ = "waitlist_counters"

    event_id = Column(String(32), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, unique=True)
    last_position = Column(Integer, nullable=False, default=0)
