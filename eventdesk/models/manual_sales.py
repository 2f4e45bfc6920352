from sqlalchemy import Column, ForeignKey, Integer, String

from eventdesk.models.base import BaseModel


class ManualSalesCount(BaseModel):
    __tablename__ = "manual_sales"

    event_id = Column(String(32), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, unique=True)
    count = Column(Integer, nullable=False, default=0)
    updated_by = Column(String(255))
