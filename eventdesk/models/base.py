import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, String

from eventdesk.db.database import Base


def generate_id() -> str:
    return uuid.uuid4().hex


class BaseModel(Base):
    __abstract__ = True

    id = Column(String(32), primary_key=True, default=generate_id)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=True)
