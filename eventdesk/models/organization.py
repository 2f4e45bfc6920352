from sqlalchemy import JSON, Column, String, Text
from sqlalchemy.orm import relationship

from eventdesk.models.base import BaseModel


class Organization(BaseModel):
    __tablename__ = "organizations"

    name = Column(String(255), nullable=False)
    slug = Column(String(100), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    background = Column(Text, nullable=False, default="")

    # Media
    logo_url = Column(String(500))
    banner_url = Column(String(500))
    about_image_url = Column(String(500))

    # About page
    about_story = Column(Text)
    about_offerings = Column(JSON)

    contact_email = Column(String(255), nullable=False)
    social_links = Column(JSON, nullable=False, default=dict)
    settings = Column(JSON, nullable=False, default=dict)

    owner_id = Column(String(255), nullable=False)

    events = relationship("Event", back_populates="organization", cascade="all, delete-orphan")
