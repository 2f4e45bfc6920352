from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field, field_validator

from eventdesk.schemas.common import CamelModel


class SocialLinks(CamelModel):
    instagram: Optional[str] = None
    website: Optional[str] = None
    eventbrite: Optional[str] = None
    venmo: Optional[str] = None
    other: Optional[str] = None


class ThemeSettings(CamelModel):
    primary_color: Optional[str] = None
    background_color: Optional[str] = None


class OrganizationSettings(CamelModel):
    default_location: Optional[str] = None
    default_address: Optional[str] = None
    theme: Optional[ThemeSettings] = None


class OrganizationBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=100, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    description: str = ""
    background: str = ""
    logo_url: Optional[str] = None
    banner_url: Optional[str] = None
    about_image_url: Optional[str] = None
    about_story: Optional[str] = None
    about_offerings: Optional[List[str]] = None
    contact_email: EmailStr
    social_links: SocialLinks = Field(default_factory=SocialLinks)
    settings: OrganizationSettings = Field(default_factory=OrganizationSettings)


class OrganizationCreate(OrganizationBase):
    owner_id: Optional[str] = None

    @field_validator("slug", mode="before")
    @classmethod
    def normalize_slug(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


class OrganizationUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    background: Optional[str] = None
    logo_url: Optional[str] = None
    banner_url: Optional[str] = None
    about_image_url: Optional[str] = None
    about_story: Optional[str] = None
    about_offerings: Optional[List[str]] = None
    contact_email: Optional[EmailStr] = None
    social_links: Optional[SocialLinks] = None
    settings: Optional[OrganizationSettings] = None


class Organization(OrganizationBase):
    id: str
    # Stored values are not re-validated against the creation rules
    slug: str
    contact_email: str
    owner_id: str
    created_at: datetime
    updated_at: Optional[datetime] = None
