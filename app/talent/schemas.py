"""Talent domain schemas.

Request and response schemas for talent applications. The VAT flag keeps
its historical ``hasVAT`` wire name.
"""

import uuid
from datetime import datetime

from pydantic import Field, StrictBool, field_serializer

from app.core.schemas import CamelModel, ListResponse, serialize_utc
from app.talent.models import ApplicationStatus


class TalentProfileFields(CamelModel):
    """Optional profile attributes shared by create and update requests."""

    nickname: str = Field(default="", max_length=255)
    bio: str = ""
    social_channels: list[str] = Field(default_factory=list)
    social_links: str = ""
    media_kit_urls: list[str] = Field(default_factory=list)
    content_categories: list[str] = Field(default_factory=list)
    available_for_products: str = Field(default="No", max_length=50)
    shipping_address: str = ""
    available_for_reels: str = Field(default="No", max_length=50)
    available_next_3_months: str = Field(default="No", max_length=50)
    availability_period: str = ""
    collaborated_agencies: str = Field(default="No", max_length=50)
    agencies_list: str = ""
    collaborated_brands: str = Field(default="No", max_length=50)
    brands_list: str = ""
    has_vat: str = Field(default="No", max_length=50, alias="hasVAT")
    payment_methods: list[str] = Field(default_factory=list)


class TalentApplicationCreate(TalentProfileFields):
    """Request schema for submitting an application."""

    full_name: str = Field(min_length=1, max_length=255)
    birth_year: int = Field(ge=1900, le=2100)
    city: str = Field(min_length=1, max_length=255)
    phone: str = Field(min_length=1, max_length=50)
    terms_accepted: bool = False


class TalentApplicationUpdate(CamelModel):
    """Partial update of an application.

    Status is not updatable here (see the status endpoint). price is
    accepted only from admins.
    """

    full_name: str | None = Field(default=None, min_length=1, max_length=255)
    birth_year: int | None = Field(default=None, ge=1900, le=2100)
    city: str | None = Field(default=None, min_length=1, max_length=255)
    nickname: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, min_length=1, max_length=50)
    bio: str | None = None
    social_channels: list[str] | None = None
    social_links: str | None = None
    media_kit_urls: list[str] | None = None
    content_categories: list[str] | None = None
    available_for_products: str | None = Field(default=None, max_length=50)
    shipping_address: str | None = None
    available_for_reels: str | None = Field(default=None, max_length=50)
    available_next_3_months: str | None = Field(default=None, max_length=50)
    availability_period: str | None = None
    collaborated_agencies: str | None = Field(default=None, max_length=50)
    agencies_list: str | None = None
    collaborated_brands: str | None = Field(default=None, max_length=50)
    brands_list: str | None = None
    has_vat: str | None = Field(default=None, max_length=50, alias="hasVAT")
    payment_methods: list[str] | None = None
    price: str | None = Field(default=None, max_length=10)


class TalentApplicationRead(CamelModel):
    """Response schema for an application.

    List attributes fall back to the raw stored text when it is not valid
    JSON, hence the ``| str``.
    """

    id: uuid.UUID
    user_id: uuid.UUID | None
    email: str
    status: ApplicationStatus
    full_name: str
    birth_year: int
    city: str
    nickname: str
    phone: str
    bio: str
    social_channels: list[str] | str
    social_links: str
    media_kit_urls: list[str] | str
    content_categories: list[str] | str
    available_for_products: str
    shipping_address: str
    available_for_reels: str
    available_next_3_months: str
    availability_period: str
    collaborated_agencies: str
    agencies_list: str
    collaborated_brands: str
    brands_list: str
    has_vat: str = Field(alias="hasVAT")
    payment_methods: list[str] | str
    terms_accepted: bool
    price: str
    is_celebrity: bool
    click_count: int
    reviewed_at: datetime | None = None
    reviewed_by: uuid.UUID | None = None
    review_notes: str | None = None
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at", "reviewed_at")
    def serialize_datetime(self, value: datetime | None) -> str | None:
        return serialize_utc(value)


class StatusUpdate(CamelModel):
    status: str
    review_notes: str | None = Field(default=None, max_length=2000)


class CelebrityUpdate(CamelModel):
    is_celebrity: StrictBool


class ClickEvent(CamelModel):
    """Optional analytics context sent with a profile click."""

    timestamp: datetime | None = None
    user_agent: str | None = None
    ip_address: str | None = None


class ApplicationCounts(CamelModel):
    total: int
    pending: int
    verified: int
    rejected: int


class RecentApplication(CamelModel):
    id: uuid.UUID
    full_name: str
    status: ApplicationStatus
    created_at: datetime

    @field_serializer("created_at")
    def serialize_datetime(self, value: datetime) -> str | None:
        return serialize_utc(value)


class ApplicationStats(ApplicationCounts):
    recent_applications: list[RecentApplication]


class TalentApplicationList(ListResponse[TalentApplicationRead]):
    stats: ApplicationCounts


class ClickCount(CamelModel):
    id: uuid.UUID
    click_count: int
