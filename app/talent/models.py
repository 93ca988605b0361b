"""Talent domain models.

SQLModel table definition for TalentApplication.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from sqlalchemy import Column, DateTime, Index, text
from sqlmodel import Field, Relationship, SQLModel

from app.core.json_list import JSONList
from app.core.mixins import TimestampMixin

if TYPE_CHECKING:
    from app.media.models import MediaUpload
    from app.user.models import User


class ApplicationStatus(str, Enum):
    """Review state of an application.

    - pending: submitted, waiting for review
    - verified: approved and publicly listed
    - rejected: declined; the owner may submit again
    """

    pending = "pending"
    verified = "verified"
    rejected = "rejected"


ACTIVE_STATUSES = (ApplicationStatus.pending, ApplicationStatus.verified)
REVIEW_STATUSES = (ApplicationStatus.verified, ApplicationStatus.rejected)

# At most one active application per owner unless an admin created it.
_ACTIVE_OWNER_CONDITION = text(
    "status IN ('pending', 'verified') AND NOT admin_curated"
)


def _list_column() -> Any:
    return Column(JSONList, nullable=False, default="[]")


class TalentApplication(TimestampMixin, SQLModel, table=True):
    """Talent application database model.

    List attributes are stored as JSON text through JSONList. price is
    empty or a run of the configured currency glyph and is admin-only.
    """

    __tablename__: str = "talent_applications"
    __table_args__ = (
        Index(
            "uq_talent_applications_active_owner",
            "user_id",
            unique=True,
            postgresql_where=_ACTIVE_OWNER_CONDITION,
            sqlite_where=_ACTIVE_OWNER_CONDITION,
        ),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID | None = Field(
        default=None, foreign_key="users.id", ondelete="CASCADE", index=True
    )
    email: str = Field(max_length=255)
    status: ApplicationStatus = Field(
        default=ApplicationStatus.pending, max_length=20, index=True
    )
    admin_curated: bool = Field(default=False)

    # Profile
    full_name: str = Field(max_length=255)
    birth_year: int
    city: str = Field(max_length=255)
    nickname: str = Field(default="", max_length=255)
    phone: str = Field(max_length=50)
    bio: str = Field(default="")

    # Channels and media
    social_channels: list[str] = Field(default_factory=list, sa_column=_list_column())
    social_links: str = Field(default="")
    media_kit_urls: list[str] = Field(default_factory=list, sa_column=_list_column())
    content_categories: list[str] = Field(
        default_factory=list, sa_column=_list_column()
    )

    # Availability
    available_for_products: str = Field(default="No", max_length=50)
    shipping_address: str = Field(default="")
    available_for_reels: str = Field(default="No", max_length=50)
    available_next_3_months: str = Field(default="No", max_length=50)
    availability_period: str = Field(default="")

    # Experience
    collaborated_agencies: str = Field(default="No", max_length=50)
    agencies_list: str = Field(default="")
    collaborated_brands: str = Field(default="No", max_length=50)
    brands_list: str = Field(default="")

    # Fiscal
    has_vat: str = Field(default="No", max_length=50)
    payment_methods: list[str] = Field(default_factory=list, sa_column=_list_column())
    terms_accepted: bool = Field(default=False)

    # Admin-managed
    price: str = Field(default="", max_length=10)
    is_celebrity: bool = Field(default=False)
    click_count: int = Field(default=0)

    # Review
    reviewed_at: datetime | None = Field(default=None, sa_type=DateTime(timezone=True))
    reviewed_by: uuid.UUID | None = Field(default=None)
    review_notes: str | None = Field(default=None)

    owner: Optional["User"] = Relationship(back_populates="applications")
    media: list["MediaUpload"] = Relationship(
        back_populates="talent",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )
