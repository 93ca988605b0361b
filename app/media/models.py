"""Media domain models."""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlmodel import Field, Relationship, SQLModel

from app.core.mixins import TimestampMixin, utc_now

if TYPE_CHECKING:
    from app.talent.models import TalentApplication


class MediaUpload(TimestampMixin, SQLModel, table=True):
    """Metadata of a stored media-kit file.

    The binary lives with the storage provider under provider_id. The
    uploader link survives user deletion as NULL; the owning application
    link cascades.
    """

    __tablename__: str = "media_uploads"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID | None = Field(
        default=None, foreign_key="users.id", ondelete="SET NULL", index=True
    )
    talent_id: uuid.UUID | None = Field(
        default=None,
        foreign_key="talent_applications.id",
        ondelete="CASCADE",
        index=True,
    )
    filename: str = Field(max_length=255)
    original_name: str = Field(max_length=255)
    url: str
    provider_id: str = Field(unique=True, max_length=255)
    storage_backend: str = Field(default="local", max_length=20)
    file_size: int
    mime_type: str = Field(max_length=100)
    uploaded_at: datetime = Field(default_factory=utc_now)

    talent: Optional["TalentApplication"] = Relationship(back_populates="media")
