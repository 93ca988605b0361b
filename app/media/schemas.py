"""Media domain schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from app.core.schemas import CamelModel, ListResponse, serialize_utc


class MediaRead(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID | None
    talent_id: uuid.UUID | None
    filename: str
    original_name: str
    url: str
    provider_id: str
    storage_backend: str
    file_size: int
    mime_type: str
    uploaded_at: datetime

    @field_serializer("uploaded_at")
    def serialize_datetime(self, value: datetime) -> str | None:
        return serialize_utc(value)


class UploadedFile(CamelModel):
    id: uuid.UUID
    filename: str
    original_name: str
    size: int
    url: str
    provider_id: str


class MediaUploadResult(BaseModel):
    """Upload response: the stored files plus their URLs in upload order."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    message: str
    files: list[UploadedFile]
    urls: list[str]


class MediaStats(CamelModel):
    total_files: int
    total_size: int
    total_size_mb: str = Field(alias="totalSizeMB")
    unique_users: int
    talents_with_media: int


class MediaStatsDetail(MediaStats):
    total_size_gb: str = Field(alias="totalSizeGB")


class MediaList(ListResponse[MediaRead]):
    stats: MediaStats
