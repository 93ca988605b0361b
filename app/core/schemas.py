"""Shared response envelope and schema base classes.

Every endpoint answers with ``{"success": true, "message"?, "data", ...}``.
Field names are camelCase on the wire and snake_case in Python.
"""

from datetime import UTC, datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


def serialize_utc(value: datetime | None) -> str | None:
    """Format datetime as ISO 8601 string in UTC.

    Converts datetime to UTC timezone and formats with Z suffix
    (e.g. 2026-01-19T12:34:56Z). Naive values are assumed to be UTC.
    """
    if value is None:
        return None
    if value.tzinfo is not None:
        utc_value = value.astimezone(UTC)
    else:
        utc_value = value.replace(tzinfo=UTC)
    return utc_value.replace(microsecond=0).isoformat().replace("+00:00", "Z")


class CamelModel(BaseModel):
    """Schema base exposing camelCase aliases while accepting either form."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    """Single-object success envelope."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    message: str | None = None
    data: T


class ListResponse(BaseModel, Generic[T]):
    """List success envelope with a count."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    message: str | None = None
    data: list[T]
    count: int


class MessageResponse(BaseModel):
    success: bool = True
    message: str
