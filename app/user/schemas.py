"""User domain schemas.

Request and response schemas for user operations.

Security notes:
- password_hash, reset_token and reset_token_expiry are internal-only and
  never appear in any response schema
- UserPublicRead is what a user sees about themselves
- UserRead adds account metadata for admin contexts
"""

import uuid
from datetime import datetime

from pydantic import EmailStr, Field, field_serializer

from app.core.schemas import CamelModel, serialize_utc
from app.user.models import UserRole


class UserPublicRead(CamelModel):
    """Response schema for self user data (login, /auth/me)."""

    id: uuid.UUID
    email: str
    name: str
    role: UserRole
    email_verified: bool
    mobile: str = ""


class UserRead(UserPublicRead):
    """Full response schema for admin contexts."""

    has_password: bool
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at")
    def serialize_datetime(self, value: datetime) -> str | None:
        return serialize_utc(value)


class UserProvision(CamelModel):
    """Admin request to pre-provision a passwordless, verified account."""

    email: EmailStr
    name: str = Field(min_length=1, max_length=255)
    mobile: str = Field(default="", max_length=50)


class RoleUpdate(CamelModel):
    role: str


class MobileUpdate(CamelModel):
    mobile: str = Field(min_length=1, max_length=50)


class UserStats(CamelModel):
    total_users: int
    verified_users: int
    admin_users: int
    regular_users: int
