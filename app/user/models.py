"""User domain models.

SQLModel table definition for User.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import DateTime
from sqlmodel import Field, Relationship, SQLModel

from app.core.mixins import TimestampMixin

if TYPE_CHECKING:
    from app.talent.models import TalentApplication


class UserRole(str, Enum):
    """Access level of an account.

    - user: talents and clients
    - admin: back-office staff, may review applications and set prices
    """

    user = "user"
    admin = "admin"


class User(TimestampMixin, SQLModel, table=True):
    """User database model.

    Note: password_hash and the reset token pair are internal-only and
    must never be exposed in API responses. A NULL password_hash marks a
    pre-provisioned account that cannot log in until a password is set.
    """

    __tablename__: str = "users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    email: str = Field(index=True, unique=True, max_length=255)
    name: str = Field(default="", max_length=255)
    password_hash: str | None = Field(default=None, max_length=255)
    role: UserRole = Field(default=UserRole.user, max_length=20)
    mobile: str = Field(default="", max_length=50)
    email_verified: bool = Field(default=True)
    reset_token: str | None = Field(default=None, index=True, max_length=64)
    reset_token_expiry: datetime | None = Field(
        default=None, sa_type=DateTime(timezone=True)
    )

    applications: list["TalentApplication"] = Relationship(
        back_populates="owner",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin

    @property
    def has_password(self) -> bool:
        return self.password_hash is not None
