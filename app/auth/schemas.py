"""Auth domain schemas.

Request and response schemas for authentication operations.

Every incoming address is an EmailStr, so the domain part is lower-cased
the same way on register, login and reset while the local part is kept
exactly as sent. Lookups after that are exact matches.
"""

from pydantic import EmailStr, Field

from app.core.schemas import CamelModel
from app.user.schemas import UserPublicRead

MIN_PASSWORD_LENGTH = 6


class AuthRegister(CamelModel):
    """Request schema for user registration."""

    email: EmailStr
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)
    name: str = Field(min_length=1, max_length=255)
    mobile: str | None = Field(default=None, max_length=50)


class AuthLoginRequest(CamelModel):
    """Request schema for email/password login."""

    email: EmailStr
    password: str = Field(min_length=1)


class RegisteredUser(CamelModel):
    user: UserPublicRead


class AuthToken(CamelModel):
    """Login payload: bearer token plus the profile it belongs to."""

    token: str
    token_type: str = "bearer"
    user: UserPublicRead


class PasswordResetRequest(CamelModel):
    """Request schema for password reset."""

    email: EmailStr


class PasswordResetResponse(CamelModel):
    """Response schema for password reset.

    reset_token and reset_url are only filled when outbound email is not
    configured (local development).
    """

    success: bool = True
    message: str
    reset_token: str | None = None
    reset_url: str | None = None


class ConfirmPasswordResetRequest(CamelModel):
    """Request schema for setting a new password with a reset token."""

    token: str = Field(min_length=1)
    new_password: str = Field(min_length=MIN_PASSWORD_LENGTH)
