"""Application settings using Pydantic Settings for typed configuration.

This module centralizes all configuration and provides type-safe access to settings.
Settings are loaded from environment variables with sensible defaults.
"""

from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application-wide settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Environment
    env_name: str = Field(default="development", alias="ENV_NAME")

    # Database
    database_url: str = Field(alias="DATABASE_URL")
    db_auto_create: bool = Field(default=True, alias="DB_AUTO_CREATE")
    seed_demo_users: bool = Field(default=False, alias="SEED_DEMO_USERS")

    # Tokens
    jwt_secret_key: str = Field(alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_hours: int = Field(
        default=24, alias="ACCESS_TOKEN_EXPIRE_HOURS", ge=1, le=24 * 30
    )
    password_reset_expire_minutes: int = Field(
        default=60, alias="PASSWORD_RESET_EXPIRE_MINUTES", ge=5, le=24 * 60
    )

    # Admin panel
    session_secret_key: str = Field(alias="SESSION_SECRET_KEY")

    # CORS
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")

    # Email (Resend)
    resend_api_key: str | None = Field(default=None, alias="RESEND_API_KEY")
    app_domain: str = Field(default="resend.dev", alias="APP_DOMAIN")
    client_url: str = Field(default="http://localhost:3000", alias="CLIENT_URL")

    # Media storage
    storage_backend: Literal["local", "cloudinary"] = Field(
        default="local", alias="STORAGE_BACKEND"
    )
    upload_dir: str = Field(default="uploads", alias="UPLOAD_DIR")
    public_base_url: str = Field(
        default="http://localhost:8000", alias="PUBLIC_BASE_URL"
    )
    media_folder: str = Field(default="talent-media-kits", alias="MEDIA_FOLDER")
    max_upload_size_mb: int = Field(
        default=100, alias="MAX_UPLOAD_SIZE_MB", ge=1, le=100
    )
    max_upload_files: int = Field(default=10, alias="MAX_UPLOAD_FILES", ge=1, le=10)
    cloudinary_cloud_name: str | None = Field(
        default=None, alias="CLOUDINARY_CLOUD_NAME"
    )
    cloudinary_api_key: str | None = Field(default=None, alias="CLOUDINARY_API_KEY")
    cloudinary_api_secret: str | None = Field(
        default=None, alias="CLOUDINARY_API_SECRET"
    )

    # Talent pricing
    price_symbol: str = Field(
        default="€", alias="PRICE_SYMBOL", min_length=1, max_length=1
    )

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list, always allowing the client URL."""
        origins = []
        for o in self.cors_origins.split(","):
            trimmed = o.strip()
            if trimmed:
                origins.append(trimmed)
        if "*" not in origins and self.client_url not in origins:
            origins.append(self.client_url)
        return origins

    @computed_field
    @property
    def access_token_expires_in(self) -> timedelta:
        """Get access token lifetime as timedelta."""
        return timedelta(hours=self.access_token_expire_hours)

    @computed_field
    @property
    def password_reset_expires_in(self) -> timedelta:
        """Get password reset token lifetime as timedelta."""
        return timedelta(minutes=self.password_reset_expire_minutes)

    @computed_field
    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024

    @computed_field
    @property
    def email_configured(self) -> bool:
        """Whether outbound email can be sent."""
        return bool(self.resend_api_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
