"""Tests for app/main.py - Application lifespan and initialization."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI

from app.main import app, lifespan


@pytest.mark.asyncio
async def test_lifespan_initialization():
    """Test lifespan initializes the database and Resend, and closes HTTP clients."""
    mock_app = FastAPI()

    with (
        patch("app.main.init_db") as mock_init_db,
        patch("app.main.init_resend") as mock_resend,
        patch("app.main.close_cloudinary_client", new_callable=AsyncMock) as mock_close,
    ):
        async with lifespan(mock_app):
            mock_init_db.assert_called_once()
            mock_resend.assert_called_once()
            mock_close.assert_not_called()

        mock_close.assert_awaited_once()


def test_api_routes_are_prefixed():
    paths = set(app.openapi()["paths"])

    assert "/api/health" in paths
    assert "/api/auth/login" in paths
    assert "/api/talent/applications" in paths
    assert "/api/talents/{talent_id}/track-click" in paths
    assert "/api/upload/media-kit" in paths
    assert "/api/bookings/{booking_id}/status" in paths


def test_uploads_are_served_for_local_storage():
    assert any(getattr(route, "name", None) == "uploads" for route in app.routes)
