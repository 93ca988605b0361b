"""Tests for app/core/http.py - HTTP client factory."""

import anyio
import httpx
import pytest

from app.core import http as http_module


async def _close_and_reset_cloudinary_client_async() -> None:
    if http_module._cloudinary_client is not None:
        await http_module._cloudinary_client.aclose()
    http_module._cloudinary_client = None


def _close_and_reset_cloudinary_client() -> None:
    """Close and reset the Cloudinary client singleton (for test cleanup)."""
    anyio.run(_close_and_reset_cloudinary_client_async)


class TestCreateHttpClient:
    """Unit tests for create_http_client factory."""

    @pytest.mark.asyncio
    async def test_default_timeouts(self):
        client = http_module.create_http_client(base_url="https://example.com")
        try:
            timeout = client.timeout

            assert timeout.connect == http_module.DEFAULT_CONNECT_TIMEOUT
            assert timeout.read == http_module.DEFAULT_READ_TIMEOUT
            assert timeout.write == http_module.DEFAULT_WRITE_TIMEOUT
            assert timeout.pool == http_module.DEFAULT_POOL_TIMEOUT
        finally:
            await client.aclose()

    @pytest.mark.asyncio
    async def test_custom_connection_limits(self):
        client = http_module.create_http_client(
            base_url="https://example.com",
            max_connections=50,
            max_keepalive_connections=25,
        )
        try:
            limits = client._transport._pool._max_connections  # type: ignore[union-attr]

            assert limits == 50
        finally:
            await client.aclose()

    @pytest.mark.asyncio
    async def test_empty_base_url_by_default(self):
        client = http_module.create_http_client()
        try:
            assert client.base_url == httpx.URL("")
        finally:
            await client.aclose()


class TestCloudinaryClient:
    """Singleton lifecycle of the Cloudinary upload API client."""

    @pytest.fixture(autouse=True)
    def reset_cloudinary_client(self):
        _close_and_reset_cloudinary_client()
        yield
        _close_and_reset_cloudinary_client()

    @pytest.mark.asyncio
    async def test_has_cloudinary_base_url(self):
        client = http_module.get_cloudinary_client()

        assert client.base_url == httpx.URL(http_module.CLOUDINARY_BASE_URL)

    @pytest.mark.asyncio
    async def test_allows_slow_uploads(self):
        client = http_module.get_cloudinary_client()

        assert client.timeout.write == http_module.UPLOAD_WRITE_TIMEOUT
        assert client.timeout.read == http_module.UPLOAD_READ_TIMEOUT

    @pytest.mark.asyncio
    async def test_is_singleton(self):
        assert http_module.get_cloudinary_client() is http_module.get_cloudinary_client()

    @pytest.mark.asyncio
    async def test_close_resets_singleton(self):
        client = http_module.get_cloudinary_client()

        await http_module.close_cloudinary_client()

        assert client.is_closed
        assert http_module._cloudinary_client is None
        assert http_module.get_cloudinary_client() is not client

    @pytest.mark.asyncio
    async def test_close_without_client_is_safe(self):
        await http_module.close_cloudinary_client()

        assert http_module._cloudinary_client is None
