"""HTTP client factory for external API calls.

Provides per-service HTTP clients with connection pooling, timeouts,
and proper resource management.
"""

import httpx

# Default timeout configuration (seconds)
DEFAULT_CONNECT_TIMEOUT = 5.0
DEFAULT_READ_TIMEOUT = 10.0
DEFAULT_WRITE_TIMEOUT = 10.0
DEFAULT_POOL_TIMEOUT = 5.0

# Media uploads can be large; allow slow writes/reads
UPLOAD_WRITE_TIMEOUT = 120.0
UPLOAD_READ_TIMEOUT = 60.0

CLOUDINARY_BASE_URL = "https://api.cloudinary.com"

# Module-level client storage for singleton pattern
_cloudinary_client: httpx.AsyncClient | None = None


def create_http_client(
    base_url: str = "",
    max_connections: int = 20,
    max_keepalive_connections: int = 10,
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
    read_timeout: float = DEFAULT_READ_TIMEOUT,
    write_timeout: float = DEFAULT_WRITE_TIMEOUT,
    pool_timeout: float = DEFAULT_POOL_TIMEOUT,
) -> httpx.AsyncClient:
    """Create a configured async HTTP client.

    Args:
        base_url: Base URL for all requests (empty string for none)
        max_connections: Maximum number of concurrent connections
        max_keepalive_connections: Maximum idle connections to keep alive
        connect_timeout: Timeout for establishing connection
        read_timeout: Timeout for reading response
        write_timeout: Timeout for sending request
        pool_timeout: Timeout for acquiring connection from pool

    Returns:
        Configured httpx.AsyncClient instance
    """
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=httpx.Timeout(
            connect=connect_timeout,
            read=read_timeout,
            write=write_timeout,
            pool=pool_timeout,
        ),
        limits=httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_keepalive_connections,
        ),
    )


def get_cloudinary_client() -> httpx.AsyncClient:
    """Get singleton HTTP client for the Cloudinary upload API.

    Uses lazy initialization with module-level storage. The client should be
    closed via close_cloudinary_client() during application shutdown.

    Returns:
        Configured httpx.AsyncClient instance for Cloudinary API calls
    """
    global _cloudinary_client
    if _cloudinary_client is None:
        _cloudinary_client = create_http_client(
            base_url=CLOUDINARY_BASE_URL,
            max_connections=20,
            max_keepalive_connections=5,
            read_timeout=UPLOAD_READ_TIMEOUT,
            write_timeout=UPLOAD_WRITE_TIMEOUT,
        )
    return _cloudinary_client


async def close_cloudinary_client() -> None:
    """Close the Cloudinary HTTP client and release resources."""
    global _cloudinary_client
    if _cloudinary_client is not None:
        await _cloudinary_client.aclose()
        _cloudinary_client = None
