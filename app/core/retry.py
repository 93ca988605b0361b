"""Retry utilities for async operations.

Provides exponential backoff retry logic for transient failures, used for
calls to the media storage provider.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

import anyio
import httpx

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Default retry configuration
DEFAULT_ATTEMPTS = 3
DEFAULT_BASE_DELAY = 0.2  # seconds

# Failures worth another attempt: connection problems and timeouts
TRANSIENT_HTTP_ERRORS: tuple[type[Exception], ...] = (httpx.TransportError,)


def _calculate_delay(attempt: int, base_delay: float = DEFAULT_BASE_DELAY) -> float:
    """Calculate exponential backoff delay for a given attempt.

    Args:
        attempt: Zero-indexed attempt number
        base_delay: Base delay in seconds

    Returns:
        Delay in seconds (base_delay * 2^attempt)
    """
    return base_delay * (2**attempt)


async def with_retry(
    fn: Callable[[], Awaitable[T]],
    attempts: int = DEFAULT_ATTEMPTS,
    exceptions: tuple[type[Exception], ...] = TRANSIENT_HTTP_ERRORS,
    base_delay: float = DEFAULT_BASE_DELAY,
    operation: str = "operation",
) -> T:
    """Execute async function with exponential backoff retry.

    Args:
        fn: Async function to execute (typically a lambda or partial)
        attempts: Maximum number of attempts
        exceptions: Tuple of exception types to catch and retry
        base_delay: Base delay in seconds for exponential backoff
        operation: Label used in retry log lines

    Returns:
        Result from successful function execution

    Raises:
        The last exception if all attempts fail

    Example:
        response = await with_retry(
            lambda: client.post(url, data=params),
            operation="cloudinary upload",
        )
    """
    last_error: Exception | None = None

    for attempt in range(attempts):
        try:
            return await fn()
        except exceptions as e:
            last_error = e
            if attempt < attempts - 1:
                delay = _calculate_delay(attempt, base_delay)
                logger.warning(
                    "%s failed (attempt %d/%d): %s; retrying in %.2fs",
                    operation,
                    attempt + 1,
                    attempts,
                    e,
                    delay,
                )
                await anyio.sleep(delay)

    raise last_error  # type: ignore[misc]
