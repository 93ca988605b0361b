"""JSON text storage for list-valued columns.

Every list attribute (social channels, media kit URLs, booking talents, ...)
goes through ``encode_list``/``decode_list``. Decoding never raises: text
that is not a JSON array is logged and handed back unchanged.
"""

import json
import logging
from typing import Any

from sqlalchemy import Text
from sqlalchemy.types import TypeDecorator

logger = logging.getLogger(__name__)


def encode_list(value: Any) -> str:
    """Serialize a list for storage. ``None`` is stored as an empty list."""
    if value is None:
        return "[]"
    if isinstance(value, str):
        # Already-encoded (or legacy raw) text is stored as-is.
        return value
    return json.dumps(list(value), ensure_ascii=False)


def decode_list(value: str | None) -> list[Any] | str:
    """Deserialize stored text, falling back to the raw value."""
    if value is None or value == "":
        return []
    try:
        parsed = json.loads(value)
    except ValueError:
        logger.warning("Stored list is not valid JSON, returning raw value")
        return value
    if not isinstance(parsed, list):
        logger.warning("Stored list decoded to %s, returning raw value", type(parsed))
        return value
    return parsed


class JSONList(TypeDecorator):
    """SQLAlchemy column type storing a list as JSON text."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Any) -> str:
        return encode_list(value)

    def process_result_value(self, value: str | None, dialect: Any) -> list[Any] | str:
        return decode_list(value)
