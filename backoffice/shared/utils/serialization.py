"""Tolerant JSON decoding for columns that may hold legacy string payloads."""

import json
from typing import Any


def safe_json_loads(value: Any, fallback: Any = None) -> Any:
    """Decode a JSON string; pass through already-decoded values.

    None, blank strings, and malformed JSON return ``fallback`` so a single
    corrupt row cannot fail a whole listing.
    """
    if value is None:
        return fallback
    if not isinstance(value, (str, bytes)):
        return value
    text = value.decode("utf-8", errors="replace") if isinstance(value, bytes) else value
    text = text.strip()
    if not text:
        return fallback
    try:
        return json.loads(text)
    except ValueError:
        return fallback
