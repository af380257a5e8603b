"""Shared utilities: datetime, generators, JSON parsing."""

from backoffice.shared.utils.datetime import ensure_utc, utc_now
from backoffice.shared.utils.generators import generate_cuid
from backoffice.shared.utils.serialization import safe_json_loads

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "safe_json_loads",
]
