"""Shared utilities: datetime, generators, JSON helpers, and logging.

Used by domain, application, and infrastructure. No business logic.
"""

from backoffice.shared.utils import (
    ensure_utc,
    generate_cuid,
    safe_json_loads,
    utc_now,
)

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "safe_json_loads",
]
