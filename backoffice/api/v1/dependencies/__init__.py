"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, the verified caller, and
application services. Routes depend only on these, not on infrastructure.
"""

from backoffice.api.v1.dependencies.account import (
    get_account_repo,
    get_usage_counter_service,
)
from backoffice.api.v1.dependencies.approval import (
    build_approval_service,
    get_approval_service,
    get_approval_service_read,
)
from backoffice.api.v1.dependencies.auth import CurrentCaller, get_current_caller
from backoffice.api.v1.dependencies.db import ReadSession, WriteSession
from backoffice.api.v1.dependencies.record import (
    build_record_service,
    get_record_service,
    get_record_service_read,
)

__all__ = [
    "CurrentCaller",
    "ReadSession",
    "WriteSession",
    "build_approval_service",
    "build_record_service",
    "get_account_repo",
    "get_approval_service",
    "get_approval_service_read",
    "get_current_caller",
    "get_record_service",
    "get_record_service_read",
    "get_usage_counter_service",
]
