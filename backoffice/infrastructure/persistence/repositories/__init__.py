"""SQLAlchemy repositories (implement application interfaces)."""

from backoffice.infrastructure.persistence.repositories.account_repo import (
    AccountRepository,
)
from backoffice.infrastructure.persistence.repositories.approval_request_repo import (
    ApprovalRequestRepository,
)
from backoffice.infrastructure.persistence.repositories.base import BaseRepository
from backoffice.infrastructure.persistence.repositories.record_repo import (
    RecordRepository,
)

__all__ = [
    "AccountRepository",
    "ApprovalRequestRepository",
    "BaseRepository",
    "RecordRepository",
]
