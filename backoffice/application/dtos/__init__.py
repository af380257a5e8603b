"""Application DTOs (no dependency on ORM)."""

from backoffice.application.dtos.account import AccountResult
from backoffice.application.dtos.approval_request import (
    ApprovalOutcome,
    ApprovalRequestFilters,
    ApprovalRequestQuery,
    ApprovalRequestResult,
    BulkApproveItemError,
    BulkApproveResult,
)
from backoffice.application.dtos.record import (
    RecordCounts,
    RecordFilters,
    RecordQuery,
    RecordResult,
    RecordToPersist,
    RecordUpdate,
)

__all__ = [
    "AccountResult",
    "ApprovalOutcome",
    "ApprovalRequestFilters",
    "ApprovalRequestQuery",
    "ApprovalRequestResult",
    "BulkApproveItemError",
    "BulkApproveResult",
    "RecordCounts",
    "RecordFilters",
    "RecordQuery",
    "RecordResult",
    "RecordToPersist",
    "RecordUpdate",
]
