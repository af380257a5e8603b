"""Approval workflow use cases."""

from backoffice.application.use_cases.approvals.approval_operations import (
    ApprovalService,
)
from backoffice.application.use_cases.approvals.dispatch import (
    RECORD_CATEGORY_BY_REQUEST_TYPE,
    ApprovalDispatcher,
)

__all__ = [
    "RECORD_CATEGORY_BY_REQUEST_TYPE",
    "ApprovalDispatcher",
    "ApprovalService",
]
