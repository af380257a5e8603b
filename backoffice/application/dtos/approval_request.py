"""DTOs for approval requests and approval outcomes (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class ApprovalRequestResult:
    """Approval request read-model with requester/approver display names joined."""

    id: str
    requester_id: str
    tenant_id: str | None
    request_type: str
    payload: dict[str, Any]
    status: str
    approver_id: str | None
    resolved_at: datetime | None
    rejection_reason: str | None
    created_at: datetime
    requester_name: str | None = None
    requester_email: str | None = None
    requester_department: str | None = None
    approver_name: str | None = None


@dataclass(frozen=True)
class ApprovalRequestFilters:
    """Caller-supplied list filters."""

    status: str | None = None
    tenant_id: str | None = None


@dataclass(frozen=True)
class ApprovalRequestQuery:
    """Repository query after visibility scoping has been applied."""

    requester_id: str | None = None
    tenant_id: str | None = None
    status: str | None = None


@dataclass(frozen=True)
class ApprovalOutcome:
    """Result of a single approve: the resolved request and what dispatch did."""

    request: ApprovalRequestResult
    action: str
    dispatch_error: str | None = None
    record_id: str | None = None

    @property
    def dispatched(self) -> bool:
        return self.dispatch_error is None


@dataclass(frozen=True)
class BulkApproveItemError:
    """One failed item of a bulk approve."""

    request_id: str
    error_code: str
    message: str


@dataclass(frozen=True)
class BulkApproveResult:
    """Aggregate of a bulk approve; partial when fail_count > 0."""

    success_count: int
    fail_count: int
    errors: list[BulkApproveItemError] = field(default_factory=list)
    approved_ids: list[str] = field(default_factory=list)

    @property
    def is_partial(self) -> bool:
        return self.fail_count > 0
