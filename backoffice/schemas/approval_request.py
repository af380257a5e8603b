"""Approval request API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ApprovalRequestCreate(BaseModel):
    """Request body for submitting an approval request.

    payload is checked by the service so a missing or non-object payload
    answers 400 VALIDATION_ERROR like every other domain validation failure.
    """

    request_type: str = Field(..., max_length=64, examples=["department-change"])
    payload: Any = Field(default=None, examples=[{"toDepartment": "Legal"}])


class ApprovalRejectRequest(BaseModel):
    """Request body for rejecting; an empty reason stores a default placeholder."""

    reason: str | None = Field(default=None, max_length=2000)


class BulkApproveRequest(BaseModel):
    """Request body for bulk approve."""

    ids: list[str] = Field(..., min_length=1)


class ApprovalRequestResponse(BaseModel):
    """Approval request with requester/approver display names."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    requester_id: str
    tenant_id: str | None
    request_type: str
    payload: dict[str, Any]
    status: str
    approver_id: str | None = None
    resolved_at: datetime | None = None
    rejection_reason: str | None = None
    created_at: datetime
    requester_name: str | None = None
    requester_email: str | None = None
    requester_department: str | None = None
    approver_name: str | None = None


class ApprovalOutcomeResponse(BaseModel):
    """Result of approving one request: the request and what its side effect did."""

    request: ApprovalRequestResponse
    action: str
    dispatched: bool
    dispatch_error: str | None = None
    record_id: str | None = None


class BulkApproveItemErrorResponse(BaseModel):
    """One failed item of a bulk approve."""

    id: str
    error_code: str
    message: str


class BulkApproveResponse(BaseModel):
    """Bulk approve summary. Served with 207 when any item failed."""

    success_count: int
    fail_count: int
    errors: list[BulkApproveItemErrorResponse] = Field(default_factory=list)
    approved_ids: list[str] = Field(default_factory=list)
