"""Approval request domain entity.

Holds the Pending -> Approved / Rejected state machine. Terminal states are
never left; the payload is fixed at submission.
"""

from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping

from backoffice.core.constants import DEFAULT_REJECTION_REASON
from backoffice.domain.enums import ApprovalStatus
from backoffice.domain.exceptions import AlreadyResolvedException, ValidationException


@dataclass
class ApprovalRequestEntity:
    """Domain entity for an approval request (SRP: transitions separate from persistence)."""

    id: str
    requester_id: str
    tenant_id: str | None
    request_type: str
    payload: Mapping[str, Any]
    status: ApprovalStatus
    created_at: datetime | None = None
    approver_id: str | None = None
    resolved_at: datetime | None = None
    rejection_reason: str | None = None

    def __post_init__(self) -> None:
        self.status = ApprovalStatus(self.status)
        self.payload = MappingProxyType(dict(self.payload))
        self.validate()

    def validate(self) -> None:
        """Validate entity invariants. Raises ValidationException if invalid."""
        if not self.requester_id:
            raise ValidationException("Requester is required", field="requester_id")
        if not self.request_type or not self.request_type.strip():
            raise ValidationException("Request type is required", field="request_type")
        if self.status is ApprovalStatus.PENDING and (
            self.approver_id or self.resolved_at or self.rejection_reason
        ):
            raise ValidationException(
                "Pending request cannot carry resolution fields", field="status"
            )

    @property
    def is_pending(self) -> bool:
        return self.status is ApprovalStatus.PENDING

    def _ensure_pending(self) -> None:
        if not self.is_pending:
            raise AlreadyResolvedException(self.id, self.status.value)

    def approve(self, approver_id: str, at: datetime) -> None:
        """Transition Pending -> Approved and record who approved and when.

        Raises:
            AlreadyResolvedException: If the request is not Pending.
        """
        self._ensure_pending()
        self.status = ApprovalStatus.APPROVED
        self.approver_id = approver_id
        self.resolved_at = at

    def reject(self, approver_id: str, at: datetime, reason: str | None = None) -> None:
        """Transition Pending -> Rejected; empty reason stores the default placeholder.

        Raises:
            AlreadyResolvedException: If the request is not Pending.
        """
        self._ensure_pending()
        self.status = ApprovalStatus.REJECTED
        self.approver_id = approver_id
        self.resolved_at = at
        cleaned = (reason or "").strip()
        self.rejection_reason = cleaned or DEFAULT_REJECTION_REASON

    def payload_dict(self) -> dict[str, Any]:
        """Return a mutable copy of the payload (the entity's own stays read-only)."""
        return dict(self.payload)
