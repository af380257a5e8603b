"""Approval request ORM model."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, CheckConstraint, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.infrastructure.persistence.database import Base
from backoffice.infrastructure.persistence.models.mixins import MultiTenantModel


class ApprovalRequest(MultiTenantModel, Base):
    """Approval request. Table: approval_request.

    payload is written once at submission; resolution columns are set once.
    """

    __tablename__ = "approval_request"

    requester_id: Mapped[str] = mapped_column(
        String, ForeignKey("account.id", ondelete="CASCADE"), nullable=False, index=True
    )
    request_type: Mapped[str] = mapped_column(String(64), nullable=False)
    payload: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default="Pending", server_default="Pending"
    )
    approver_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("account.id", ondelete="SET NULL"), nullable=True
    )
    resolved_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "status IN ('Pending', 'Approved', 'Rejected')",
            name="ck_approval_request_status",
        ),
        Index("ix_approval_request_tenant_status", "tenant_id", "status"),
        Index("ix_approval_request_created_at", "created_at"),
    )
