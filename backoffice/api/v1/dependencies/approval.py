"""Approval workflow dependencies (composition root)."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.application.use_cases.approvals import (
    ApprovalDispatcher,
    ApprovalService,
)
from backoffice.core.config import get_settings
from backoffice.infrastructure.persistence.repositories import (
    AccountRepository,
    ApprovalRequestRepository,
)

from .db import ReadSession, WriteSession
from .record import build_record_service


def build_approval_service(db: AsyncSession) -> ApprovalService:
    """Wire ApprovalService and its dispatcher on one session."""
    dispatcher = ApprovalDispatcher(AccountRepository(db), build_record_service(db))
    return ApprovalService(
        ApprovalRequestRepository(db),
        dispatcher,
        max_bulk_items=get_settings().max_bulk_approve_items,
    )


async def get_approval_service(db: WriteSession) -> ApprovalService:
    """Approval service for submit/approve/reject/delete (transactional)."""
    return build_approval_service(db)


async def get_approval_service_read(db: ReadSession) -> ApprovalService:
    """Approval service for list/get (read-only session)."""
    return build_approval_service(db)
