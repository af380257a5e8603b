"""Record service dependencies (composition root)."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.application.services.usage_counter_service import UsageCounterService
from backoffice.application.use_cases.records import RecordService
from backoffice.infrastructure.persistence.repositories import (
    AccountRepository,
    RecordRepository,
)

from .db import ReadSession, WriteSession


def build_record_service(db: AsyncSession) -> RecordService:
    """Wire RecordService on one session so record and counter writes share a transaction."""
    account_repo = AccountRepository(db)
    return RecordService(
        RecordRepository(db),
        account_repo,
        UsageCounterService(account_repo),
    )


async def get_record_service(db: WriteSession) -> RecordService:
    """Record service for create/update/delete (transactional)."""
    return build_record_service(db)


async def get_record_service_read(db: ReadSession) -> RecordService:
    """Record service for list/get/counts (read-only session)."""
    return build_record_service(db)
