"""Account and usage counter dependencies (composition root)."""

from __future__ import annotations

from backoffice.application.services.usage_counter_service import UsageCounterService
from backoffice.infrastructure.persistence.repositories import AccountRepository

from .db import ReadSession, WriteSession


async def get_account_repo(db: ReadSession) -> AccountRepository:
    """Account repository for reads."""
    return AccountRepository(db)


async def get_usage_counter_service(db: WriteSession) -> UsageCounterService:
    """Usage counter service for manual adjustments (transactional)."""
    return UsageCounterService(AccountRepository(db))
