"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain entities only; no infrastructure imports.
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Any, Protocol

from backoffice.domain.enums import UsageCounter

if TYPE_CHECKING:
    from backoffice.application.dtos.account import AccountResult
    from backoffice.application.dtos.approval_request import (
        ApprovalRequestQuery,
        ApprovalRequestResult,
    )
    from backoffice.application.dtos.record import (
        RecordCounts,
        RecordQuery,
        RecordResult,
        RecordToPersist,
    )
    from backoffice.domain.entities.approval_request import ApprovalRequestEntity


# Identity / tenant store
class IAccountRepository(Protocol):
    """Protocol for the identity store (accounts keyed by tenant and role)."""

    async def get_by_id(self, account_id: str) -> AccountResult | None:
        """Return account by ID."""

    async def find_by_tenant_and_role(
        self, tenant_id: str, role: str
    ) -> AccountResult | None:
        """Return the first account in tenant with the given role."""

    async def find_first_by_tenant(self, tenant_id: str) -> AccountResult | None:
        """Return a representative account for tenant (owner first)."""

    async def find_by_company_name(self, company_name: str) -> AccountResult | None:
        """Return the first account whose company name matches exactly."""

    async def update_fields(
        self, account_id: str, fields: dict[str, Any]
    ) -> AccountResult | None:
        """Update profile fields; return the updated account or None if absent."""

    async def increment_counter(self, account_id: str, counter: UsageCounter) -> bool:
        """Atomically add 1 to the counter. Return False if no such account."""

    async def decrement_counter(self, account_id: str, counter: UsageCounter) -> bool:
        """Atomically subtract 1, floored at 0. Return False if no such account."""


# Approval request repository
class IApprovalRequestRepository(Protocol):
    """Protocol for approval request persistence."""

    async def create(
        self,
        requester_id: str,
        tenant_id: str | None,
        request_type: str,
        payload: dict[str, Any],
    ) -> ApprovalRequestResult:
        """Persist a new Pending request."""

    async def get_entity(self, request_id: str) -> ApprovalRequestEntity | None:
        """Return the request as a domain entity (for transitions)."""

    async def get_by_id(self, request_id: str) -> ApprovalRequestResult | None:
        """Return the request with requester/approver names joined."""

    async def list(self, query: ApprovalRequestQuery) -> list[ApprovalRequestResult]:
        """Return requests matching the scoped query, newest first."""

    async def save_resolution(self, entity: ApprovalRequestEntity) -> bool:
        """Persist a terminal transition only if the row is still Pending.

        Returns False when another writer resolved it first.
        """

    async def delete(self, request_id: str) -> bool:
        """Physically remove the request. Return False if absent."""

    def savepoint(self) -> AbstractAsyncContextManager[Any]:
        """Nested transaction: exceptions inside roll back only its writes."""


# Record repository
class IRecordRepository(Protocol):
    """Protocol for record ("post") persistence."""

    async def create(self, data: RecordToPersist) -> RecordResult:
        """Insert a record and return the stored row."""

    async def get_by_id(self, record_id: str) -> RecordResult | None:
        """Return record by ID."""

    async def list(self, query: RecordQuery) -> list[RecordResult]:
        """Return records matching the query, newest first."""

    async def update(
        self, record_id: str, fields: dict[str, Any]
    ) -> RecordResult | None:
        """Apply field changes; return updated record or None if absent."""

    async def delete(self, record_id: str) -> bool:
        """Delete the record. Return False if absent."""

    async def counts(
        self,
        *,
        tenant_id: str | None,
        excluded_categories: frozenset[str],
        waiting_statuses: tuple[str, ...],
        done_statuses: tuple[str, ...],
    ) -> RecordCounts:
        """Return pending/done/total counts outside excluded categories."""
