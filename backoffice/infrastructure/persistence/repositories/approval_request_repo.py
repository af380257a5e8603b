"""Approval request repository. Returns application DTOs or domain entities."""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Any

from sqlalchemy import Select, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from backoffice.application.dtos.approval_request import (
    ApprovalRequestQuery,
    ApprovalRequestResult,
)
from backoffice.domain.entities.approval_request import ApprovalRequestEntity
from backoffice.domain.enums import ApprovalStatus
from backoffice.infrastructure.persistence.models.account import Account
from backoffice.infrastructure.persistence.models.approval_request import (
    ApprovalRequest,
)
from backoffice.infrastructure.persistence.repositories.base import BaseRepository
from backoffice.shared.utils.datetime import ensure_utc
from backoffice.shared.utils.serialization import safe_json_loads

_Requester = aliased(Account, name="requester")
_Approver = aliased(Account, name="approver")


def _payload_of(row: ApprovalRequest) -> dict[str, Any]:
    # Rows migrated from the legacy store may hold the payload as a JSON string.
    value = row.payload
    if isinstance(value, dict):
        return dict(value)
    parsed = safe_json_loads(value, {})
    return parsed if isinstance(parsed, dict) else {}


def _to_entity(row: ApprovalRequest) -> ApprovalRequestEntity:
    return ApprovalRequestEntity(
        id=row.id,
        requester_id=row.requester_id,
        tenant_id=row.tenant_id,
        request_type=row.request_type,
        payload=_payload_of(row),
        status=ApprovalStatus(row.status),
        created_at=ensure_utc(row.created_at),
        approver_id=row.approver_id,
        resolved_at=ensure_utc(row.resolved_at),
        rejection_reason=row.rejection_reason,
    )


def _to_result(
    row: ApprovalRequest,
    requester_name: str | None = None,
    requester_email: str | None = None,
    requester_department: str | None = None,
    approver_name: str | None = None,
) -> ApprovalRequestResult:
    return ApprovalRequestResult(
        id=row.id,
        requester_id=row.requester_id,
        tenant_id=row.tenant_id,
        request_type=row.request_type,
        payload=_payload_of(row),
        status=row.status,
        approver_id=row.approver_id,
        resolved_at=ensure_utc(row.resolved_at),
        rejection_reason=row.rejection_reason,
        created_at=ensure_utc(row.created_at),
        requester_name=requester_name,
        requester_email=requester_email,
        requester_department=requester_department,
        approver_name=approver_name,
    )


def _joined_select() -> Select[Any]:
    """Request rows with requester and approver display fields (outer joins)."""
    return (
        select(
            ApprovalRequest,
            _Requester.display_name,
            _Requester.email,
            _Requester.department,
            _Approver.display_name,
        )
        .outerjoin(_Requester, ApprovalRequest.requester_id == _Requester.id)
        .outerjoin(_Approver, ApprovalRequest.approver_id == _Approver.id)
        .execution_options(populate_existing=True)
    )


class ApprovalRequestRepository(BaseRepository[ApprovalRequest]):
    """Approval request repository. Resolution writes are compare-and-set on status."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, ApprovalRequest)

    async def create(
        self,
        requester_id: str,
        tenant_id: str | None,
        request_type: str,
        payload: dict[str, Any],
    ) -> ApprovalRequestResult:
        orm = await self._add(
            ApprovalRequest(
                requester_id=requester_id,
                tenant_id=tenant_id,
                request_type=request_type,
                payload=payload,
                status=ApprovalStatus.PENDING.value,
            )
        )
        result = await self.get_by_id(orm.id)
        return result if result is not None else _to_result(orm)

    async def get_entity(self, request_id: str) -> ApprovalRequestEntity | None:
        orm = await super().get_by_id(request_id)
        return _to_entity(orm) if orm else None

    async def get_by_id(self, request_id: str) -> ApprovalRequestResult | None:
        result = await self.db.execute(
            _joined_select().where(ApprovalRequest.id == request_id)
        )
        row = result.one_or_none()
        return _to_result(*row) if row else None

    async def list(self, query: ApprovalRequestQuery) -> list[ApprovalRequestResult]:
        stmt = _joined_select()
        if query.requester_id is not None:
            stmt = stmt.where(ApprovalRequest.requester_id == query.requester_id)
        if query.tenant_id is not None:
            stmt = stmt.where(ApprovalRequest.tenant_id == query.tenant_id)
        if query.status is not None:
            stmt = stmt.where(ApprovalRequest.status == query.status)
        stmt = stmt.order_by(ApprovalRequest.created_at.desc(), ApprovalRequest.id.desc())
        result = await self.db.execute(stmt)
        return [_to_result(*row) for row in result.all()]

    async def save_resolution(self, entity: ApprovalRequestEntity) -> bool:
        result = await self.db.execute(
            update(ApprovalRequest)
            .where(
                ApprovalRequest.id == entity.id,
                ApprovalRequest.status == ApprovalStatus.PENDING.value,
            )
            .values(
                status=entity.status.value,
                approver_id=entity.approver_id,
                resolved_at=entity.resolved_at,
                rejection_reason=entity.rejection_reason,
            )
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount == 1

    async def delete(self, request_id: str) -> bool:
        orm = await super().get_by_id(request_id)
        if orm is None:
            return False
        await self._remove(orm)
        return True

    def savepoint(self) -> AbstractAsyncContextManager[Any]:
        return self.db.begin_nested()
