"""Approval workflow: submit, list, get, approve, reject, bulk approve, delete.

A request starts Pending and is resolved exactly once. Approving persists the
transition first and then dispatches the request's side effect inside a
savepoint; a failing side effect is logged and reported on the outcome while
the Approved status stays.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from backoffice.application.dtos.approval_request import (
    ApprovalOutcome,
    ApprovalRequestFilters,
    ApprovalRequestQuery,
    ApprovalRequestResult,
    BulkApproveItemError,
    BulkApproveResult,
)
from backoffice.application.interfaces.repositories import IApprovalRequestRepository
from backoffice.application.use_cases.approvals.dispatch import ApprovalDispatcher
from backoffice.domain.entities.approval_request import ApprovalRequestEntity
from backoffice.domain.enums import ApprovalStatus
from backoffice.domain.exceptions import (
    AlreadyResolvedException,
    AuthorizationException,
    BackofficeException,
    DispatchFailureException,
    ResourceNotFoundException,
    ValidationException,
)
from backoffice.domain.policies import (
    can_delete_approval,
    can_resolve_approval,
    can_view_approval,
    is_elevated_admin,
    is_owner,
)
from backoffice.domain.value_objects.identity import CallerIdentity
from backoffice.shared.telemetry.logging import get_logger
from backoffice.shared.utils.datetime import utc_now

logger = get_logger(__name__)

DEFAULT_MAX_BULK_ITEMS = 200


class ApprovalService:
    """Owns the approval request lifecycle from submission to resolution."""

    def __init__(
        self,
        approval_repo: IApprovalRequestRepository,
        dispatcher: ApprovalDispatcher,
        max_bulk_items: int = DEFAULT_MAX_BULK_ITEMS,
    ) -> None:
        self.approval_repo = approval_repo
        self.dispatcher = dispatcher
        self.max_bulk_items = max_bulk_items

    async def submit(
        self,
        requester: CallerIdentity,
        request_type: str,
        payload: Mapping[str, Any] | None,
    ) -> ApprovalRequestResult:
        """Persist a new Pending request scoped to the requester's tenant.

        Raises:
            ValidationException: Empty request_type or payload not an object.
        """
        if not isinstance(request_type, str) or not request_type.strip():
            raise ValidationException("request_type is required", field="request_type")
        if not isinstance(payload, Mapping):
            raise ValidationException("payload must be an object", field="payload")
        result = await self.approval_repo.create(
            requester_id=requester.account_id,
            tenant_id=requester.tenant_id,
            request_type=request_type.strip(),
            payload=dict(payload),
        )
        logger.info(
            "Approval request submitted: id=%s type=%s requester=%s tenant=%s",
            result.id,
            result.request_type,
            requester.account_id,
            requester.tenant_id,
        )
        return result

    async def list(
        self, caller: CallerIdentity, filters: ApprovalRequestFilters | None = None
    ) -> list[ApprovalRequestResult]:
        """Return requests visible to the caller, newest first.

        Staff see everything (optionally filtered by tenant), owners see their
        tenant, everyone else sees only what they submitted.
        """
        filters = filters or ApprovalRequestFilters()
        if filters.status is not None and filters.status not in ApprovalStatus.values():
            raise ValidationException(
                f"status must be one of {ApprovalStatus.values()}", field="status"
            )
        if is_elevated_admin(caller.role):
            query = ApprovalRequestQuery(tenant_id=filters.tenant_id, status=filters.status)
        elif is_owner(caller.role):
            if not caller.tenant_id:
                return []
            if filters.tenant_id is not None and filters.tenant_id != caller.tenant_id:
                return []
            query = ApprovalRequestQuery(tenant_id=caller.tenant_id, status=filters.status)
        else:
            query = ApprovalRequestQuery(
                requester_id=caller.account_id, status=filters.status
            )
        return await self.approval_repo.list(query)

    async def get(
        self, request_id: str, caller: CallerIdentity | None = None
    ) -> ApprovalRequestResult:
        """Return one request; with a caller, the list visibility rule applies."""
        result = await self.approval_repo.get_by_id(request_id)
        if result is None:
            raise ResourceNotFoundException("approval_request", request_id)
        if caller is not None and not can_view_approval(
            caller, result.requester_id, result.tenant_id
        ):
            raise AuthorizationException(resource="approval_request", action="read")
        return result

    async def _load_for_resolution(
        self, request_id: str, approver: CallerIdentity, action: str
    ) -> ApprovalRequestEntity:
        """Not found, then already resolved, then authorization."""
        entity = await self.approval_repo.get_entity(request_id)
        if entity is None:
            raise ResourceNotFoundException("approval_request", request_id)
        if not entity.is_pending:
            raise AlreadyResolvedException(request_id, entity.status.value)
        if not can_resolve_approval(approver, entity.tenant_id):
            raise AuthorizationException(resource="approval_request", action=action)
        return entity

    async def _persist_resolution(self, entity: ApprovalRequestEntity) -> None:
        if await self.approval_repo.save_resolution(entity):
            return
        # Lost the race: someone resolved it between read and write.
        current = await self.approval_repo.get_entity(entity.id)
        if current is None:
            raise ResourceNotFoundException("approval_request", entity.id)
        raise AlreadyResolvedException(entity.id, current.status.value)

    async def _reload(self, request_id: str) -> ApprovalRequestResult:
        result = await self.approval_repo.get_by_id(request_id)
        if result is None:
            raise ResourceNotFoundException("approval_request", request_id)
        return result

    async def approve(
        self, request_id: str, approver: CallerIdentity
    ) -> ApprovalOutcome:
        """Approve a Pending request and apply its side effect.

        Raises:
            ResourceNotFoundException: No such request.
            AlreadyResolvedException: Request is Approved or Rejected.
            AuthorizationException: Approver is neither staff nor the tenant's owner.
        """
        entity = await self._load_for_resolution(request_id, approver, "approve")
        entity.approve(approver.account_id, utc_now())
        await self._persist_resolution(entity)
        logger.info(
            "Approval request approved: id=%s type=%s approver=%s",
            request_id,
            entity.request_type,
            approver.account_id,
        )

        dispatch_error: str | None = None
        record_id: str | None = None
        try:
            async with self.approval_repo.savepoint():
                record_id = await self.dispatcher.dispatch(entity, approver)
        except DispatchFailureException as e:
            logger.exception(
                "Dispatch failed for approved request %s (type=%s)",
                request_id,
                entity.request_type,
            )
            dispatch_error = e.message

        return ApprovalOutcome(
            request=await self._reload(request_id),
            action=entity.request_type,
            dispatch_error=dispatch_error,
            record_id=record_id,
        )

    async def reject(
        self,
        request_id: str,
        approver: CallerIdentity,
        reason: str | None = None,
    ) -> ApprovalRequestResult:
        """Reject a Pending request; nothing is dispatched."""
        entity = await self._load_for_resolution(request_id, approver, "reject")
        entity.reject(approver.account_id, utc_now(), reason)
        await self._persist_resolution(entity)
        logger.info(
            "Approval request rejected: id=%s approver=%s reason=%s",
            request_id,
            approver.account_id,
            entity.rejection_reason,
        )
        return await self._reload(request_id)

    async def bulk_approve(
        self, request_ids: list[str], approver: CallerIdentity
    ) -> BulkApproveResult:
        """Approve each id independently, in order; failures are collected, not raised.

        An item whose side effect failed stays Approved but counts as failed.

        Raises:
            ValidationException: Empty id list or more ids than allowed.
        """
        if not request_ids:
            raise ValidationException("ids must not be empty", field="ids")
        if len(request_ids) > self.max_bulk_items:
            raise ValidationException(
                f"At most {self.max_bulk_items} ids per bulk approve", field="ids"
            )

        approved_ids: list[str] = []
        errors: list[BulkApproveItemError] = []
        for request_id in request_ids:
            try:
                async with self.approval_repo.savepoint():
                    outcome = await self.approve(request_id, approver)
            except BackofficeException as e:
                errors.append(BulkApproveItemError(request_id, e.error_code, e.message))
                continue
            except Exception as e:
                logger.exception("Bulk approve item %s failed unexpectedly", request_id)
                errors.append(
                    BulkApproveItemError(request_id, "INTERNAL_ERROR", str(e) or e.__class__.__name__)
                )
                continue
            if outcome.dispatch_error is not None:
                errors.append(
                    BulkApproveItemError(
                        request_id, "DISPATCH_FAILURE", outcome.dispatch_error
                    )
                )
            else:
                approved_ids.append(request_id)

        result = BulkApproveResult(
            success_count=len(approved_ids),
            fail_count=len(errors),
            errors=errors,
            approved_ids=approved_ids,
        )
        logger.info(
            "Bulk approve by %s: %d succeeded, %d failed",
            approver.account_id,
            result.success_count,
            result.fail_count,
        )
        return result

    async def delete(self, request_id: str, caller: CallerIdentity) -> None:
        """Remove a request in any status: requester or staff only."""
        entity = await self.approval_repo.get_entity(request_id)
        if entity is None:
            raise ResourceNotFoundException("approval_request", request_id)
        if not can_delete_approval(caller, entity.requester_id):
            raise AuthorizationException(resource="approval_request", action="delete")
        if not await self.approval_repo.delete(request_id):
            raise ResourceNotFoundException("approval_request", request_id)
        logger.info(
            "Approval request deleted: id=%s status=%s by=%s",
            request_id,
            entity.status.value,
            caller.account_id,
        )
