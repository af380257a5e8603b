"""Post-approval dispatch: the domain mutation each request type applies once approved.

Known request types map to handlers; any other tag is approved as a no-op.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from backoffice.application.interfaces.repositories import IAccountRepository
from backoffice.application.use_cases.records.record_operations import RecordService
from backoffice.domain.entities.approval_request import ApprovalRequestEntity
from backoffice.domain.enums import RequestType, Role
from backoffice.domain.exceptions import DispatchFailureException
from backoffice.domain.policies import can_grant_role
from backoffice.domain.value_objects.identity import CallerIdentity
from backoffice.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

# Record category created by each record-creating request type.
RECORD_CATEGORY_BY_REQUEST_TYPE: dict[RequestType, str] = {
    RequestType.ADVISORY_REQUEST: "advisory",
    RequestType.PHONE_CONSULT_REQUEST: "phone_request",
    RequestType.EXTRA_USAGE_INQUIRY: "extra_usage_quote",
    RequestType.PLAN_CHANGE_REQUEST: "plan_change",
}

Handler = Callable[[ApprovalRequestEntity, CallerIdentity], Awaitable[str | None]]


class _HandlerError(Exception):
    """Handler precondition failed (missing payload key, unknown account)."""


def _payload_text(payload: dict[str, Any], key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str) or not value.strip():
        raise _HandlerError(f"payload.{key} is required")
    return value.strip()


class ApprovalDispatcher:
    """Applies the side effect of an approved request.

    Each handler returns the id of a created record, or None when the effect
    does not create one.
    """

    def __init__(
        self,
        account_repo: IAccountRepository,
        record_service: RecordService,
    ) -> None:
        self.account_repo = account_repo
        self.record_service = record_service
        self._handlers: dict[RequestType, Handler] = {
            RequestType.DEPARTMENT_CHANGE: self._change_department,
            RequestType.ROLE_CHANGE: self._change_role,
        }
        for request_type in RECORD_CATEGORY_BY_REQUEST_TYPE:
            self._handlers[request_type] = self._create_record

    async def dispatch(
        self, entity: ApprovalRequestEntity, approver: CallerIdentity
    ) -> str | None:
        """Run the handler for entity.request_type on behalf of approver.

        Raises:
            DispatchFailureException: The handler failed; wraps the cause.
        """
        request_type = RequestType.parse(entity.request_type)
        handler = self._handlers.get(request_type) if request_type else None
        if handler is None:
            logger.info(
                "No dispatch handler for request type %s (request %s); nothing to apply",
                entity.request_type,
                entity.id,
            )
            return None
        try:
            return await handler(entity, approver)
        except DispatchFailureException:
            raise
        except Exception as e:
            raise DispatchFailureException(
                entity.id, entity.request_type, str(e) or e.__class__.__name__
            ) from e

    async def _change_department(
        self, entity: ApprovalRequestEntity, approver: CallerIdentity
    ) -> None:
        department = _payload_text(entity.payload_dict(), "toDepartment")
        updated = await self.account_repo.update_fields(
            entity.requester_id, {"department": department}
        )
        if updated is None:
            raise _HandlerError(f"requester {entity.requester_id} not found")
        logger.info(
            "Department changed: account=%s department=%s (request %s)",
            entity.requester_id,
            department,
            entity.id,
        )
        return None

    async def _change_role(
        self, entity: ApprovalRequestEntity, approver: CallerIdentity
    ) -> None:
        new_role = _payload_text(entity.payload_dict(), "newRank")
        if new_role not in Role.values():
            raise _HandlerError(f"unknown role {new_role!r}")
        if not can_grant_role(approver, new_role):
            raise _HandlerError(
                f"approver {approver.account_id} may not grant role {new_role!r}"
            )
        updated = await self.account_repo.update_fields(
            entity.requester_id, {"role": new_role}
        )
        if updated is None:
            raise _HandlerError(f"requester {entity.requester_id} not found")
        logger.info(
            "Role changed: account=%s role=%s (request %s)",
            entity.requester_id,
            new_role,
            entity.id,
        )
        return None

    async def _create_record(
        self, entity: ApprovalRequestEntity, approver: CallerIdentity
    ) -> str:
        requester = await self.account_repo.get_by_id(entity.requester_id)
        if requester is None:
            raise _HandlerError(f"requester {entity.requester_id} not found")
        data = entity.payload_dict()
        data["category"] = RECORD_CATEGORY_BY_REQUEST_TYPE[RequestType(entity.request_type)]
        record = await self.record_service.create(requester.to_identity(), data)
        return record.id
