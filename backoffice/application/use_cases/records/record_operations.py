"""Record operations: create (with attribution and usage charge), list, get, update, delete, counts."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from backoffice.application.dtos.account import AccountResult
from backoffice.application.dtos.record import (
    RecordCounts,
    RecordFilters,
    RecordQuery,
    RecordResult,
    RecordToPersist,
    RecordUpdate,
)
from backoffice.application.interfaces.repositories import (
    IAccountRepository,
    IRecordRepository,
)
from backoffice.application.services.usage_counter_service import UsageCounterService
from backoffice.core.constants import (
    DEFAULT_STAFF_DISPLAY_NAME,
    NON_BILLABLE_CATEGORIES,
    PHONE_LOG_CATEGORY,
    RECORD_DONE_STATUSES,
    RECORD_WAITING_STATUSES,
)
from backoffice.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from backoffice.domain.policies import (
    can_modify_record,
    can_view_record,
    is_elevated_admin,
)
from backoffice.domain.value_objects.identity import CallerIdentity
from backoffice.shared.telemetry.logging import get_logger
from backoffice.shared.utils.datetime import utc_now

logger = get_logger(__name__)

_STATUS_GROUPS: dict[str, tuple[str, ...]] = {
    "waiting": RECORD_WAITING_STATUSES,
    "done": RECORD_DONE_STATUSES,
}
_STAFF_ONLY_FIELDS = frozenset({"answer", "answered_at", "quoted_price", "quoted_at"})


def _required_text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValidationException(f"{key} is required", field=key)
    return value


def _optional_text(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationException(f"{key} must be a string", field=key)
    return value.strip() or None


def _file_urls(data: Mapping[str, Any]) -> list[str] | None:
    value = data.get("file_urls")
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(u, str) for u in value):
        raise ValidationException("file_urls must be a list of strings", field="file_urls")
    return list(value)


class RecordService:
    """Creates and manages records; every create and delete keeps usage counters in step."""

    def __init__(
        self,
        record_repo: IRecordRepository,
        account_repo: IAccountRepository,
        usage_service: UsageCounterService,
    ) -> None:
        self.record_repo = record_repo
        self.account_repo = account_repo
        self.usage_service = usage_service

    async def _resolve_phone_log_target(
        self, data: Mapping[str, Any]
    ) -> tuple[AccountResult, str | None] | None:
        """Find the account a staff-written phone log is filed under.

        Checked in order: target tenant, target account, target company name.
        Returns None when no target was given.
        """
        target_tenant_id = _optional_text(data, "target_tenant_id")
        target_account_id = _optional_text(data, "target_account_id")
        target_company_name = _optional_text(data, "target_company_name")

        if target_tenant_id:
            account = await self.account_repo.find_first_by_tenant(target_tenant_id)
            if account is None:
                raise ResourceNotFoundException("tenant", target_tenant_id)
            return account, account.company_name
        if target_account_id:
            account = await self.account_repo.get_by_id(target_account_id)
            if account is None:
                raise ResourceNotFoundException("account", target_account_id)
            return account, target_company_name or account.company_name
        if target_company_name:
            account = await self.account_repo.find_by_company_name(target_company_name)
            if account is None:
                raise ResourceNotFoundException("company", target_company_name)
            return account, account.company_name
        return None

    async def create(
        self, creator: CallerIdentity, data: Mapping[str, Any]
    ) -> RecordResult:
        """Create a record attributed to the creator (or a staff-chosen target for phone logs).

        Billable categories charge the resolved billable account exactly once.

        Raises:
            ValidationException: category, title or content missing; bad file_urls.
            ResourceNotFoundException: phone-log target does not exist.
        """
        category = _required_text(data, "category").strip()
        title = _required_text(data, "title")
        content = _required_text(data, "content")
        file_urls = _file_urls(data)
        status = _optional_text(data, "status") or "pending"

        creator_account = await self.account_repo.get_by_id(creator.account_id)
        author_id = creator.account_id
        tenant_id = creator.tenant_id
        company_name = creator_account.company_name if creator_account else None

        answered_by: str | None = None
        answered_at = None
        if category == PHONE_LOG_CATEGORY:
            if is_elevated_admin(creator.role):
                target = await self._resolve_phone_log_target(data)
                if target is not None:
                    account, company_name = target
                    author_id = account.id
                    tenant_id = account.tenant_id
            status = "done"
            answered_by = (
                (creator_account.display_name if creator_account else None)
                or creator.display_name
                or creator.email
                or DEFAULT_STAFF_DISPLAY_NAME
            )
            answered_at = utc_now()

        record = await self.record_repo.create(
            RecordToPersist(
                tenant_id=tenant_id,
                author_id=author_id,
                company_name=company_name,
                category=category,
                title=title,
                content=content,
                status=status,
                file_urls=file_urls,
                answered_by=answered_by,
                answered_at=answered_at,
            )
        )
        await self.usage_service.charge_for_category(author_id, category)
        logger.info(
            "Record created: id=%s category=%s author=%s by=%s",
            record.id,
            category,
            author_id,
            creator.account_id,
        )
        return record

    async def list(
        self, caller: CallerIdentity, filters: RecordFilters
    ) -> list[RecordResult]:
        """Return records newest first. Non-staff callers only see their own tenant."""
        statuses: list[str] = []
        if filters.status:
            group = _STATUS_GROUPS.get(filters.status)
            statuses = list(group) if group else [filters.status]

        if is_elevated_admin(caller.role):
            tenant_id = filters.tenant_id
            author_id = None
        elif caller.tenant_id:
            tenant_id = caller.tenant_id
            author_id = None
        else:
            tenant_id = None
            author_id = caller.account_id

        query = RecordQuery(
            tenant_id=tenant_id,
            author_id=author_id,
            categories=[c.strip() for c in filters.categories if c.strip()],
            statuses=statuses,
            search=(filters.search or "").strip() or None,
            created_from=filters.created_from,
            created_before=filters.created_before,
            limit=filters.limit,
            offset=filters.offset,
        )
        return await self.record_repo.list(query)

    async def get(self, record_id: str, caller: CallerIdentity) -> RecordResult:
        """Return a record visible to the caller."""
        record = await self.record_repo.get_by_id(record_id)
        if record is None:
            raise ResourceNotFoundException("record", record_id)
        if not can_view_record(caller, record.author_id, record.tenant_id):
            raise AuthorizationException(resource="record", action="read")
        return record

    async def update(
        self, record_id: str, caller: CallerIdentity, changes: RecordUpdate
    ) -> RecordResult:
        """Apply changes; answering stamps who answered and when.

        Raises:
            ValidationException: No fields to change.
            ResourceNotFoundException: Record does not exist.
            AuthorizationException: Caller is neither author nor staff, or a
                non-staff caller touched answer/quote fields.
        """
        fields = changes.changed_fields()
        if not fields:
            raise ValidationException("No fields to update")
        record = await self.record_repo.get_by_id(record_id)
        if record is None:
            raise ResourceNotFoundException("record", record_id)
        if not can_modify_record(caller, record.author_id):
            raise AuthorizationException(resource="record", action="update")
        elevated = is_elevated_admin(caller.role)
        if not elevated and _STAFF_ONLY_FIELDS & fields.keys():
            raise AuthorizationException(resource="record", action="answer")

        if "answer" in fields:
            fields["answered_by"] = caller.signature
            fields.setdefault("answered_at", utc_now())
        if "quoted_price" in fields:
            fields.setdefault("quoted_at", utc_now())

        updated = await self.record_repo.update(record_id, fields)
        if updated is None:
            raise ResourceNotFoundException("record", record_id)
        logger.info(
            "Record updated: id=%s fields=%s by=%s",
            record_id,
            sorted(fields),
            caller.account_id,
        )
        return updated

    async def delete(self, record_id: str, caller: CallerIdentity) -> None:
        """Delete the record and refund the usage charged when it was created."""
        record = await self.record_repo.get_by_id(record_id)
        if record is None:
            raise ResourceNotFoundException("record", record_id)
        if not can_modify_record(caller, record.author_id):
            raise AuthorizationException(resource="record", action="delete")
        if not await self.record_repo.delete(record_id):
            raise ResourceNotFoundException("record", record_id)
        await self.usage_service.refund_for_category(record.author_id, record.category)
        logger.info("Record deleted: id=%s by=%s", record_id, caller.account_id)

    async def counts(self, caller: CallerIdentity) -> RecordCounts:
        """Dashboard counts over non-administrative categories."""
        tenant_id = None if is_elevated_admin(caller.role) else caller.tenant_id
        if tenant_id is None and not is_elevated_admin(caller.role):
            return RecordCounts(pending_count=0, done_count=0, total_count=0)
        return await self.record_repo.counts(
            tenant_id=tenant_id,
            excluded_categories=NON_BILLABLE_CATEGORIES,
            waiting_statuses=RECORD_WAITING_STATUSES,
            done_statuses=RECORD_DONE_STATUSES,
        )
