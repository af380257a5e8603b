"""Record repository and record service integration tests. Require Postgres."""

from decimal import Decimal

import pytest

from backoffice.application.dtos.record import RecordQuery, RecordToPersist
from backoffice.application.services.usage_counter_service import UsageCounterService
from backoffice.application.use_cases.approvals import ApprovalDispatcher, ApprovalService
from backoffice.application.use_cases.records import RecordService
from backoffice.core.constants import (
    NON_BILLABLE_CATEGORIES,
    RECORD_DONE_STATUSES,
    RECORD_WAITING_STATUSES,
)
from backoffice.infrastructure.persistence.repositories import (
    AccountRepository,
    ApprovalRequestRepository,
    RecordRepository,
)
from backoffice.shared.utils.generators import generate_cuid


def _record(tenant_id: str, author_id: str, **overrides) -> RecordToPersist:
    values = dict(
        tenant_id=tenant_id,
        author_id=author_id,
        company_name="Repo Co",
        category="advisory",
        title="Lease question",
        content="Can we exit early?",
        status="pending",
    )
    values.update(overrides)
    return RecordToPersist(**values)


@pytest.mark.requires_db
async def test_create_get_update(db_session) -> None:
    tenant = generate_cuid()[:10]
    author = await AccountRepository(db_session).create_account(role="owner", tenant_id=tenant)
    repo = RecordRepository(db_session)
    created = await repo.create(_record(tenant, author.id, file_urls=["https://files.test/a.pdf"]))
    assert created.file_urls == ["https://files.test/a.pdf"]
    assert (await repo.get_by_id(created.id)).title == "Lease question"

    updated = await repo.update(created.id, {"quoted_price": Decimal("150000.00"), "status": "quoted"})
    assert updated.quoted_price == Decimal("150000.00")
    assert updated.status == "quoted"
    assert await repo.update("nonexistent-id-xyz", {"status": "x"}) is None


@pytest.mark.requires_db
async def test_list_and_counts(db_session) -> None:
    tenant = generate_cuid()[:10]
    author = await AccountRepository(db_session).create_account(role="owner", tenant_id=tenant)
    repo = RecordRepository(db_session)
    await repo.create(_record(tenant, author.id))
    await repo.create(_record(tenant, author.id, title="Overtime", content="night shifts", status="done"))
    await repo.create(_record(tenant, author.id, category="plan_change", title="Upgrade"))

    searched = await repo.list(RecordQuery(tenant_id=tenant, search="OVERTIME"))
    assert [r.title for r in searched] == ["Overtime"]
    advisory = await repo.list(RecordQuery(tenant_id=tenant, categories=["advisory"]))
    assert len(advisory) == 2
    paged = await repo.list(RecordQuery(tenant_id=tenant, limit=1))
    assert len(paged) == 1

    counts = await repo.counts(
        tenant_id=tenant,
        excluded_categories=NON_BILLABLE_CATEGORIES,
        waiting_statuses=RECORD_WAITING_STATUSES,
        done_statuses=RECORD_DONE_STATUSES,
    )
    assert (counts.pending_count, counts.done_count, counts.total_count) == (1, 1, 2)


@pytest.mark.requires_db
async def test_approve_advisory_request_end_to_end(db_session) -> None:
    tenant = generate_cuid()[:10]
    accounts = AccountRepository(db_session)
    owner = await accounts.create_account(role="owner", tenant_id=tenant, company_name="Repo Co")
    employee = await accounts.create_account(role="user", tenant_id=tenant, company_name="Repo Co")

    record_service = RecordService(
        RecordRepository(db_session), accounts, UsageCounterService(accounts)
    )
    approvals = ApprovalService(
        ApprovalRequestRepository(db_session), ApprovalDispatcher(accounts, record_service)
    )
    request = await approvals.submit(
        employee.to_identity(), "advisory-request", {"title": "Q", "content": "C"}
    )
    outcome = await approvals.approve(request.id, owner.to_identity())

    assert outcome.dispatched
    record = await record_service.get(outcome.record_id, owner.to_identity())
    assert record.author_id == employee.id
    assert (await accounts.get_by_id(owner.id)).advisory_used_count == 1
    assert (await accounts.get_by_id(employee.id)).advisory_used_count == 0


@pytest.mark.requires_db
async def test_failed_dispatch_keeps_approved_row(db_session) -> None:
    tenant = generate_cuid()[:10]
    accounts = AccountRepository(db_session)
    owner = await accounts.create_account(role="owner", tenant_id=tenant)
    employee = await accounts.create_account(role="user", tenant_id=tenant)
    record_service = RecordService(
        RecordRepository(db_session), accounts, UsageCounterService(accounts)
    )
    approvals = ApprovalService(
        ApprovalRequestRepository(db_session), ApprovalDispatcher(accounts, record_service)
    )
    request = await approvals.submit(employee.to_identity(), "advisory-request", {"title": "Q"})
    outcome = await approvals.approve(request.id, owner.to_identity())

    assert outcome.dispatch_error is not None
    assert (await approvals.get(request.id)).status == "Approved"
    assert (await accounts.get_by_id(owner.id)).advisory_used_count == 0


@pytest.mark.requires_db
async def test_search_treats_wildcards_literally(db_session) -> None:
    tenant = generate_cuid()[:10]
    author = await AccountRepository(db_session).create_account(role="owner", tenant_id=tenant)
    repo = RecordRepository(db_session)
    await repo.create(_record(tenant, author.id, title="Raise of 100%"))
    await repo.create(_record(tenant, author.id, title="Raise of 1000 won"))

    percent = await repo.list(RecordQuery(tenant_id=tenant, search="100%"))
    assert [r.title for r in percent] == ["Raise of 100%"]
    underscore = await repo.list(RecordQuery(tenant_id=tenant, search="Raise_of"))
    assert underscore == []


@pytest.mark.requires_db
async def test_timestamps_are_utc(db_session) -> None:
    tenant = generate_cuid()[:10]
    author = await AccountRepository(db_session).create_account(role="owner", tenant_id=tenant)
    created = await RecordRepository(db_session).create(_record(tenant, author.id))
    assert created.created_at.utcoffset().total_seconds() == 0
