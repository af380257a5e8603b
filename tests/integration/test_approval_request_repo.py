"""Approval request repository integration tests. Require Postgres."""

import pytest

from backoffice.application.dtos.approval_request import ApprovalRequestQuery
from backoffice.domain.enums import ApprovalStatus
from backoffice.infrastructure.persistence.repositories import (
    AccountRepository,
    ApprovalRequestRepository,
)
from backoffice.shared.utils.datetime import utc_now
from backoffice.shared.utils.generators import generate_cuid


async def _requester(db_session, tenant_id: str):
    return await AccountRepository(db_session).create_account(
        role="user", tenant_id=tenant_id, display_name="Requester", email="r@example.test", department="Ops"
    )


@pytest.mark.requires_db
async def test_create_returns_pending_with_names(db_session) -> None:
    tenant = generate_cuid()[:10]
    requester = await _requester(db_session, tenant)
    repo = ApprovalRequestRepository(db_session)
    payload = {"toDepartment": "Sales", "meta": {"n": [1, 2]}}
    created = await repo.create(requester.id, tenant, "department-change", payload)
    assert created.status == "Pending"
    assert created.payload == payload
    assert created.requester_name == "Requester"
    assert created.requester_department == "Ops"
    assert created.approver_name is None


@pytest.mark.requires_db
async def test_save_resolution_is_compare_and_set(db_session) -> None:
    tenant = generate_cuid()[:10]
    requester = await _requester(db_session, tenant)
    approver = await AccountRepository(db_session).create_account(
        role="owner", tenant_id=tenant, display_name="Boss"
    )
    repo = ApprovalRequestRepository(db_session)
    created = await repo.create(requester.id, tenant, "vacation-request", {})

    entity = await repo.get_entity(created.id)
    entity.approve(approver.id, utc_now())
    assert await repo.save_resolution(entity) is True

    stale = await repo.get_entity(created.id)
    assert stale.status is ApprovalStatus.APPROVED
    # A second writer holding a Pending copy loses.
    stale.status = ApprovalStatus.PENDING
    stale.reject(approver.id, utc_now(), "late")
    assert await repo.save_resolution(stale) is False

    result = await repo.get_by_id(created.id)
    assert result.status == "Approved"
    assert result.approver_name == "Boss"
    assert result.rejection_reason is None


@pytest.mark.requires_db
async def test_list_filters(db_session) -> None:
    tenant = generate_cuid()[:10]
    requester = await _requester(db_session, tenant)
    repo = ApprovalRequestRepository(db_session)
    first = await repo.create(requester.id, tenant, "department-change", {})
    second = await repo.create(requester.id, tenant, "role-change", {})
    entity = await repo.get_entity(second.id)
    entity.reject(requester.id, utc_now())
    await repo.save_resolution(entity)

    all_for_tenant = await repo.list(ApprovalRequestQuery(tenant_id=tenant))
    assert {r.id for r in all_for_tenant} == {first.id, second.id}
    pending = await repo.list(ApprovalRequestQuery(tenant_id=tenant, status="Pending"))
    assert [r.id for r in pending] == [first.id]
    mine = await repo.list(ApprovalRequestQuery(requester_id=requester.id))
    assert len(mine) == 2


@pytest.mark.requires_db
async def test_savepoint_rolls_back_inner_changes(db_session) -> None:
    tenant = generate_cuid()[:10]
    requester = await _requester(db_session, tenant)
    repo = ApprovalRequestRepository(db_session)
    accounts = AccountRepository(db_session)
    with pytest.raises(RuntimeError):
        async with repo.savepoint():
            await accounts.update_fields(requester.id, {"department": "Limbo"})
            raise RuntimeError("side effect failed")
    assert (await accounts.get_by_id(requester.id)).department == "Ops"


@pytest.mark.requires_db
async def test_delete(db_session) -> None:
    tenant = generate_cuid()[:10]
    requester = await _requester(db_session, tenant)
    repo = ApprovalRequestRepository(db_session)
    created = await repo.create(requester.id, tenant, "vacation-request", {})
    assert await repo.delete(created.id) is True
    assert await repo.get_by_id(created.id) is None
    assert await repo.delete(created.id) is False
