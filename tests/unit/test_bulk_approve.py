"""Bulk approve: every item is attempted; failures are collected per item."""

import pytest

from backoffice.domain.exceptions import ValidationException


async def _submit(approval_service, identity, account_id="emp-a", request_type="vacation-request", payload=None):
    return await approval_service.submit(identity(account_id), request_type, payload or {})


async def test_mixed_batch_is_partial(approval_service, identity) -> None:
    first = await _submit(approval_service, identity)
    second = await _submit(approval_service, identity)
    await approval_service.approve(second.id, identity("owner-a"))
    resolved_at = (await approval_service.get(second.id)).resolved_at

    result = await approval_service.bulk_approve([first.id, second.id], identity("owner-a"))

    assert (result.success_count, result.fail_count) == (1, 1)
    assert result.is_partial
    assert result.approved_ids == [first.id]
    assert [(e.request_id, e.error_code) for e in result.errors] == [(second.id, "ALREADY_RESOLVED")]
    assert (await approval_service.get(first.id)).status == "Approved"
    assert (await approval_service.get(second.id)).resolved_at == resolved_at


async def test_all_succeed(approval_service, identity, store) -> None:
    ids = [
        (await _submit(approval_service, identity, "emp-a", "department-change", {"toDepartment": "Legal"})).id,
        (await _submit(approval_service, identity, "emp-b", "advisory-request", {"title": "Q", "content": "C"})).id,
    ]
    result = await approval_service.bulk_approve(ids, identity("staff-1"))
    assert result.success_count == 2
    assert not result.is_partial
    assert store.accounts["emp-a"].department == "Legal"
    assert store.accounts["owner-b"].advisory_used_count == 1


async def test_failures_do_not_stop_later_items(approval_service, identity) -> None:
    own = await _submit(approval_service, identity, "emp-a")
    other_tenant = await _submit(approval_service, identity, "emp-b")
    result = await approval_service.bulk_approve(
        ["missing", other_tenant.id, own.id], identity("owner-a")
    )
    assert result.approved_ids == [own.id]
    assert [e.error_code for e in result.errors] == ["RESOURCE_NOT_FOUND", "PERMISSION_DENIED"]
    assert (await approval_service.get(other_tenant.id)).status == "Pending"


async def test_dispatch_failure_counts_as_failed_item(approval_service, identity) -> None:
    bad = await _submit(approval_service, identity, "emp-a", "department-change", {})
    good = await _submit(approval_service, identity, "emp-a")
    result = await approval_service.bulk_approve([bad.id, good.id], identity("owner-a"))
    assert result.approved_ids == [good.id]
    assert result.errors[0].request_id == bad.id
    assert result.errors[0].error_code == "DISPATCH_FAILURE"
    assert (await approval_service.get(bad.id)).status == "Approved"


async def test_unexpected_error_is_collected(approval_service, approval_repo, identity) -> None:
    request = await _submit(approval_service, identity)
    original = approval_repo.save_resolution

    async def broken(entity):
        raise RuntimeError("connection reset")

    approval_repo.save_resolution = broken
    result = await approval_service.bulk_approve([request.id], identity("staff-1"))
    approval_repo.save_resolution = original
    assert result.errors[0].error_code == "INTERNAL_ERROR"
    assert "connection reset" in result.errors[0].message
    assert (await approval_service.get(request.id)).status == "Pending"


async def test_duplicate_id_fails_second_time(approval_service, identity) -> None:
    request = await _submit(approval_service, identity)
    result = await approval_service.bulk_approve([request.id, request.id], identity("owner-a"))
    assert result.success_count == 1
    assert result.errors[0].error_code == "ALREADY_RESOLVED"


async def test_empty_list_rejected(approval_service, identity) -> None:
    with pytest.raises(ValidationException):
        await approval_service.bulk_approve([], identity("staff-1"))


async def test_too_many_ids_rejected(approval_service, identity) -> None:
    # approval_service fixture allows five ids per call
    with pytest.raises(ValidationException) as exc_info:
        await approval_service.bulk_approve([f"id-{i}" for i in range(6)], identity("staff-1"))
    assert exc_info.value.details["field"] == "ids"
