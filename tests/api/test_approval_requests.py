"""Approval request endpoints over the in-memory services."""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.usefixtures("override_services")

BASE = "/api/v1/approval-requests"


async def _submit(client, auth_headers, account_id="emp-a", request_type="department-change", payload=None):
    response = await client.post(
        BASE,
        headers=auth_headers(account_id),
        json={"request_type": request_type, "payload": payload if payload is not None else {"toDepartment": "Sales"}},
    )
    assert response.status_code == 201, response.text
    return response.json()


async def test_submit_returns_pending(client: AsyncClient, auth_headers) -> None:
    body = await _submit(client, auth_headers)
    assert body["status"] == "Pending"
    assert body["requester_id"] == "emp-a"
    assert body["tenant_id"] == "1208800767"
    assert body["payload"] == {"toDepartment": "Sales"}
    assert body["requester_name"] == "Emp A"


async def test_submit_without_payload_returns_400(client: AsyncClient, auth_headers) -> None:
    response = await client.post(
        BASE, headers=auth_headers("emp-a"), json={"request_type": "department-change"}
    )
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "VALIDATION_ERROR"
    assert body["details"]["field"] == "payload"


async def test_submit_without_type_returns_422(client: AsyncClient, auth_headers) -> None:
    response = await client.post(BASE, headers=auth_headers("emp-a"), json={"payload": {}})
    assert response.status_code == 422


async def test_list_is_scoped(client: AsyncClient, auth_headers) -> None:
    mine = await _submit(client, auth_headers, "emp-a")
    await _submit(client, auth_headers, "emp-b")

    staff = await client.get(BASE, headers=auth_headers("staff-1"))
    assert len(staff.json()) == 2

    owner = await client.get(BASE, headers=auth_headers("owner-a"))
    assert [r["id"] for r in owner.json()] == [mine["id"]]

    pending = await client.get(BASE, params={"status": "Pending"}, headers=auth_headers("emp-a"))
    assert [r["id"] for r in pending.json()] == [mine["id"]]


async def test_list_rejects_unknown_status(client: AsyncClient, auth_headers) -> None:
    response = await client.get(BASE, params={"status": "Done"}, headers=auth_headers("staff-1"))
    assert response.status_code == 400


async def test_get_by_id(client: AsyncClient, auth_headers) -> None:
    created = await _submit(client, auth_headers)
    ok = await client.get(f"{BASE}/{created['id']}", headers=auth_headers("owner-a"))
    assert ok.status_code == 200
    forbidden = await client.get(f"{BASE}/{created['id']}", headers=auth_headers("owner-b"))
    assert forbidden.status_code == 403
    missing = await client.get(f"{BASE}/nope", headers=auth_headers("staff-1"))
    assert missing.status_code == 404


async def test_approve_applies_department_change(client: AsyncClient, auth_headers, store) -> None:
    created = await _submit(client, auth_headers)
    response = await client.put(f"{BASE}/{created['id']}/approve", headers=auth_headers("owner-a"))
    assert response.status_code == 200
    body = response.json()
    assert body["request"]["status"] == "Approved"
    assert body["request"]["approver_id"] == "owner-a"
    assert body["action"] == "department-change"
    assert body["dispatched"] is True
    assert store.accounts["emp-a"].department == "Sales"


async def test_approve_advisory_request_returns_record_id(
    client: AsyncClient, auth_headers, store
) -> None:
    created = await _submit(
        client, auth_headers, "emp-a", "advisory-request", {"title": "Q", "content": "C"}
    )
    response = await client.put(f"{BASE}/{created['id']}/approve", headers=auth_headers("staff-1"))
    record_id = response.json()["record_id"]
    assert store.records[record_id].author_id == "emp-a"
    assert store.accounts["owner-a"].advisory_used_count == 1


async def test_approve_with_failed_effect_still_200(client: AsyncClient, auth_headers) -> None:
    created = await _submit(client, auth_headers, payload={"wrongKey": "Sales"})
    response = await client.put(f"{BASE}/{created['id']}/approve", headers=auth_headers("owner-a"))
    assert response.status_code == 200
    body = response.json()
    assert body["request"]["status"] == "Approved"
    assert body["dispatched"] is False
    assert "toDepartment" in body["dispatch_error"]


async def test_approve_twice_returns_409(client: AsyncClient, auth_headers) -> None:
    created = await _submit(client, auth_headers)
    url = f"{BASE}/{created['id']}/approve"
    assert (await client.put(url, headers=auth_headers("owner-a"))).status_code == 200
    again = await client.put(url, headers=auth_headers("owner-a"))
    assert again.status_code == 409
    assert again.json()["error"] == "ALREADY_RESOLVED"


async def test_approve_by_other_tenant_owner_returns_403(client: AsyncClient, auth_headers) -> None:
    created = await _submit(client, auth_headers)
    response = await client.put(f"{BASE}/{created['id']}/approve", headers=auth_headers("owner-b"))
    assert response.status_code == 403
    assert response.json()["error"] == "PERMISSION_DENIED"


async def test_approve_missing_returns_404(client: AsyncClient, auth_headers) -> None:
    response = await client.put(f"{BASE}/missing/approve", headers=auth_headers("staff-1"))
    assert response.status_code == 404


async def test_reject_without_body_uses_default_reason(client: AsyncClient, auth_headers) -> None:
    created = await _submit(client, auth_headers)
    response = await client.put(f"{BASE}/{created['id']}/reject", headers=auth_headers("owner-a"))
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "Rejected"
    assert body["rejection_reason"] == "No reason provided"


async def test_reject_with_reason(client: AsyncClient, auth_headers, store) -> None:
    created = await _submit(client, auth_headers)
    response = await client.put(
        f"{BASE}/{created['id']}/reject",
        headers=auth_headers("staff-1"),
        json={"reason": "Headcount frozen"},
    )
    assert response.json()["rejection_reason"] == "Headcount frozen"
    assert store.accounts["emp-a"].department == "Ops"


async def test_bulk_approve_all_ok_returns_200(client: AsyncClient, auth_headers) -> None:
    ids = [(await _submit(client, auth_headers))["id"] for _ in range(2)]
    response = await client.post(
        f"{BASE}/bulk-approve", headers=auth_headers("owner-a"), json={"ids": ids}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["success_count"] == 2
    assert body["fail_count"] == 0
    assert body["approved_ids"] == ids


async def test_bulk_approve_partial_returns_207(client: AsyncClient, auth_headers) -> None:
    first = await _submit(client, auth_headers)
    second = await _submit(client, auth_headers)
    await client.put(f"{BASE}/{second['id']}/approve", headers=auth_headers("owner-a"))

    response = await client.post(
        f"{BASE}/bulk-approve",
        headers=auth_headers("owner-a"),
        json={"ids": [first["id"], second["id"]]},
    )
    assert response.status_code == 207
    body = response.json()
    assert body["success_count"] == 1
    assert body["fail_count"] == 1
    assert body["errors"] == [
        {
            "id": second["id"],
            "error_code": "ALREADY_RESOLVED",
            "message": f"Approval request {second['id']} is already Approved",
        }
    ]


async def test_bulk_approve_empty_returns_422(client: AsyncClient, auth_headers) -> None:
    response = await client.post(
        f"{BASE}/bulk-approve", headers=auth_headers("staff-1"), json={"ids": []}
    )
    assert response.status_code == 422


async def test_bulk_approve_over_limit_returns_400(client: AsyncClient, auth_headers) -> None:
    response = await client.post(
        f"{BASE}/bulk-approve",
        headers=auth_headers("staff-1"),
        json={"ids": [f"id-{i}" for i in range(6)]},
    )
    assert response.status_code == 400


async def test_delete_by_requester_returns_204(client: AsyncClient, auth_headers) -> None:
    created = await _submit(client, auth_headers)
    response = await client.delete(f"{BASE}/{created['id']}", headers=auth_headers("emp-a"))
    assert response.status_code == 204
    missing = await client.get(f"{BASE}/{created['id']}", headers=auth_headers("staff-1"))
    assert missing.status_code == 404


async def test_delete_by_owner_returns_403(client: AsyncClient, auth_headers) -> None:
    created = await _submit(client, auth_headers)
    response = await client.delete(f"{BASE}/{created['id']}", headers=auth_headers("owner-a"))
    assert response.status_code == 403
    still = await client.get(f"{BASE}/{created['id']}", headers=auth_headers("emp-a"))
    assert still.json()["status"] == "Pending"
