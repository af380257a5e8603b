"""ApprovalDispatcher handler selection and error wrapping."""

from unittest.mock import AsyncMock

import pytest

from backoffice.application.dtos.account import AccountResult
from backoffice.application.use_cases.approvals import ApprovalDispatcher
from backoffice.application.use_cases.approvals.dispatch import RECORD_CATEGORY_BY_REQUEST_TYPE
from backoffice.domain.entities.approval_request import ApprovalRequestEntity
from backoffice.domain.enums import ApprovalStatus, RequestType
from backoffice.domain.exceptions import DispatchFailureException
from backoffice.domain.value_objects.identity import CallerIdentity

OWNER = CallerIdentity("owner-1", "owner", "1208800767")
STAFF = CallerIdentity("staff-1", "admin", None)


def _entity(request_type: str, payload: dict | None = None) -> ApprovalRequestEntity:
    return ApprovalRequestEntity(
        id="req-1",
        requester_id="acc-1",
        tenant_id="1208800767",
        request_type=request_type,
        payload=payload or {},
        status=ApprovalStatus.APPROVED,
        approver_id="owner-1",
    )


def _account(**overrides) -> AccountResult:
    values = dict(
        id="acc-1",
        tenant_id="1208800767",
        role="user",
        display_name="Kim",
        email=None,
        company_name="Alpha",
        department="Ops",
        plan=None,
        advisory_used_count=0,
        phone_used_count=0,
        is_active=True,
    )
    values.update(overrides)
    return AccountResult(**values)


@pytest.fixture
def account_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.update_fields.return_value = _account()
    repo.get_by_id.return_value = _account()
    return repo


@pytest.fixture
def record_service() -> AsyncMock:
    service = AsyncMock()
    service.create.return_value.id = "rec-1"
    return service


@pytest.fixture
def dispatcher(account_repo, record_service) -> ApprovalDispatcher:
    return ApprovalDispatcher(account_repo, record_service)


async def test_department_change(dispatcher, account_repo) -> None:
    assert await dispatcher.dispatch(_entity("department-change", {"toDepartment": " Sales "}), OWNER) is None
    account_repo.update_fields.assert_awaited_once_with("acc-1", {"department": "Sales"})


async def test_role_change(dispatcher, account_repo) -> None:
    await dispatcher.dispatch(_entity("role-change", {"newRank": "manager"}), OWNER)
    account_repo.update_fields.assert_awaited_once_with("acc-1", {"role": "manager"})


@pytest.mark.parametrize(
    ("request_type", "payload"),
    [
        ("department-change", {}),
        ("department-change", {"toDepartment": 7}),
        ("role-change", {"newRank": "emperor"}),
    ],
)
async def test_bad_payload_wrapped(dispatcher, account_repo, request_type, payload) -> None:
    with pytest.raises(DispatchFailureException) as exc_info:
        await dispatcher.dispatch(_entity(request_type, payload), OWNER)
    assert exc_info.value.details["request_id"] == "req-1"
    account_repo.update_fields.assert_not_awaited()


@pytest.mark.parametrize("role", ["master", "admin", "general_manager", "lawyer"])
async def test_owner_cannot_grant_firm_role(dispatcher, account_repo, role: str) -> None:
    with pytest.raises(DispatchFailureException):
        await dispatcher.dispatch(_entity("role-change", {"newRank": role}), OWNER)
    account_repo.update_fields.assert_not_awaited()


async def test_staff_can_grant_firm_role(dispatcher, account_repo) -> None:
    await dispatcher.dispatch(_entity("role-change", {"newRank": "lawyer"}), STAFF)
    account_repo.update_fields.assert_awaited_once_with("acc-1", {"role": "lawyer"})


async def test_missing_requester_wrapped(dispatcher, account_repo) -> None:
    account_repo.update_fields.return_value = None
    with pytest.raises(DispatchFailureException):
        await dispatcher.dispatch(_entity("department-change", {"toDepartment": "HR"}), OWNER)


@pytest.mark.parametrize("request_type", list(RECORD_CATEGORY_BY_REQUEST_TYPE))
async def test_record_types_create_record_as_requester(
    dispatcher, record_service, request_type: RequestType
) -> None:
    record_id = await dispatcher.dispatch(
        _entity(request_type.value, {"title": "T", "content": "C", "category": "labor"}),
        OWNER,
    )
    assert record_id == "rec-1"
    creator, data = record_service.create.await_args.args
    assert creator.account_id == "acc-1"
    assert data["category"] == RECORD_CATEGORY_BY_REQUEST_TYPE[request_type]
    assert data["title"] == "T"


async def test_record_service_error_wrapped(dispatcher, record_service) -> None:
    record_service.create.side_effect = ValueError("title is required")
    with pytest.raises(DispatchFailureException) as exc_info:
        await dispatcher.dispatch(_entity("advisory-request"), OWNER)
    assert exc_info.value.details["reason"] == "title is required"
    assert isinstance(exc_info.value.__cause__, ValueError)


async def test_unknown_type_is_noop(dispatcher, account_repo, record_service) -> None:
    assert await dispatcher.dispatch(_entity("vacation-request", {"days": 2}), OWNER) is None
    account_repo.update_fields.assert_not_awaited()
    record_service.create.assert_not_awaited()
