"""Approval request API: thin routes delegating to ApprovalService."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from backoffice.api.v1.dependencies import (
    CurrentCaller,
    get_approval_service,
    get_approval_service_read,
)
from backoffice.application.dtos.approval_request import (
    ApprovalOutcome,
    ApprovalRequestFilters,
    BulkApproveResult,
)
from backoffice.application.use_cases.approvals import ApprovalService
from backoffice.core.limiter import limit_bulk, limit_writes
from backoffice.schemas.approval_request import (
    ApprovalOutcomeResponse,
    ApprovalRejectRequest,
    ApprovalRequestCreate,
    ApprovalRequestResponse,
    BulkApproveItemErrorResponse,
    BulkApproveRequest,
    BulkApproveResponse,
)

router = APIRouter()


def _outcome_response(outcome: ApprovalOutcome) -> ApprovalOutcomeResponse:
    return ApprovalOutcomeResponse(
        request=ApprovalRequestResponse.model_validate(outcome.request),
        action=outcome.action,
        dispatched=outcome.dispatched,
        dispatch_error=outcome.dispatch_error,
        record_id=outcome.record_id,
    )


def _bulk_response(result: BulkApproveResult) -> BulkApproveResponse:
    return BulkApproveResponse(
        success_count=result.success_count,
        fail_count=result.fail_count,
        errors=[
            BulkApproveItemErrorResponse(
                id=e.request_id, error_code=e.error_code, message=e.message
            )
            for e in result.errors
        ],
        approved_ids=result.approved_ids,
    )


@router.post("", response_model=ApprovalRequestResponse, status_code=201)
@limit_writes
async def submit_approval_request(
    request: Request,
    body: ApprovalRequestCreate,
    caller: CurrentCaller,
    approval_svc: Annotated[ApprovalService, Depends(get_approval_service)],
):
    """Submit a request; it starts Pending in the caller's tenant."""
    created = await approval_svc.submit(caller, body.request_type, body.payload)
    return ApprovalRequestResponse.model_validate(created)


@router.get("", response_model=list[ApprovalRequestResponse])
async def list_approval_requests(
    caller: CurrentCaller,
    approval_svc: Annotated[ApprovalService, Depends(get_approval_service_read)],
    status: Annotated[str | None, Query(description="Pending, Approved or Rejected")] = None,
    tenant_id: Annotated[str | None, Query(description="Staff only")] = None,
):
    """List requests visible to the caller, newest first."""
    items = await approval_svc.list(
        caller, ApprovalRequestFilters(status=status, tenant_id=tenant_id)
    )
    return [ApprovalRequestResponse.model_validate(i) for i in items]


@router.post(
    "/bulk-approve",
    response_model=BulkApproveResponse,
    responses={207: {"description": "Some items failed", "model": BulkApproveResponse}},
)
@limit_bulk
async def bulk_approve_requests(
    request: Request,
    body: BulkApproveRequest,
    caller: CurrentCaller,
    approval_svc: Annotated[ApprovalService, Depends(get_approval_service)],
):
    """Approve each id independently; 207 when any item failed."""
    result = await approval_svc.bulk_approve(body.ids, caller)
    content = jsonable_encoder(_bulk_response(result))
    return JSONResponse(status_code=207 if result.is_partial else 200, content=content)


@router.get("/{request_id}", response_model=ApprovalRequestResponse)
async def get_approval_request(
    request_id: str,
    caller: CurrentCaller,
    approval_svc: Annotated[ApprovalService, Depends(get_approval_service_read)],
):
    """Get one request (same visibility as the list)."""
    item = await approval_svc.get(request_id, caller)
    return ApprovalRequestResponse.model_validate(item)


@router.put("/{request_id}/approve", response_model=ApprovalOutcomeResponse)
@limit_writes
async def approve_request(
    request: Request,
    request_id: str,
    caller: CurrentCaller,
    approval_svc: Annotated[ApprovalService, Depends(get_approval_service)],
):
    """Approve and apply the request's side effect; a failed side effect is reported."""
    outcome = await approval_svc.approve(request_id, caller)
    return _outcome_response(outcome)


@router.put("/{request_id}/reject", response_model=ApprovalRequestResponse)
@limit_writes
async def reject_request(
    request: Request,
    request_id: str,
    caller: CurrentCaller,
    approval_svc: Annotated[ApprovalService, Depends(get_approval_service)],
    body: ApprovalRejectRequest | None = None,
):
    """Reject with an optional reason."""
    reason = body.reason if body else None
    rejected = await approval_svc.reject(request_id, caller, reason)
    return ApprovalRequestResponse.model_validate(rejected)


@router.delete("/{request_id}", status_code=204, response_class=Response)
@limit_writes
async def delete_approval_request(
    request: Request,
    request_id: str,
    caller: CurrentCaller,
    approval_svc: Annotated[ApprovalService, Depends(get_approval_service)],
) -> None:
    """Delete a request in any status (requester or staff)."""
    await approval_svc.delete(request_id, caller)
