"""Account API: the caller's own account and manual usage adjustment."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from backoffice.api.v1.dependencies import (
    CurrentCaller,
    get_account_repo,
    get_usage_counter_service,
)
from backoffice.application.services.usage_counter_service import UsageCounterService
from backoffice.core.limiter import limit_writes
from backoffice.domain.enums import UsageCounter
from backoffice.domain.exceptions import ResourceNotFoundException
from backoffice.infrastructure.persistence.repositories import AccountRepository
from backoffice.schemas.account import AccountResponse, UsageAdjustRequest

router = APIRouter()


@router.get("/me", response_model=AccountResponse)
async def get_my_account(
    caller: CurrentCaller,
    account_repo: Annotated[AccountRepository, Depends(get_account_repo)],
):
    """Return the caller's account with usage counters."""
    account = await account_repo.get_by_id(caller.account_id)
    if account is None:
        raise ResourceNotFoundException("account", caller.account_id)
    return AccountResponse.model_validate(account)


@router.post("/{account_id}/usage", response_model=AccountResponse)
@limit_writes
async def adjust_usage(
    request: Request,
    account_id: str,
    body: UsageAdjustRequest,
    caller: CurrentCaller,
    usage_svc: Annotated[UsageCounterService, Depends(get_usage_counter_service)],
):
    """Staff-only manual adjustment of an account's usage counter."""
    account = await usage_svc.adjust(
        caller,
        account_id,
        UsageCounter(body.counter),
        increment=body.direction == "increment",
    )
    return AccountResponse.model_validate(account)
