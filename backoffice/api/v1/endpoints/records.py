"""Record API: thin routes delegating to RecordService."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from backoffice.api.v1.dependencies import (
    CurrentCaller,
    get_record_service,
    get_record_service_read,
)
from backoffice.application.dtos.record import RecordFilters, RecordUpdate
from backoffice.application.use_cases.records import RecordService
from backoffice.core.limiter import limit_writes
from backoffice.schemas.record import (
    RecordCountsResponse,
    RecordCreateRequest,
    RecordResponse,
    RecordUpdateRequest,
)

router = APIRouter()


@router.post("", response_model=RecordResponse, status_code=201)
@limit_writes
async def create_record(
    request: Request,
    body: RecordCreateRequest,
    caller: CurrentCaller,
    record_svc: Annotated[RecordService, Depends(get_record_service)],
):
    """Create a record; billable categories charge the tenant's usage."""
    created = await record_svc.create(caller, body.model_dump(exclude_none=True))
    return RecordResponse.model_validate(created)


@router.get("", response_model=list[RecordResponse])
async def list_records(
    caller: CurrentCaller,
    record_svc: Annotated[RecordService, Depends(get_record_service_read)],
    category: Annotated[
        str | None, Query(description="Comma-separated categories")
    ] = None,
    status: Annotated[
        str | None, Query(description="A status, or the groups 'waiting' / 'done'")
    ] = None,
    tenant_id: Annotated[str | None, Query(description="Staff only")] = None,
    search: Annotated[str | None, Query(max_length=200)] = None,
    created_from: Annotated[datetime | None, Query()] = None,
    created_before: Annotated[datetime | None, Query()] = None,
    limit: Annotated[int, Query(ge=1, le=200)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
):
    """List records newest first (tenant-scoped unless staff)."""
    filters = RecordFilters(
        categories=category.split(",") if category else [],
        status=status,
        tenant_id=tenant_id,
        search=search,
        created_from=created_from,
        created_before=created_before,
        limit=limit,
        offset=offset,
    )
    items = await record_svc.list(caller, filters)
    return [RecordResponse.model_validate(r) for r in items]


@router.get("/counts", response_model=RecordCountsResponse)
async def get_record_counts(
    caller: CurrentCaller,
    record_svc: Annotated[RecordService, Depends(get_record_service_read)],
):
    """Pending/done/total over non-administrative categories."""
    counts = await record_svc.counts(caller)
    return RecordCountsResponse.model_validate(counts)


@router.get("/{record_id}", response_model=RecordResponse)
async def get_record(
    record_id: str,
    caller: CurrentCaller,
    record_svc: Annotated[RecordService, Depends(get_record_service_read)],
):
    """Get one record."""
    record = await record_svc.get(record_id, caller)
    return RecordResponse.model_validate(record)


@router.put("/{record_id}", response_model=RecordResponse)
@limit_writes
async def update_record(
    request: Request,
    record_id: str,
    body: RecordUpdateRequest,
    caller: CurrentCaller,
    record_svc: Annotated[RecordService, Depends(get_record_service)],
):
    """Update or answer a record. Answer and quote fields are staff only."""
    updated = await record_svc.update(
        record_id, caller, RecordUpdate(**body.model_dump(exclude_none=True))
    )
    return RecordResponse.model_validate(updated)


@router.delete("/{record_id}", status_code=204, response_class=Response)
@limit_writes
async def delete_record(
    request: Request,
    record_id: str,
    caller: CurrentCaller,
    record_svc: Annotated[RecordService, Depends(get_record_service)],
) -> None:
    """Delete a record and refund its usage charge."""
    await record_svc.delete(record_id, caller)
