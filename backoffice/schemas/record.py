"""Record API schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class RecordCreateRequest(BaseModel):
    """Request body for creating a record.

    target_* fields are honoured only for staff-written phone logs.
    """

    category: str | None = Field(default=None, max_length=64)
    title: str | None = Field(default=None, max_length=255)
    content: str | None = None
    file_urls: list[str] | None = None
    status: str | None = Field(default=None, max_length=32)
    target_tenant_id: str | None = Field(default=None, max_length=32)
    target_account_id: str | None = None
    target_company_name: str | None = Field(default=None, max_length=200)


class RecordUpdateRequest(BaseModel):
    """Request body for updating or answering a record (partial)."""

    title: str | None = Field(default=None, max_length=255)
    content: str | None = None
    status: str | None = Field(default=None, max_length=32)
    answer: str | None = None
    answered_at: datetime | None = None
    quoted_price: Decimal | None = Field(default=None, ge=0)
    quoted_at: datetime | None = None
    reject_reason: str | None = None


class RecordResponse(BaseModel):
    """Record response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str | None
    author_id: str
    company_name: str | None = None
    category: str
    title: str
    content: str
    status: str
    file_urls: list[str] | None = None
    answer: str | None = None
    answered_by: str | None = None
    answered_at: datetime | None = None
    quoted_price: Decimal | None = None
    quoted_at: datetime | None = None
    reject_reason: str | None = None
    created_at: datetime
    updated_at: datetime


class RecordCountsResponse(BaseModel):
    """Dashboard counts."""

    model_config = ConfigDict(from_attributes=True)

    pending_count: int
    done_count: int
    total_count: int
