"""Account API schemas."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class AccountResponse(BaseModel):
    """Account with usage counters."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str | None
    role: str
    display_name: str | None = None
    email: str | None = None
    company_name: str | None = None
    department: str | None = None
    plan: str | None = None
    advisory_used_count: int
    phone_used_count: int
    is_active: bool


class UsageAdjustRequest(BaseModel):
    """Manual usage adjustment by staff."""

    counter: Literal["advisory", "phone"]
    direction: Literal["increment", "decrement"] = Field(default="increment")
