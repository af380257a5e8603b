"""DTOs for records ("posts": consultations, phone logs, inquiries)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class RecordToPersist:
    """Fully attributed record ready for insert."""

    tenant_id: str | None
    author_id: str
    company_name: str | None
    category: str
    title: str
    content: str
    status: str
    file_urls: list[str] | None = None
    answered_by: str | None = None
    answered_at: datetime | None = None


@dataclass(frozen=True)
class RecordResult:
    """Record read-model."""

    id: str
    tenant_id: str | None
    author_id: str
    company_name: str | None
    category: str
    title: str
    content: str
    status: str
    file_urls: list[str] | None
    answer: str | None
    answered_by: str | None
    answered_at: datetime | None
    quoted_price: Decimal | None
    quoted_at: datetime | None
    reject_reason: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class RecordFilters:
    """Caller-supplied list filters. status accepts 'waiting' and 'done' groups."""

    categories: list[str] = field(default_factory=list)
    status: str | None = None
    tenant_id: str | None = None
    search: str | None = None
    created_from: datetime | None = None
    created_before: datetime | None = None
    limit: int = 50
    offset: int = 0


@dataclass(frozen=True)
class RecordQuery:
    """Repository query after tenant scoping and status-group expansion."""

    tenant_id: str | None = None
    author_id: str | None = None
    categories: list[str] = field(default_factory=list)
    statuses: list[str] = field(default_factory=list)
    search: str | None = None
    created_from: datetime | None = None
    created_before: datetime | None = None
    limit: int = 50
    offset: int = 0


@dataclass(frozen=True)
class RecordUpdate:
    """Partial update; None means "leave unchanged"."""

    title: str | None = None
    content: str | None = None
    status: str | None = None
    answer: str | None = None
    answered_at: datetime | None = None
    quoted_price: Decimal | None = None
    quoted_at: datetime | None = None
    reject_reason: str | None = None

    def changed_fields(self) -> dict[str, Any]:
        """Return only the fields that were provided."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


@dataclass(frozen=True)
class RecordCounts:
    """Dashboard counts over non-administrative categories."""

    pending_count: int
    done_count: int
    total_count: int
