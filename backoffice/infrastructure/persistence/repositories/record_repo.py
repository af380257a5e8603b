"""Record repository. Returns application DTOs."""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.application.dtos.record import (
    RecordCounts,
    RecordQuery,
    RecordResult,
    RecordToPersist,
)
from backoffice.infrastructure.persistence.models.record import Record
from backoffice.infrastructure.persistence.repositories.base import BaseRepository
from backoffice.shared.utils.datetime import ensure_utc
from backoffice.shared.utils.serialization import safe_json_loads

_UPDATABLE_FIELDS = frozenset(
    {
        "title",
        "content",
        "status",
        "answer",
        "answered_by",
        "answered_at",
        "quoted_price",
        "quoted_at",
        "reject_reason",
    }
)


def _like_pattern(term: str) -> str:
    """Substring pattern for ilike; user-typed % and _ match literally."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _file_urls_of(r: Record) -> list[str] | None:
    value = r.file_urls
    if value is None or isinstance(value, list):
        return value
    parsed = safe_json_loads(value)
    return parsed if isinstance(parsed, list) else None


def _record_to_result(r: Record) -> RecordResult:
    """Map ORM Record to application RecordResult."""
    return RecordResult(
        id=r.id,
        tenant_id=r.tenant_id,
        author_id=r.author_id,
        company_name=r.company_name,
        category=r.category,
        title=r.title,
        content=r.content,
        status=r.status,
        file_urls=_file_urls_of(r),
        answer=r.answer,
        answered_by=r.answered_by,
        answered_at=ensure_utc(r.answered_at),
        quoted_price=r.quoted_price,
        quoted_at=ensure_utc(r.quoted_at),
        reject_reason=r.reject_reason,
        created_at=ensure_utc(r.created_at),
        updated_at=ensure_utc(r.updated_at),
    )


class RecordRepository(BaseRepository[Record]):
    """Record repository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Record)

    async def create(self, data: RecordToPersist) -> RecordResult:
        orm = await self._add(
            Record(
                tenant_id=data.tenant_id,
                author_id=data.author_id,
                company_name=data.company_name,
                category=data.category,
                title=data.title,
                content=data.content,
                status=data.status,
                file_urls=data.file_urls,
                answered_by=data.answered_by,
                answered_at=data.answered_at,
            )
        )
        return _record_to_result(orm)

    async def get_by_id(self, record_id: str) -> RecordResult | None:
        orm = await super().get_by_id(record_id)
        return _record_to_result(orm) if orm else None

    async def list(self, query: RecordQuery) -> list[RecordResult]:
        stmt = select(Record)
        if query.tenant_id is not None:
            stmt = stmt.where(Record.tenant_id == query.tenant_id)
        if query.author_id is not None:
            stmt = stmt.where(Record.author_id == query.author_id)
        if query.categories:
            stmt = stmt.where(Record.category.in_(query.categories))
        if query.statuses:
            stmt = stmt.where(Record.status.in_(query.statuses))
        if query.search:
            pattern = _like_pattern(query.search)
            stmt = stmt.where(
                or_(
                    Record.title.ilike(pattern, escape="\\"),
                    Record.content.ilike(pattern, escape="\\"),
                )
            )
        if query.created_from is not None:
            stmt = stmt.where(Record.created_at >= query.created_from)
        if query.created_before is not None:
            stmt = stmt.where(Record.created_at < query.created_before)
        stmt = (
            stmt.order_by(Record.created_at.desc(), Record.id.desc())
            .offset(query.offset)
            .limit(query.limit)
        )
        result = await self.db.execute(stmt)
        return [_record_to_result(r) for r in result.scalars().all()]

    async def update(
        self, record_id: str, fields: dict[str, Any]
    ) -> RecordResult | None:
        orm = await super().get_by_id(record_id)
        if orm is None:
            return None
        for key, value in fields.items():
            if key in _UPDATABLE_FIELDS:
                setattr(orm, key, value)
        await self.db.flush()
        await self.db.refresh(orm)
        return _record_to_result(orm)

    async def delete(self, record_id: str) -> bool:
        orm = await super().get_by_id(record_id)
        if orm is None:
            return False
        await self._remove(orm)
        return True

    async def counts(
        self,
        *,
        tenant_id: str | None,
        excluded_categories: frozenset[str],
        waiting_statuses: tuple[str, ...],
        done_statuses: tuple[str, ...],
    ) -> RecordCounts:
        stmt = select(
            func.count(Record.id).filter(Record.status.in_(waiting_statuses)),
            func.count(Record.id).filter(Record.status.in_(done_statuses)),
            func.count(Record.id),
        ).where(Record.category.not_in(excluded_categories))
        if tenant_id is not None:
            stmt = stmt.where(Record.tenant_id == tenant_id)
        pending, done, total = (await self.db.execute(stmt)).one()
        return RecordCounts(
            pending_count=pending or 0, done_count=done or 0, total_count=total or 0
        )
