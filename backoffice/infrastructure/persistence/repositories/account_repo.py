"""Account repository: identity store lookups and atomic usage counter updates."""

from typing import Any

from sqlalchemy import case, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.application.dtos.account import AccountResult
from backoffice.domain.enums import Role, UsageCounter
from backoffice.domain.exceptions import ValidationException
from backoffice.infrastructure.persistence.models.account import Account
from backoffice.infrastructure.persistence.repositories.base import BaseRepository

_COUNTER_COLUMNS = {
    UsageCounter.ADVISORY: Account.advisory_used_count,
    UsageCounter.PHONE: Account.phone_used_count,
}
_UPDATABLE_FIELDS = frozenset(
    {"department", "role", "display_name", "company_name", "plan", "is_active"}
)


def _account_to_result(a: Account) -> AccountResult:
    """Map ORM Account to application AccountResult."""
    return AccountResult(
        id=a.id,
        tenant_id=a.tenant_id,
        role=a.role,
        display_name=a.display_name,
        email=a.email,
        company_name=a.company_name,
        department=a.department,
        plan=a.plan,
        advisory_used_count=a.advisory_used_count or 0,
        phone_used_count=a.phone_used_count or 0,
        is_active=a.is_active,
    )


class AccountRepository(BaseRepository[Account]):
    """Account repository. Counters are changed with SQL-side arithmetic only."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Account)

    async def get_by_id(self, account_id: str) -> AccountResult | None:
        orm = await super().get_by_id(account_id)
        return _account_to_result(orm) if orm else None

    async def _first(self, *criteria: Any, order_by: Any = None) -> AccountResult | None:
        stmt = select(Account).where(*criteria)
        if order_by is not None:
            stmt = stmt.order_by(order_by, Account.created_at.asc())
        else:
            stmt = stmt.order_by(Account.created_at.asc())
        result = await self.db.execute(stmt.limit(1))
        row = result.scalar_one_or_none()
        return _account_to_result(row) if row else None

    async def find_by_tenant_and_role(
        self, tenant_id: str, role: str
    ) -> AccountResult | None:
        return await self._first(Account.tenant_id == tenant_id, Account.role == role)

    async def find_first_by_tenant(self, tenant_id: str) -> AccountResult | None:
        """Owner first, then the oldest account of the tenant."""
        owner_first = case((Account.role == Role.OWNER.value, 0), else_=1)
        return await self._first(Account.tenant_id == tenant_id, order_by=owner_first)

    async def find_by_company_name(self, company_name: str) -> AccountResult | None:
        return await self._first(Account.company_name == company_name)

    async def update_fields(
        self, account_id: str, fields: dict[str, Any]
    ) -> AccountResult | None:
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            raise ValidationException(
                f"Cannot update account fields: {', '.join(sorted(unknown))}"
            )
        orm = await super().get_by_id(account_id)
        if orm is None:
            return None
        for key, value in fields.items():
            setattr(orm, key, value)
        await self.db.flush()
        await self.db.refresh(orm)
        return _account_to_result(orm)

    async def increment_counter(self, account_id: str, counter: UsageCounter) -> bool:
        column = _COUNTER_COLUMNS[counter]
        result = await self.db.execute(
            update(Account)
            .where(Account.id == account_id)
            .values({column: column + 1})
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount > 0

    async def decrement_counter(self, account_id: str, counter: UsageCounter) -> bool:
        column = _COUNTER_COLUMNS[counter]
        result = await self.db.execute(
            update(Account)
            .where(Account.id == account_id)
            .values({column: case((column > 0, column - 1), else_=0)})
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount > 0

    async def create_account(
        self,
        *,
        role: str,
        tenant_id: str | None = None,
        display_name: str | None = None,
        email: str | None = None,
        company_name: str | None = None,
        department: str | None = None,
        plan: str | None = None,
    ) -> AccountResult:
        """Insert an account (dev seeding and tests; sign-up lives in the identity service)."""
        orm = await self._add(
            Account(
                role=role,
                tenant_id=tenant_id,
                display_name=display_name,
                email=email,
                company_name=company_name,
                department=department,
                plan=plan,
            )
        )
        return _account_to_result(orm)
