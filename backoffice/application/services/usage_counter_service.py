"""Usage counter service: who pays for a consultation, and charging/refunding it.

Employees consume their tenant owner's quota. Counters change only through
resolve-then-update: resolve the billable account, then apply an atomic
SQL-side increment or floored decrement. Limits are an entitlement concern
handled elsewhere; no upper bound is enforced here.
"""

from __future__ import annotations

from dataclasses import dataclass

from backoffice.application.dtos.account import AccountResult
from backoffice.application.interfaces.repositories import IAccountRepository
from backoffice.core.constants import NON_BILLABLE_CATEGORIES, PHONE_REQUEST_CATEGORY
from backoffice.domain.enums import Role, UsageCounter
from backoffice.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
)
from backoffice.domain.policies import is_elevated_admin, is_subordinate
from backoffice.domain.value_objects.identity import CallerIdentity
from backoffice.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def classify_category(category: str) -> UsageCounter | None:
    """Return the counter a record category bills, or None when not billable."""
    if category == PHONE_REQUEST_CATEGORY:
        return UsageCounter.PHONE
    if category in NON_BILLABLE_CATEGORIES:
        return None
    return UsageCounter.ADVISORY


@dataclass(frozen=True)
class UsageCharge:
    """Which account was charged (or refunded) on which counter."""

    account_id: str
    counter: UsageCounter


class UsageCounterService:
    """Resolves the billable account and applies counter changes."""

    def __init__(self, account_repo: IAccountRepository) -> None:
        self._account_repo = account_repo

    async def resolve_billable_account(self, creator_account_id: str) -> str:
        """Return the account id whose quota a creation by this account consumes.

        Subordinate roles bill their tenant's owner when one exists; everyone
        else (and subordinates of owner-less tenants) bills themselves.
        """
        creator = await self._account_repo.get_by_id(creator_account_id)
        if creator is None or not is_subordinate(creator.role) or not creator.tenant_id:
            return creator_account_id
        owner = await self._account_repo.find_by_tenant_and_role(
            creator.tenant_id, Role.OWNER.value
        )
        if owner is None:
            return creator_account_id
        return owner.id

    async def increment(self, account_id: str, counter: UsageCounter) -> None:
        """Add 1 to the named counter."""
        if not await self._account_repo.increment_counter(account_id, counter):
            logger.warning(
                "Usage increment skipped: account %s not found (counter=%s)",
                account_id,
                counter.value,
            )

    async def decrement(self, account_id: str, counter: UsageCounter) -> None:
        """Subtract 1 from the named counter, never below 0."""
        if not await self._account_repo.decrement_counter(account_id, counter):
            logger.warning(
                "Usage decrement skipped: account %s not found (counter=%s)",
                account_id,
                counter.value,
            )

    async def charge_for_category(
        self, creator_account_id: str, category: str
    ) -> UsageCharge | None:
        """Charge one unit for a newly created record of this category."""
        counter = classify_category(category)
        if counter is None:
            return None
        billable_id = await self.resolve_billable_account(creator_account_id)
        await self.increment(billable_id, counter)
        logger.info(
            "Usage charged: account=%s counter=%s category=%s creator=%s",
            billable_id,
            counter.value,
            category,
            creator_account_id,
        )
        return UsageCharge(account_id=billable_id, counter=counter)

    async def refund_for_category(
        self, author_account_id: str, category: str
    ) -> UsageCharge | None:
        """Reverse the charge of a deleted record of this category."""
        counter = classify_category(category)
        if counter is None:
            return None
        billable_id = await self.resolve_billable_account(author_account_id)
        await self.decrement(billable_id, counter)
        logger.info(
            "Usage refunded: account=%s counter=%s category=%s author=%s",
            billable_id,
            counter.value,
            category,
            author_account_id,
        )
        return UsageCharge(account_id=billable_id, counter=counter)

    async def adjust(
        self,
        caller: CallerIdentity,
        account_id: str,
        counter: UsageCounter,
        *,
        increment: bool = True,
    ) -> AccountResult:
        """Manual adjustment by firm staff (e.g. a consultation handled offline).

        Raises:
            AuthorizationException: Caller is not elevated staff.
            ResourceNotFoundException: Account does not exist.
        """
        if not is_elevated_admin(caller.role):
            raise AuthorizationException(resource="usage", action="adjust")
        account = await self._account_repo.get_by_id(account_id)
        if account is None:
            raise ResourceNotFoundException("account", account_id)
        if increment:
            await self.increment(account_id, counter)
        else:
            await self.decrement(account_id, counter)
        logger.info(
            "Usage adjusted by %s: account=%s counter=%s direction=%s",
            caller.account_id,
            account_id,
            counter.value,
            "increment" if increment else "decrement",
        )
        updated = await self._account_repo.get_by_id(account_id)
        if updated is None:
            raise ResourceNotFoundException("account", account_id)
        return updated
