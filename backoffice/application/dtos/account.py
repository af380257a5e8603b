"""DTOs for accounts held by the identity store (no dependency on ORM)."""

from dataclasses import dataclass

from backoffice.domain.value_objects.identity import CallerIdentity


@dataclass(frozen=True)
class AccountResult:
    """Account read-model with usage counters. No credentials."""

    id: str
    tenant_id: str | None
    role: str
    display_name: str | None
    email: str | None
    company_name: str | None
    department: str | None
    plan: str | None
    advisory_used_count: int
    phone_used_count: int
    is_active: bool

    def to_identity(self) -> CallerIdentity:
        """Identity used when acting on behalf of this account (e.g. approval dispatch)."""
        return CallerIdentity(
            account_id=self.id,
            role=self.role,
            tenant_id=self.tenant_id,
            display_name=self.display_name,
            email=self.email,
        )
