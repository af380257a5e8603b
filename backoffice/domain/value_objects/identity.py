"""Caller identity value object (verified by the authentication layer)."""

from dataclasses import dataclass

from backoffice.domain.exceptions import ValidationException


@dataclass(frozen=True)
class CallerIdentity:
    """Authenticated caller: account id, role, and tenant.

    Built from verified token claims before any domain operation runs.
    """

    account_id: str
    role: str
    tenant_id: str | None
    display_name: str | None = None
    email: str | None = None

    def __post_init__(self) -> None:
        if not self.account_id:
            raise ValidationException("Caller account id is required", field="account_id")
        if not self.role:
            raise ValidationException("Caller role is required", field="role")

    @property
    def signature(self) -> str:
        """Name stamped on records the caller answers (display name, else email)."""
        return self.display_name or self.email or self.account_id
