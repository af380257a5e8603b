"""Authorization policy: role groups and the predicates built on them.

Every role check in the application goes through this module so that role
lists are declared once.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from backoffice.domain.enums import Role

if TYPE_CHECKING:
    from backoffice.domain.value_objects.identity import CallerIdentity

ELEVATED_ADMIN_ROLES: frozenset[str] = frozenset(
    {
        Role.MASTER.value,
        Role.ADMIN.value,
        Role.GENERAL_MANAGER.value,
        Role.LAWYER.value,
    }
)
OWNER_ROLES: frozenset[str] = frozenset({Role.OWNER.value})
SUBORDINATE_ROLES: frozenset[str] = frozenset(
    {Role.MANAGER.value, Role.USER.value, Role.STAFF.value}
)


def is_elevated_admin(role: str | None) -> bool:
    """Firm staff with global (cross-tenant) authority."""
    return role in ELEVATED_ADMIN_ROLES


def is_owner(role: str | None) -> bool:
    """Tenant owner (company representative)."""
    return role in OWNER_ROLES


def is_subordinate(role: str | None) -> bool:
    """Non-owner employee of a tenant; consumes the owner's quota."""
    return role in SUBORDINATE_ROLES


def can_resolve_approval(caller: CallerIdentity, request_tenant_id: str | None) -> bool:
    """Approve/reject: elevated admin, or owner of the request's tenant."""
    if is_elevated_admin(caller.role):
        return True
    return (
        is_owner(caller.role)
        and caller.tenant_id is not None
        and caller.tenant_id == request_tenant_id
    )


def can_view_approval(
    caller: CallerIdentity, requester_id: str, request_tenant_id: str | None
) -> bool:
    """Same visibility rule as the approval list for a single request."""
    if is_elevated_admin(caller.role):
        return True
    if is_owner(caller.role):
        return caller.tenant_id is not None and caller.tenant_id == request_tenant_id
    return caller.account_id == requester_id


def can_delete_approval(caller: CallerIdentity, requester_id: str) -> bool:
    """Delete: original requester or elevated admin."""
    return caller.account_id == requester_id or is_elevated_admin(caller.role)


def can_view_record(
    caller: CallerIdentity, author_id: str, record_tenant_id: str | None
) -> bool:
    """Records are visible to staff, the author, and members of the same tenant."""
    if is_elevated_admin(caller.role) or caller.account_id == author_id:
        return True
    return caller.tenant_id is not None and caller.tenant_id == record_tenant_id


def can_modify_record(caller: CallerIdentity, author_id: str) -> bool:
    """Update/delete a record: its author or elevated staff."""
    return caller.account_id == author_id or is_elevated_admin(caller.role)


def can_grant_role(approver: CallerIdentity, role: str) -> bool:
    """Staff may grant any role; tenant owners only roles inside their tenant."""
    if is_elevated_admin(approver.role):
        return True
    return role in OWNER_ROLES or role in SUBORDINATE_ROLES
