"""Domain enumerations for the back office.

Enums represent fixed sets of domain values (approval status, request
types, usage counters, roles).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class ApprovalStatus(_ValuesMixin, str, Enum):
    """Approval request lifecycle status.

    PENDING is initial; APPROVED and REJECTED are terminal.
    """

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not ApprovalStatus.PENDING


class RequestType(_ValuesMixin, str, Enum):
    """Known approval request types. Unknown tags are stored and approved as no-ops."""

    DEPARTMENT_CHANGE = "department-change"
    ROLE_CHANGE = "role-change"
    ADVISORY_REQUEST = "advisory-request"
    PHONE_CONSULT_REQUEST = "phone-consult-request"
    EXTRA_USAGE_INQUIRY = "extra-usage-inquiry"
    PLAN_CHANGE_REQUEST = "plan-change-request"

    @classmethod
    def parse(cls, value: str) -> "RequestType | None":
        """Return the member for value, or None when the tag is not known."""
        try:
            return cls(value)
        except ValueError:
            return None


class UsageCounter(_ValuesMixin, str, Enum):
    """Per-tenant consumption counters stored on the owner account."""

    ADVISORY = "advisory"
    PHONE = "phone"


class Role(_ValuesMixin, str, Enum):
    """Account roles. Grouped into policies in backoffice.domain.policies."""

    MASTER = "master"
    ADMIN = "admin"
    GENERAL_MANAGER = "general_manager"
    LAWYER = "lawyer"
    OWNER = "owner"
    MANAGER = "manager"
    USER = "user"
    STAFF = "staff"
