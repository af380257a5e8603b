"""Persistence models: ORM entities and mixins."""

from backoffice.infrastructure.persistence.models.account import Account
from backoffice.infrastructure.persistence.models.approval_request import (
    ApprovalRequest,
)
from backoffice.infrastructure.persistence.models.mixins import (
    CuidMixin,
    MultiTenantModel,
    TenantMixin,
    TimestampMixin,
)
from backoffice.infrastructure.persistence.models.record import Record

__all__ = [
    "Account",
    "ApprovalRequest",
    "CuidMixin",
    "MultiTenantModel",
    "Record",
    "TenantMixin",
    "TimestampMixin",
]
