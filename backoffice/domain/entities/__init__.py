"""Domain entities."""

from backoffice.domain.entities.approval_request import ApprovalRequestEntity

__all__ = ["ApprovalRequestEntity"]
