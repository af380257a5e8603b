"""Application interfaces (ports): repository protocols."""

from backoffice.application.interfaces.repositories import (
    IAccountRepository,
    IApprovalRequestRepository,
    IRecordRepository,
)

__all__ = [
    "IAccountRepository",
    "IApprovalRequestRepository",
    "IRecordRepository",
]
