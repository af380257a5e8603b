"""Domain layer: entities, value objects, enums, policies, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from backoffice.domain.entities import ApprovalRequestEntity
from backoffice.domain.enums import ApprovalStatus, RequestType, Role, UsageCounter
from backoffice.domain.exceptions import (
    AlreadyResolvedException,
    AuthenticationException,
    AuthorizationException,
    BackofficeException,
    DispatchFailureException,
    ResourceNotFoundException,
    ValidationException,
)
from backoffice.domain.value_objects import CallerIdentity

__all__ = [
    # Entities
    "ApprovalRequestEntity",
    # Enums
    "ApprovalStatus",
    "RequestType",
    "Role",
    "UsageCounter",
    # Exceptions
    "AlreadyResolvedException",
    "AuthenticationException",
    "AuthorizationException",
    "BackofficeException",
    "DispatchFailureException",
    "ResourceNotFoundException",
    "ValidationException",
    # Value objects
    "CallerIdentity",
]
