"""Domain exceptions for the back office.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class BackofficeException(Exception):
    """Base exception for all back office errors.

    Presentation layer maps these to HTTP responses using message,
    error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body: error code, message, and details."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(BackofficeException):
    """Raised when input validation fails (missing or malformed fields)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(BackofficeException):
    """Raised when the caller identity cannot be established (missing or bad token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(BackofficeException):
    """Raised when the caller lacks the role or tenant scope for the operation."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'approval_request', 'record').
            action: Optional action that was attempted (e.g. 'approve', 'delete').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(BackofficeException):
    """Raised when a requested resource (request, record, account) is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'approval_request', 'account').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class AlreadyResolvedException(BackofficeException):
    """Raised when approving or rejecting a request that is no longer Pending."""

    def __init__(self, request_id: str, status: str) -> None:
        """Initialize with the request id and its current terminal status."""
        super().__init__(
            f"Approval request {request_id} is already {status}",
            "ALREADY_RESOLVED",
            {"request_id": request_id, "status": status},
        )


class DispatchFailureException(BackofficeException):
    """Raised when the post-approval side effect fails after the status was set.

    The engine catches it, logs it, and reports it; the Approved status stays.
    """

    def __init__(self, request_id: str, request_type: str, reason: str) -> None:
        """Initialize with request context and the underlying failure reason."""
        super().__init__(
            f"Approved request {request_id} could not apply {request_type}: {reason}",
            "DISPATCH_FAILURE",
            {"request_id": request_id, "request_type": request_type, "reason": reason},
        )
