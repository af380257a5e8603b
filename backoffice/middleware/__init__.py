"""HTTP middleware. Applied in backoffice.main."""

from backoffice.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
