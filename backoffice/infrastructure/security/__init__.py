"""Security: bearer token verification."""

from backoffice.infrastructure.security.jwt import (
    create_access_token,
    identity_from_claims,
    token_for,
    verify_token,
)

__all__ = ["create_access_token", "identity_from_claims", "token_for", "verify_token"]
