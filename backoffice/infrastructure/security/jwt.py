"""JWT verification of caller identity tokens.

Tokens are issued by the identity service; this module verifies them and
turns their claims into a CallerIdentity. create_access_token exists for dev
scripts and tests that need a signed token.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from backoffice.core.config import get_settings
from backoffice.domain.value_objects.identity import CallerIdentity


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token with the given claims.

    Args:
        data: Claims to encode (sub, role, tenant_id, name, email).
        expires_delta: Optional TTL; else uses settings.access_token_expire_minutes.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    to_encode = data.copy()
    if expires_delta is not None:
        expire = datetime.now(UTC) + expires_delta
    else:
        expire = datetime.now(UTC) + timedelta(
            minutes=settings.access_token_expire_minutes
        )
    to_encode["exp"] = expire
    encoded = jwt.encode(
        to_encode,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def token_for(identity: CallerIdentity, expires_delta: timedelta | None = None) -> str:
    """Create a token carrying identity's claims."""
    claims: dict[str, Any] = {
        "sub": identity.account_id,
        "role": identity.role,
        "tenant_id": identity.tenant_id,
    }
    if identity.display_name:
        claims["name"] = identity.display_name
    if identity.email:
        claims["email"] = identity.email
    return create_access_token(claims, expires_delta)


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Enforces presence of exp, sub and role.

    Raises:
        ValueError: If token is invalid, expired, or missing required claims.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not payload.get("sub"):
        raise ValueError("Token missing required claim: sub")
    if not payload.get("role"):
        raise ValueError("Token missing required claim: role")
    return payload


def identity_from_claims(payload: dict[str, Any]) -> CallerIdentity:
    """Build the caller identity from verified claims."""
    return CallerIdentity(
        account_id=str(payload["sub"]),
        role=str(payload["role"]),
        tenant_id=payload.get("tenant_id") or None,
        display_name=payload.get("name"),
        email=payload.get("email"),
    )
