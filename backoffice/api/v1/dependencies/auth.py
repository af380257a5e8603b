"""Caller identity dependency: verifies the bearer token issued by the identity service."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from backoffice.domain.exceptions import AuthenticationException, ValidationException
from backoffice.domain.value_objects.identity import CallerIdentity
from backoffice.infrastructure.security.jwt import identity_from_claims, verify_token

logger = logging.getLogger(__name__)

_http_bearer = HTTPBearer(auto_error=False)


async def get_current_caller(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> CallerIdentity:
    """Return the verified caller; raise AuthenticationException (401) otherwise."""
    if credentials is None:
        raise AuthenticationException("Not authenticated")
    try:
        payload = verify_token(credentials.credentials)
        return identity_from_claims(payload)
    except (ValueError, KeyError, ValidationException) as e:
        logger.info("Rejected bearer token: %s", e)
        raise AuthenticationException("Invalid or expired token") from None


CurrentCaller = Annotated[CallerIdentity, Depends(get_current_caller)]
