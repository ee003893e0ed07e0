"""FastAPI authentication dependencies."""

import logging

from fastapi import Depends, Header, Request

from authorflow.auth.gateway import IdentityGateway
from authorflow.errors.exceptions import AuthorFlowError, MissingCredentialsError
from authorflow.models.user import Identity

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token after a case-sensitive ``Bearer `` prefix, if any."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):]
    return token or None


def get_identity_gateway(request: Request) -> IdentityGateway:
    """Get the identity gateway created at startup."""
    return request.app.state.services.identity


async def get_bearer_token(
    authorization: str | None = Header(default=None),
) -> str | None:
    """Extract the bearer token from the Authorization header."""
    return extract_bearer_token(authorization)


async def get_current_identity(
    token: str | None = Depends(get_bearer_token),
    gateway: IdentityGateway = Depends(get_identity_gateway),
) -> Identity:
    """
    Get the authenticated caller.

    Missing or malformed headers and rejected tokens end the request with 401.
    """
    if token is None:
        raise MissingCredentialsError()
    return await gateway.verify_token(token)


async def get_optional_identity(
    token: str | None = Depends(get_bearer_token),
    gateway: IdentityGateway = Depends(get_identity_gateway),
) -> Identity | None:
    """
    Get the caller if authenticated, otherwise return None.

    Useful for endpoints that work differently for authenticated vs anonymous users.
    """
    if token is None:
        return None

    try:
        return await gateway.verify_token(token)
    except AuthorFlowError as e:
        logger.info("Continuing anonymously: %s", e.message)
        return None
