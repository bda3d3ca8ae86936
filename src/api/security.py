"""Bearer token guard for protected routes."""

import logging
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from api.dependencies import get_token_issuer
from domain.model.errors import InvalidTokenError
from domain.model.claims import Claims
from services.token_issuer import TokenIssuer

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> Claims:
    """Claims of a valid bearer token (required). Raises 401 otherwise."""
    if not credentials:
        raise _unauthorized("Not authenticated")

    try:
        return issuer.decode(credentials.credentials)
    except InvalidTokenError:
        raise _unauthorized("Invalid authentication credentials") from None
