"""Bearer-token authentication for protected routes.

Used as a route dependency, so it runs before the handler and before any
upload is stored. It only verifies the token; it never reads the store.
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies import get_token_service
from domain.model.errors import AuthenticationError
from domain.model.user import TokenClaims
from services.token_service import AUTHENTICATION_FAILED_MESSAGE, TokenService

logger = logging.getLogger(__name__)

# auto_error=False: a missing header must become our 403, not FastAPI's default
security = HTTPBearer(auto_error=False)


def require_auth(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    tokens: TokenService = Depends(get_token_service),
) -> Optional[TokenClaims]:
    """Resolve the caller from ``Authorization: Bearer <token>``.

    Browser preflight (OPTIONS) requests carry no Authorization header
    and pass through untouched. Any other request without a valid token
    fails with AuthenticationError (403).

    Returns:
        The verified claims, also stored on ``request.state.user``
    """
    if request.method == "OPTIONS":
        return None

    if not credentials or not credentials.credentials:
        raise AuthenticationError(AUTHENTICATION_FAILED_MESSAGE)

    # InvalidTokenError is an AuthenticationError with the same message
    claims = tokens.verify(credentials.credentials)

    request.state.user = claims
    return claims
