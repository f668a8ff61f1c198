"""Auth token issuance and verification.

Tokens are HS256 JWTs carrying ``userId`` and ``email``. Every way a
token can be unusable (malformed, tampered, expired, missing claims)
ends in the same InvalidTokenError so callers cannot tell them apart.
"""

import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from domain.model.errors import InvalidTokenError, TokenIssuanceError
from domain.model.user import TokenClaims

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
JWT_EXPIRATION_MINUTES = 60

AUTHENTICATION_FAILED_MESSAGE = "Authentication failed!"


class TokenService:
    def __init__(
        self,
        secret_key: str,
        expires_minutes: int = JWT_EXPIRATION_MINUTES,
        algorithm: str = JWT_ALGORITHM,
    ):
        self.secret_key = secret_key
        self.expires_minutes = expires_minutes
        self.algorithm = algorithm

    def issue(self, user_id: str, email: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "userId": user_id,
            "email": email,
            "iat": now,
            "exp": now + timedelta(minutes=self.expires_minutes),
        }
        try:
            return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        except JWTError as e:
            logger.error("Token signing failed", extra={"userId": user_id, "error": str(e)})
            raise TokenIssuanceError("Could not issue an authentication token, please try again.") from e

    def verify(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.debug(f"JWT verification failed: {e}")
            raise InvalidTokenError(AUTHENTICATION_FAILED_MESSAGE) from e

        user_id = payload.get("userId")
        email = payload.get("email")
        if not user_id or not email:
            raise InvalidTokenError(AUTHENTICATION_FAILED_MESSAGE)
        return TokenClaims(user_id=user_id, email=email)
