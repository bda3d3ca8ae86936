"""Signed bearer tokens (HS256 JWT) carrying user identity claims."""

import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from domain.model.errors import InvalidTokenError, SigningError
from domain.model.claims import Claims

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
TOKEN_VALIDITY = timedelta(hours=72)


class TokenIssuer:
    """Issues and decodes tokens signed with one symmetric secret."""

    def __init__(self, secret: str, validity: timedelta = TOKEN_VALIDITY):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        if validity <= timedelta(0):
            raise ValueError("Token validity must be positive")
        self._secret = secret
        self.validity = validity

    def __repr__(self) -> str:
        return f"TokenIssuer(validity={self.validity!r})"

    def issue(self, subject_id: str, email: str, now: datetime | None = None) -> str:
        """Create a token for the given identity.

        ``exp`` is exactly ``validity`` after ``iat``.

        Raises:
            SigningError: the token could not be encoded
        """
        issued_at = (now or datetime.now(timezone.utc)).replace(microsecond=0)
        payload = {
            "sub": subject_id,
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self.validity,
        }
        try:
            return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)
        except (JWTError, TypeError, ValueError) as e:
            logger.error("Token signing failed", extra={"userId": subject_id})
            raise SigningError("Failed to sign token") from e

    def decode(self, token: str) -> Claims:
        """Verify signature and expiry, then return the embedded claims.

        Raises:
            InvalidTokenError: bad signature, expired, or missing claims
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[JWT_ALGORITHM])
        except JWTError as e:
            logger.debug(f"JWT verification failed: {e}")
            raise InvalidTokenError("Invalid authentication credentials") from e

        subject_id = payload.get("sub")
        exp = payload.get("exp")
        if not subject_id or exp is None:
            raise InvalidTokenError("Invalid authentication credentials")

        iat = payload.get("iat")
        return Claims(
            subject_id=subject_id,
            email=payload.get("email", ""),
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
            issued_at=datetime.fromtimestamp(iat, tz=timezone.utc) if iat is not None else None,
        )
