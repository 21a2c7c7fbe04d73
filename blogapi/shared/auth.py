"""
Bearer Token Authentication

Stateless session tokens for the blog API. A token is an HS256 JWT carrying
the user id (`sub`), the username and the issue time, signed with the
process-wide SECRET. Nothing about a session is stored server-side.
"""

import os
import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from blogapi.shared.errors import InvalidToken, MissingToken

# Setup logging
logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

# Get signing secret and environment from environment variables
SECRET = os.getenv("SECRET")
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
TOKEN_EXPIRE_MINUTES = os.getenv("TOKEN_EXPIRE_MINUTES")

DEV_SECRET = "dev-secret-change-in-production"

# FastAPI dependency for the Authorization: Bearer <token> header.
# auto_error=False so a missing header reaches the validator and gets
# the same "invalid token" answer as a bad one.
bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_token_secret() -> str:
    """
    Resolve the signing secret once for the lifetime of the process.

    Raises:
        RuntimeError: If SECRET is not set in production
    """
    if SECRET:
        return SECRET
    if ENVIRONMENT == "production":
        raise RuntimeError(
            "SECRET must be set in production. "
            "Generate one with: python -c 'import secrets; print(secrets.token_urlsafe(32))'"
        )
    logger.warning(
        "SECRET not set - signing session tokens with the development secret. "
        "Set SECRET environment variable for security."
    )
    return DEV_SECRET


def get_token_lifetime() -> Optional[timedelta]:
    """Token lifetime, or None when tokens never expire (the default)."""
    if not TOKEN_EXPIRE_MINUTES:
        return None
    return timedelta(minutes=int(TOKEN_EXPIRE_MINUTES))


def issue_token(
    user_id: int,
    username: str,
    secret: str,
    lifetime: Optional[timedelta] = None,
) -> str:
    """
    Sign a session token for a user.

    Args:
        user_id: Id of the authenticated user, stored as the `sub` claim
        username: Username, carried for clients that decode the token
        secret: Signing secret
        lifetime: Optional expiry; tokens without one stay valid until the
            secret changes

    Returns:
        Encoded JWT
    """
    issued_at = datetime.now(timezone.utc)
    claims = {
        "sub": str(user_id),
        "username": username,
        "iat": int(issued_at.timestamp()),
    }
    if lifetime is not None:
        claims["exp"] = int((issued_at + lifetime).timestamp())
    return jwt.encode(claims, secret, algorithm=ALGORITHM)


class SessionValidator:
    """Recovers the caller's user id from a bearer token. No I/O."""

    def __init__(self, secret: str):
        self._secret = secret

    def validate(self, raw_token: Optional[str]) -> int:
        """
        Verify a raw bearer token and return the embedded user id.

        Raises:
            MissingToken: If no token was presented
            InvalidToken: If the signature does not verify, the token has
                expired, or it carries no usable user id
        """
        if not raw_token:
            raise MissingToken()

        try:
            claims = jwt.decode(raw_token, self._secret, algorithms=[ALGORITHM])
        except JWTError as e:
            logger.warning(f"Rejected session token: {e}")
            raise InvalidToken()

        subject = claims.get("sub")
        try:
            return int(subject)
        except (TypeError, ValueError):
            logger.warning("Rejected session token without a user id")
            raise InvalidToken()


def get_session_validator(secret: str = Depends(get_token_secret)) -> SessionValidator:
    return SessionValidator(secret)


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> Optional[str]:
    """
    Dependency returning the raw bearer token, or None when absent.

    Usage in endpoints:
    @router.post("/protected")
    def protected_endpoint(token: Optional[str] = Depends(get_bearer_token)):
        user_id = validator.validate(token)
    """
    if credentials is None:
        return None
    return credentials.credentials
