# src/gamehub/auth.py

"""Bearer token verification.

Tokens are HS256 JWTs whose ``sub`` claim is the user id. Issuing tokens
at login belongs to the account service; ``create_access_token`` exists so
that service and the test-suite share one encoding.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import jwt

from gamehub import config
from gamehub.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)


def create_access_token(
    user_id: int,
    expires_delta: timedelta | None = None,
    secret_key: str | None = None,
) -> str:
    """Encode a signed token identifying ``user_id``."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    now = datetime.now(timezone.utc)
    payload = {"sub": str(user_id), "iat": now, "exp": now + expires_delta}
    return jwt.encode(
        payload, secret_key or config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM
    )


def verify_access_token(token: str) -> int:
    """Return the user id carried by ``token``.

    Raises:
        UnauthorizedError: If the token is expired, tampered with or malformed.
    """
    try:
        payload = jwt.decode(
            token,
            config.JWT_SECRET_KEY,
            algorithms=[config.JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token has expired") from None
    except jwt.InvalidTokenError as e:
        logger.debug("Rejected bearer token", extra={"error": str(e)})
        raise UnauthorizedError("Invalid token") from None

    try:
        return int(payload["sub"])
    except (TypeError, ValueError):
        raise UnauthorizedError("Invalid token") from None
