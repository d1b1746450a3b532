# src/gamehub/api/deps.py

"""Shared FastAPI dependencies."""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import HTTPConnection

from gamehub.auth import verify_access_token
from gamehub.db import models
from gamehub.db.session import get_db
from gamehub.exceptions import UnauthorizedError
from gamehub.notifications import Notifier

# auto_error=False so a missing header becomes our 401 rather than a 403
bearer_scheme = HTTPBearer(auto_error=False)


def get_notifier(connection: HTTPConnection) -> Notifier:
    """The application-wide notifier, shared by HTTP and WebSocket routes."""
    return connection.app.state.notifier  # type: ignore[no-any-return]


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> models.User:
    """Resolve the bearer token to an existing user or raise 401."""
    if credentials is None:
        raise UnauthorizedError("Missing bearer token")

    user_id = verify_access_token(credentials.credentials)
    user = await db.get(models.User, user_id)
    if user is None:
        raise UnauthorizedError("Unknown user")
    return user
