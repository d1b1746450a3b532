# src/gamehub/exceptions.py

"""Custom exception hierarchy for GameHub.

Every error carries a human-readable ``message`` plus a ``details`` dict for
logging. The API layer maps each branch of the hierarchy to one HTTP status:

- ValidationError -> 400
- UnauthorizedError -> 401
- ResourceNotFoundError -> 404
- ConflictError -> 409
- StoreFailure -> 500 (message is safe to show to clients)
"""

from __future__ import annotations

from typing import Any


class GameHubError(Exception):
    """Base exception for all GameHub errors.

    Attributes:
        message: Human-readable error description
        details: Optional dict with additional context for logging/debugging
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


# =============================================================================
# Validation Errors (HTTP 400)
# =============================================================================


class ValidationError(GameHubError):
    """Base class for input validation errors."""

    pass


class InvalidGameIdError(ValidationError):
    """Raised when a game identifier is not one of the hosted games."""

    def __init__(self, game_id: Any) -> None:
        super().__init__(
            message="Invalid game ID",
            details={"game_id": str(game_id)},
        )


class InvalidScoreError(ValidationError):
    """Raised when a submitted score is not a non-negative integer or is too large."""

    def __init__(self, score: Any) -> None:
        super().__init__(
            message="Score must be a non-negative integer in range",
            details={"score": repr(score)},
        )


class InvalidPaginationError(ValidationError):
    """Raised when page, page size or limit are below 1."""

    def __init__(self, name: str, value: int) -> None:
        super().__init__(
            message=f"{name} must be at least 1, got {value}",
            details={name: value},
        )


# =============================================================================
# Authentication Errors (HTTP 401)
# =============================================================================


class UnauthorizedError(GameHubError):
    """Raised when a bearer credential is missing, invalid or expired."""

    def __init__(self, reason: str = "Not authenticated") -> None:
        super().__init__(message=reason)


# =============================================================================
# Resource Not Found Errors (HTTP 404)
# =============================================================================


class ResourceNotFoundError(GameHubError):
    """Base class for resource not found errors."""

    pass


class UserNotFoundError(ResourceNotFoundError):
    """Raised when a user ID does not exist."""

    def __init__(self, user_id: int) -> None:
        super().__init__(
            message=f"User with ID {user_id} not found",
            details={"user_id": user_id},
        )


# =============================================================================
# Conflict Errors (HTTP 409)
# =============================================================================


class ConflictError(GameHubError):
    """Base class for unique constraint conflicts."""

    pass


class UsernameTakenError(ConflictError):
    """Raised when a username is already in use."""

    def __init__(self, username: str) -> None:
        super().__init__(
            message="Username already taken",
            details={"username": username},
        )


# =============================================================================
# Infrastructure Errors (HTTP 500)
# =============================================================================


class StoreFailure(GameHubError):
    """Raised when the score store cannot complete an operation.

    The message is the opaque text returned to clients; the underlying
    database error is kept in ``details`` and the exception chain only.
    """

    pass
