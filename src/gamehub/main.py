# src/gamehub/main.py

"""Main FastAPI application for GameHub."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from gamehub import config
from gamehub.api import leaderboard, live, scores, users
from gamehub.db.models import Base
from gamehub.db.session import engine
from gamehub.exceptions import (
    ConflictError,
    GameHubError,
    ResourceNotFoundError,
    StoreFailure,
    UnauthorizedError,
    ValidationError,
)
from gamehub.middleware.logging import RequestLoggingMiddleware, configure_logging
from gamehub.notifications import build_notifier
from gamehub.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI lifespan context manager for startup and shutdown events."""
    if config.DB_CREATE_TABLES:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    await app.state.notifier.start()
    yield
    await app.state.notifier.close()
    await engine.dispose()


app = FastAPI(title="GameHub API", lifespan=lifespan)

# Created eagerly so the live channel works even without lifespan events
app.state.notifier = build_notifier()

# Add middleware (order matters - first added = outermost)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(
    status_code: int,
    message: str,
    exc: Exception | None = None,
    details: list | None = None,
    **kwargs,
) -> JSONResponse:
    body = ErrorResponse(
        error=message,
        error_type=type(exc).__name__ if exc is not None else None,
        details=details,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
        **kwargs,
    )


# =============================================================================
# Global Exception Handlers
# =============================================================================


@app.exception_handler(ValidationError)
async def validation_error_handler(
    request: Request, exc: ValidationError
) -> JSONResponse:
    """Handle invalid game ids, scores and pagination -> 400."""
    logger.warning("Validation error: %s", exc.message, extra=exc.details)
    return _error_response(400, exc.message, exc)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed bodies and query parameters as 400 instead of 422."""
    logger.warning("Request validation failed: %s", exc.errors())
    return _error_response(
        400, "Invalid request", details=jsonable_encoder(exc.errors())
    )


@app.exception_handler(UnauthorizedError)
async def unauthorized_handler(
    request: Request, exc: UnauthorizedError
) -> JSONResponse:
    """Handle missing or invalid credentials -> 401."""
    logger.warning("Unauthorized: %s", exc.message)
    return _error_response(
        401, exc.message, exc, headers={"WWW-Authenticate": "Bearer"}
    )


@app.exception_handler(ResourceNotFoundError)
async def resource_not_found_handler(
    request: Request, exc: ResourceNotFoundError
) -> JSONResponse:
    """Handle all resource not found errors -> 404."""
    logger.warning("Resource not found: %s", exc.message, extra=exc.details)
    return _error_response(404, exc.message, exc)


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    """Handle unique field conflicts -> 409."""
    logger.warning("Conflict: %s", exc.message, extra=exc.details)
    return _error_response(409, exc.message, exc)


@app.exception_handler(StoreFailure)
async def store_failure_handler(request: Request, exc: StoreFailure) -> JSONResponse:
    """Handle persistence failures -> 500 with the opaque public message."""
    logger.error("Store failure: %s", exc.message, extra=exc.details)
    return _error_response(500, exc.message)


@app.exception_handler(GameHubError)
async def gamehub_error_handler(request: Request, exc: GameHubError) -> JSONResponse:
    """Catch-all for any other GameHub errors -> 500."""
    logger.error("GameHub error: %s", exc.message, extra=exc.details, exc_info=True)
    return _error_response(500, "Internal server error")


@app.exception_handler(SQLAlchemyError)
async def sqlalchemy_error_handler(
    request: Request, exc: SQLAlchemyError
) -> JSONResponse:
    """Catch-all for database errors that escaped the service layer."""
    logger.error("Database error: %s", exc, exc_info=True)
    return _error_response(500, "An internal database error occurred")


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions."""
    logger.error("Unhandled exception: %s", exc, exc_info=True)
    return _error_response(500, "Internal server error")


# Include routers into the main application
app.include_router(leaderboard.router)
app.include_router(scores.router)
app.include_router(users.router)
app.include_router(live.router)


@app.get("/", tags=["Root"])
async def read_root() -> dict[str, str]:
    """Provides a welcome message."""
    return {"message": "Welcome to the GameHub API"}


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}
