# src/gamehub/config.py

"""Runtime configuration read from environment variables."""

import os

# Database URL from environment variable with SQLite fallback for development
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./gamehub.db")
DB_ECHO = os.getenv("DB_ECHO", "false").lower() == "true"
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "20"))
DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "10"))
DB_POOL_RECYCLE = int(os.getenv("DB_POOL_RECYCLE", "3600"))

# Create missing tables on startup (no migration tooling is shipped)
DB_CREATE_TABLES = os.getenv("DB_CREATE_TABLES", "true").lower() == "true"

# Bearer token verification
JWT_SECRET_KEY = os.getenv(
    "JWT_SECRET_KEY", "gamehub-development-secret-key-change-me"
)
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))

# Live updates: unset REDIS_URL keeps broadcasts inside this process
REDIS_URL = os.getenv("REDIS_URL") or None
NOTIFIER_CHANNEL = os.getenv("NOTIFIER_CHANNEL", "gamehub:score-updates")
NOTIFIER_MAX_PENDING = int(os.getenv("NOTIFIER_MAX_PENDING", "16"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def split_origins(raw: str) -> list[str]:
    """Parse a comma separated origin list, skipping blank entries."""
    origins = (origin.strip() for origin in raw.split(","))
    return [origin for origin in origins if origin]


CORS_ORIGINS = split_origins(os.getenv("CORS_ORIGINS", "*"))
