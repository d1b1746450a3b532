# src/gamehub/schemas/__init__.py

"""Pydantic schemas for API validation and serialization."""

from .common import APIModel, ErrorResponse
from .leaderboard import (
    LeaderboardEntry,
    LeaderboardResponse,
    Pagination,
    RecentWinner,
    RecentWinnersResponse,
)
from .score import ScoreRead, ScoreSubmit, ScoreSubmitted
from .user import UserCreate, UserProfile, UserRead, UserUpdate

__all__ = [
    # Common
    "APIModel",
    "ErrorResponse",
    # Leaderboard
    "LeaderboardEntry",
    "LeaderboardResponse",
    "Pagination",
    "RecentWinner",
    "RecentWinnersResponse",
    # Score
    "ScoreRead",
    "ScoreSubmit",
    "ScoreSubmitted",
    # User
    "UserCreate",
    "UserProfile",
    "UserRead",
    "UserUpdate",
]
