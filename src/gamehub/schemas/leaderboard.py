# src/gamehub/schemas/leaderboard.py

"""Leaderboard and recent winner schemas."""

from pydantic import Field

from gamehub.games import GameId

from .common import APIModel, UTCDateTime


class LeaderboardEntry(APIModel):
    """Single row of a game leaderboard.

    Attributes:
        rank: Position across all pages (1-indexed)
        username: Current display name of the user
        profile_picture: Current avatar reference, empty when unset
        score: The user's best score in this game
        created_at: When that best score was first achieved
    """

    rank: int = Field(..., ge=1, description="Position in leaderboard (1-indexed)")
    username: str
    profile_picture: str = ""
    score: int = Field(..., ge=0)
    created_at: UTCDateTime


class Pagination(APIModel):
    current_page: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)
    total_entries: int = Field(..., ge=0, description="Distinct users with a score")


class LeaderboardResponse(APIModel):
    leaderboard: list[LeaderboardEntry]
    pagination: Pagination


class RecentWinner(APIModel):
    """One recent submission; the same user may appear several times."""

    username: str
    profile_picture: str = ""
    game_id: GameId
    score: int = Field(..., ge=0)
    created_at: UTCDateTime


class RecentWinnersResponse(APIModel):
    recent_winners: list[RecentWinner]
