# src/gamehub/services/leaderboard_service.py

"""Read-side orchestration: store reads, ranking and display enrichment."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gamehub.db import score_store
from gamehub.db.user_directory import PLACEHOLDER, lookup_display
from gamehub.exceptions import InvalidPaginationError, StoreFailure
from gamehub.games import GameId, parse_game_id
from gamehub.schemas.leaderboard import (
    LeaderboardEntry,
    LeaderboardResponse,
    Pagination,
    RecentWinner,
    RecentWinnersResponse,
)
from gamehub.services.aggregation import build_leaderboard

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
DEFAULT_RECENT_LIMIT = 5


async def get_leaderboard(
    db: AsyncSession,
    game_id: str | GameId,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> LeaderboardResponse:
    """
    Rank users by their best score in one game and return a single page.

    Every call recomputes the ranking from the raw score log; display
    names and avatars are looked up fresh for the users on the page.

    Raises:
        InvalidGameIdError: If ``game_id`` is not a hosted game
        InvalidPaginationError: If ``page`` or ``page_size`` is below 1
        StoreFailure: If the database cannot be read
    """
    game = parse_game_id(game_id)

    try:
        rows = await score_store.fetch_game_rows(db, game)
        board = build_leaderboard(rows, page=page, page_size=page_size)
        users = await lookup_display(db, (e.best.user_id for e in board.entries))
    except SQLAlchemyError as e:
        logger.error(
            "Failed to read leaderboard",
            extra={"game_id": game.value, "error": str(e)},
            exc_info=True,
        )
        raise StoreFailure(
            "Server error fetching leaderboard", details={"game_id": game.value}
        ) from e

    entries = []
    for entry in board.entries:
        display = users.get(entry.best.user_id, PLACEHOLDER)
        entries.append(
            LeaderboardEntry(
                rank=entry.rank,
                username=display.username,
                profile_picture=display.profile_picture,
                score=entry.best.score,
                created_at=entry.best.created_at,
            )
        )

    return LeaderboardResponse(
        leaderboard=entries,
        pagination=Pagination(
            current_page=board.page,
            total_pages=board.total_pages,
            total_entries=board.total_entries,
        ),
    )


async def get_recent_winners(
    db: AsyncSession,
    game_id: str | GameId,
    limit: int = DEFAULT_RECENT_LIMIT,
) -> RecentWinnersResponse:
    """
    List the newest submissions for one game, newest first.

    Raises:
        InvalidGameIdError: If ``game_id`` is not a hosted game
        InvalidPaginationError: If ``limit`` is below 1
        StoreFailure: If the database cannot be read
    """
    game = parse_game_id(game_id)
    if limit < 1:
        raise InvalidPaginationError("limit", limit)

    try:
        records = await score_store.fetch_recent(db, game, limit)
        users = await lookup_display(db, (r.user_id for r in records))
    except SQLAlchemyError as e:
        logger.error(
            "Failed to read recent winners",
            extra={"game_id": game.value, "error": str(e)},
            exc_info=True,
        )
        raise StoreFailure(
            "Server error fetching recent winners", details={"game_id": game.value}
        ) from e

    winners = [
        RecentWinner(
            username=users.get(r.user_id, PLACEHOLDER).username,
            profile_picture=users.get(r.user_id, PLACEHOLDER).profile_picture,
            game_id=r.game_id,
            score=r.score,
            created_at=r.created_at,
        )
        for r in records
    ]
    return RecentWinnersResponse(recent_winners=winners)
