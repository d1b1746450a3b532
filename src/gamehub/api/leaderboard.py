# src/gamehub/api/leaderboard.py

"""API endpoints for game leaderboards."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from gamehub.db.session import get_db
from gamehub.schemas.leaderboard import LeaderboardResponse, RecentWinnersResponse
from gamehub.services import leaderboard_service

router = APIRouter(prefix="/leaderboard", tags=["Leaderboard"])


@router.get("/{game_id}", response_model=LeaderboardResponse)
async def get_leaderboard(
    game_id: str,
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    limit: int = Query(
        leaderboard_service.DEFAULT_PAGE_SIZE, ge=1, description="Page size"
    ),
    db: AsyncSession = Depends(get_db),
) -> LeaderboardResponse:
    """
    Get the ranking of best scores for a game.

    - **game_id**: One of `tictactoe`, `snake`, `quiz`
    - **page**: Page number, pages past the end are empty
    - **limit**: Entries per page

    Raises:
        400 Bad Request: If the game ID is not recognised.
    """
    return await leaderboard_service.get_leaderboard(
        db, game_id, page=page, page_size=limit
    )


@router.get("/{game_id}/recent", response_model=RecentWinnersResponse)
async def get_recent_winners(
    game_id: str,
    limit: int = Query(
        leaderboard_service.DEFAULT_RECENT_LIMIT,
        ge=1,
        description="Max submissions to return",
    ),
    db: AsyncSession = Depends(get_db),
) -> RecentWinnersResponse:
    """
    Get the latest score submissions for a game, newest first.

    Raises:
        400 Bad Request: If the game ID is not recognised.
    """
    return await leaderboard_service.get_recent_winners(db, game_id, limit=limit)
