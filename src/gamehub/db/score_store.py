# src/gamehub/db/score_store.py

"""Access layer for the append-only score table.

Only inserts and reads are exposed: score records are never updated or
deleted once written. Database errors propagate to the caller; the service
layer decides how they are reported.
"""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gamehub.db.models import ScoreRecord
from gamehub.games import GameId
from gamehub.services.aggregation import ScoreRow

logger = logging.getLogger(__name__)


async def append_score(
    db: AsyncSession, user_id: int, game_id: GameId, score: int
) -> ScoreRecord:
    """Insert and commit a single score record, returning the stored row."""
    record = ScoreRecord(user_id=user_id, game_id=game_id, score=score)
    db.add(record)
    await db.commit()
    await db.refresh(record)
    logger.debug(
        "Score record appended",
        extra={"score_id": record.id, "user_id": user_id, "game_id": game_id.value},
    )
    return record


async def fetch_game_rows(db: AsyncSession, game_id: GameId) -> list[ScoreRow]:
    """Every score of a game as lightweight rows, highest score first."""
    query = (
        select(
            ScoreRecord.id,
            ScoreRecord.user_id,
            ScoreRecord.score,
            ScoreRecord.created_at,
        )
        .where(ScoreRecord.game_id == game_id)
        .order_by(ScoreRecord.score.desc(), ScoreRecord.id)
    )
    result = await db.execute(query)
    return [
        ScoreRow(
            id=row.id,
            user_id=row.user_id,
            score=row.score,
            created_at=row.created_at,
        )
        for row in result
    ]


async def fetch_recent(
    db: AsyncSession, game_id: GameId, limit: int
) -> list[ScoreRecord]:
    """The ``limit`` newest score records of a game, newest first."""
    query = (
        select(ScoreRecord)
        .where(ScoreRecord.game_id == game_id)
        .order_by(ScoreRecord.created_at.desc(), ScoreRecord.id.desc())
        .limit(limit)
    )
    result = await db.execute(query)
    return list(result.scalars().all())


async def fetch_best_by_game(db: AsyncSession, user_id: int) -> dict[GameId, int]:
    """A user's maximum score per game they have played."""
    query = (
        select(ScoreRecord.game_id, func.max(ScoreRecord.score))
        .where(ScoreRecord.user_id == user_id)
        .group_by(ScoreRecord.game_id)
    )
    result = await db.execute(query)
    return {game_id: best for game_id, best in result.all()}
