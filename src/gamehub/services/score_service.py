# src/gamehub/services/score_service.py

"""Business logic for score ingestion."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gamehub.db import models, score_store
from gamehub.exceptions import InvalidScoreError, StoreFailure
from gamehub.games import MAX_SCORE, GameId, parse_game_id
from gamehub.notifications import Notifier, ScoreUpdateEvent

logger = logging.getLogger(__name__)


def validate_score(score: Any) -> int:
    """Accept ints from 0 to MAX_SCORE; bools are rejected even though they are ints."""
    if isinstance(score, bool) or not isinstance(score, int):
        raise InvalidScoreError(score)
    if not 0 <= score <= MAX_SCORE:
        raise InvalidScoreError(score)
    return score


async def _notify(notifier: Notifier, game_id: GameId) -> None:
    try:
        await notifier.publish(ScoreUpdateEvent(game_id=game_id))
    except Exception as e:
        # The score is already committed; a missed live update is acceptable.
        logger.warning(
            "Score update notification failed",
            extra={"game_id": game_id.value, "error": str(e)},
            exc_info=True,
        )


async def submit_score(
    db: AsyncSession,
    notifier: Notifier,
    user_id: int,
    game_id: str | GameId,
    score: Any,
) -> models.ScoreRecord:
    """
    Validate, persist and announce a new score.

    Every valid submission is stored, including scores lower than the
    user's best. Listeners are notified only after the commit succeeds,
    so a client reacting to the notification will read the new record.

    Raises:
        InvalidGameIdError: If ``game_id`` is not a hosted game
        InvalidScoreError: If ``score`` is not an integer from 0 to MAX_SCORE
        StoreFailure: If the record could not be persisted
    """
    game = parse_game_id(game_id)
    value = validate_score(score)

    logger.info(
        "Processing score submission",
        extra={"user_id": user_id, "game_id": game.value, "score": value},
    )

    try:
        record = await score_store.append_score(db, user_id, game, value)
    except SQLAlchemyError as e:
        logger.error(
            "Failed to persist score",
            extra={"user_id": user_id, "game_id": game.value, "error": str(e)},
            exc_info=True,
        )
        await db.rollback()
        raise StoreFailure(
            "Server error submitting score",
            details={"user_id": user_id, "game_id": game.value},
        ) from e

    await _notify(notifier, game)
    logger.info(
        "Score recorded", extra={"score_id": record.id, "game_id": game.value}
    )
    return record
