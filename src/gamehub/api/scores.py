# src/gamehub/api/scores.py

"""API endpoint for submitting scores."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from gamehub.api.deps import get_current_user, get_notifier
from gamehub.db import models
from gamehub.db.session import get_db
from gamehub.notifications import Notifier
from gamehub.schemas import score as score_schema
from gamehub.services import score_service

router = APIRouter(prefix="/scores", tags=["Scores"])


@router.post(
    "/{game_id}",
    response_model=score_schema.ScoreSubmitted,
    status_code=status.HTTP_201_CREATED,
)
async def submit_score(
    game_id: str,
    score_in: score_schema.ScoreSubmit,
    user: models.User = Depends(get_current_user),
    notifier: Notifier = Depends(get_notifier),
    db: AsyncSession = Depends(get_db),
) -> score_schema.ScoreSubmitted:
    """
    Record a finished play for the authenticated user.

    Connected live viewers receive a `scoreUpdate` message once stored.

    Raises:
        400 Bad Request: Unknown game ID or a score that is not an
            integer from 0 to 2147483647.
        401 Unauthorized: Missing or invalid bearer token.
    """
    record = await score_service.submit_score(
        db, notifier, user_id=user.id, game_id=game_id, score=score_in.score
    )
    return score_schema.ScoreSubmitted(
        score=score_schema.ScoreRead.model_validate(record)
    )
