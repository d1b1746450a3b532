# src/gamehub/schemas/score.py

"""Pydantic schemas for score submission."""

from pydantic import Field, StrictInt

from gamehub.games import MAX_SCORE, GameId

from .common import APIModel, UTCDateTime


class ScoreSubmit(APIModel):
    """Payload of a score submission. Floats, strings and booleans are rejected."""

    score: StrictInt = Field(
        ..., ge=0, le=MAX_SCORE, description="Final score of the play"
    )


class ScoreRead(APIModel):
    """A stored score record."""

    id: int
    user_id: int
    game_id: GameId
    score: int
    created_at: UTCDateTime


class ScoreSubmitted(APIModel):
    message: str = "Score submitted successfully"
    score: ScoreRead
