# src/gamehub/games.py

"""The closed set of games that accept scores."""

from __future__ import annotations

from enum import Enum

from .exceptions import InvalidGameIdError

# Largest score the 32-bit INTEGER score column holds on every backend
MAX_SCORE = 2**31 - 1


class GameId(str, Enum):
    """Identifiers of the games hosted by the hub."""

    TICTACTOE = "tictactoe"
    SNAKE = "snake"
    QUIZ = "quiz"


def parse_game_id(value: str | GameId) -> GameId:
    """Convert raw input into a GameId, raising InvalidGameIdError otherwise."""
    if isinstance(value, GameId):
        return value
    try:
        return GameId(value)
    except ValueError:
        raise InvalidGameIdError(value) from None
