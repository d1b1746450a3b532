# src/gamehub/notifications/base.py

"""Publish/subscribe contract shared by every notifier backend."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from gamehub.exceptions import InvalidGameIdError
from gamehub.games import GameId, parse_game_id

if TYPE_CHECKING:
    from .memory import Subscription

SCORE_UPDATE = "scoreUpdate"


@dataclass(frozen=True)
class ScoreUpdateEvent:
    """Signal that a game's leaderboard may have changed.

    Carries no scores: receivers re-query the leaderboard.
    """

    game_id: GameId

    def to_message(self) -> dict[str, Any]:
        return {"type": SCORE_UPDATE, "gameId": self.game_id.value}

    def to_json(self) -> str:
        return json.dumps(self.to_message())

    @classmethod
    def from_json(cls, raw: str | bytes) -> "ScoreUpdateEvent":
        """Parse a wire message; raises ValueError for anything malformed."""
        try:
            message = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"Not JSON: {e}") from e
        if not isinstance(message, dict) or message.get("type") != SCORE_UPDATE:
            raise ValueError(f"Unexpected message: {message!r}")
        try:
            return cls(game_id=parse_game_id(message.get("gameId")))
        except InvalidGameIdError as e:
            raise ValueError(f"Unexpected game id in {message!r}") from e


@runtime_checkable
class Connection(Protocol):
    """A live client that can receive JSON messages."""

    def is_ready(self) -> bool:
        """True while the connection can accept a send."""
        ...

    async def send_json(self, message: dict[str, Any]) -> None: ...


class Notifier(Protocol):
    """Broadcast capability used by score ingestion and the live channel."""

    def subscribe(self, connection: Connection) -> "Subscription": ...

    def unsubscribe(self, subscription: "Subscription") -> None: ...

    async def publish(self, event: ScoreUpdateEvent) -> int: ...

    async def start(self) -> None: ...

    async def close(self) -> None: ...
