# src/gamehub/db/models.py

"""Database models for the GameHub application."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List

from sqlalchemy import DateTime, Enum, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, declarative_base, mapped_column, relationship

from gamehub.games import GameId

Base = declarative_base()


def utcnow() -> datetime:
    """Timezone-aware current time used for all timestamp defaults."""
    return datetime.now(timezone.utc)


# ===============================================
# Users
# ===============================================


class User(Base):
    """A registered hub user.

    Only the display metadata needed by the leaderboards lives here;
    credentials are owned by the authentication provider.
    """

    __tablename__ = "users"
    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String(30), unique=True, nullable=False)
    profile_picture: Mapped[str] = mapped_column(String, default="", nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), default=None, onupdate=utcnow, nullable=True
    )

    scores: Mapped[List["ScoreRecord"]] = relationship(
        back_populates="user", passive_deletes=True
    )

    def __init__(self, username: str, **kw: Any):
        super().__init__(**kw)
        self.username = username


# ===============================================
# Scores (append-only)
# ===============================================


class ScoreRecord(Base):
    """One play result. Rows are inserted once and never updated.

    The autoincrement ``id`` doubles as insertion order for tie-breaking.
    """

    __tablename__ = "scores"
    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    game_id: Mapped[GameId] = mapped_column(
        Enum(
            GameId,
            name="game_id",
            native_enum=False,
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
    )
    score: Mapped[int] = mapped_column(nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    user: Mapped["User"] = relationship(back_populates="scores")

    __table_args__ = (
        Index("ix_scores_game_score", "game_id", "score"),
        Index("ix_scores_game_created", "game_id", "created_at"),
        Index("ix_scores_user_game", "user_id", "game_id"),
    )
