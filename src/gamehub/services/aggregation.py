# src/gamehub/services/aggregation.py

"""Pure ranking functions over score rows.

Nothing here touches the database: callers hand in rows fetched from the
score store and get plain value objects back. Keeping the per-user
reduction isolated means it can be swapped for an incrementally maintained
best-score table without changing what the leaderboard endpoints return.

Ordering policy for equal scores: the earliest achiever ranks first
(``created_at`` ascending, then insertion ``id`` ascending).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Sequence

from gamehub.exceptions import InvalidPaginationError


@dataclass(frozen=True)
class ScoreRow:
    """Minimal projection of a ScoreRecord used for ranking."""

    id: int
    user_id: int
    score: int
    created_at: datetime


@dataclass(frozen=True)
class RankedScore:
    """A user's best score with its global 1-based rank."""

    rank: int
    best: ScoreRow


@dataclass(frozen=True)
class LeaderboardPage:
    """One page of a ranked leaderboard plus totals across all pages."""

    entries: list[RankedScore]
    page: int
    page_size: int
    total_entries: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_entries / self.page_size)


def _achievement_key(row: ScoreRow) -> tuple:
    # Higher score first, then earliest achievement
    return (-row.score, row.created_at, row.id)


def _is_better(candidate: ScoreRow, current: ScoreRow) -> bool:
    return _achievement_key(candidate) < _achievement_key(current)


def reduce_best_scores(rows: Iterable[ScoreRow]) -> list[ScoreRow]:
    """Reduce raw score rows to each user's best, sorted for ranking.

    Args:
        rows: Every score row for a single game, in any order.

    Returns:
        One row per user, sorted by score descending with ties going to
        the earliest achiever.
    """
    best: dict[int, ScoreRow] = {}
    for row in rows:
        current = best.get(row.user_id)
        # Among rows sharing the maximum score, the first achievement wins
        if current is None or _is_better(row, current):
            best[row.user_id] = row
    return sorted(best.values(), key=_achievement_key)


def paginate(
    ranked: Sequence[ScoreRow], page: int = 1, page_size: int = 10
) -> LeaderboardPage:
    """Slice an already ranked sequence and attach global ranks.

    Pages past the end yield no entries rather than an error.
    """
    if page < 1:
        raise InvalidPaginationError("page", page)
    if page_size < 1:
        raise InvalidPaginationError("page_size", page_size)

    offset = (page - 1) * page_size
    window = ranked[offset : offset + page_size]
    entries = [
        RankedScore(rank=offset + i + 1, best=row) for i, row in enumerate(window)
    ]
    return LeaderboardPage(
        entries=entries,
        page=page,
        page_size=page_size,
        total_entries=len(ranked),
    )


def build_leaderboard(
    rows: Iterable[ScoreRow], page: int = 1, page_size: int = 10
) -> LeaderboardPage:
    """Reduce, rank and paginate the score rows of one game."""
    return paginate(reduce_best_scores(rows), page=page, page_size=page_size)
