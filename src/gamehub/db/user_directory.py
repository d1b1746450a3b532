# src/gamehub/db/user_directory.py

"""Resolve current display metadata for users shown on leaderboards."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gamehub.db.models import User

# Shown in place of users that no longer exist
UNKNOWN_USERNAME = "Unknown"


@dataclass(frozen=True)
class UserDisplay:
    username: str
    profile_picture: str = ""


PLACEHOLDER = UserDisplay(username=UNKNOWN_USERNAME)


async def lookup_display(
    db: AsyncSession, user_ids: Iterable[int]
) -> dict[int, UserDisplay]:
    """Map each requested user id to its display metadata.

    Ids without a matching user resolve to the placeholder instead of
    raising, so a deleted account never breaks a leaderboard.
    """
    wanted = set(user_ids)
    if not wanted:
        return {}

    query = select(User.id, User.username, User.profile_picture).where(
        User.id.in_(wanted)
    )
    result = await db.execute(query)
    found = {
        row.id: UserDisplay(
            username=row.username, profile_picture=row.profile_picture or ""
        )
        for row in result
    }
    return {user_id: found.get(user_id, PLACEHOLDER) for user_id in wanted}
