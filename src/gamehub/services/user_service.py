# src/gamehub/services/user_service.py

"""Business logic for the user directory."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from gamehub.db import models, score_store
from gamehub.exceptions import UsernameTakenError, UserNotFoundError
from gamehub.schemas import user as user_schema

logger = logging.getLogger(__name__)


async def get_user(db: AsyncSession, user_id: int) -> models.User:
    user = await db.get(models.User, user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user


async def create_user(
    db: AsyncSession, user_in: user_schema.UserCreate
) -> models.User:
    """
    Register a user in the directory.

    Raises:
        UsernameTakenError: If the username is already in use.
    """
    new_user = models.User(**user_in.model_dump())
    try:
        db.add(new_user)
        await db.commit()
        await db.refresh(new_user)
    except IntegrityError:
        await db.rollback()
        raise UsernameTakenError(user_in.username)

    logger.info("User created", extra={"user_id": new_user.id})
    return new_user


async def update_user(
    db: AsyncSession, user_id: int, user_in: user_schema.UserUpdate
) -> models.User:
    """
    Change a user's display name and/or avatar.

    New values show up on every leaderboard immediately, since entries
    are joined with the directory at query time.

    Raises:
        UserNotFoundError: If the user doesn't exist.
        UsernameTakenError: If the new name belongs to someone else.
    """
    user = await get_user(db, user_id)

    # Only apply the fields that were actually sent
    update_data = user_in.model_dump(exclude_unset=True, exclude_none=True)
    for key, value in update_data.items():
        setattr(user, key, value)

    try:
        await db.commit()
        await db.refresh(user)
    except IntegrityError:
        await db.rollback()
        raise UsernameTakenError(user_in.username or "")

    return user


async def get_profile(db: AsyncSession, user_id: int) -> user_schema.UserProfile:
    """A user plus their best score in each game they have played."""
    user = await get_user(db, user_id)
    best = await score_store.fetch_best_by_game(db, user_id)
    return user_schema.UserProfile(
        user=user_schema.UserRead.model_validate(user),
        best_scores=best,
    )
