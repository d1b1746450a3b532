# src/gamehub/api/users.py

"""API endpoints for the user directory."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from gamehub.api.deps import get_current_user
from gamehub.db import models
from gamehub.db.session import get_db
from gamehub.schemas import user as user_schema
from gamehub.services import user_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "/",
    response_model=user_schema.UserRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    user_in: user_schema.UserCreate, db: AsyncSession = Depends(get_db)
) -> models.User:
    """
    Create a new user.

    - **username**: Unique display name (3-30 characters).
    - **profilePicture**: Optional avatar URL.

    Raises:
        409 Conflict: If the username is already taken.
    """
    return await user_service.create_user(db, user_in)


@router.get("/me", response_model=user_schema.UserProfile)
async def read_own_profile(
    user: models.User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> user_schema.UserProfile:
    """Return the caller's profile and best score per game."""
    return await user_service.get_profile(db, user.id)


@router.put("/me", response_model=user_schema.UserRead)
async def update_own_profile(
    user_in: user_schema.UserUpdate,
    user: models.User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> models.User:
    """
    Update the caller's username and/or profile picture.

    Raises:
        409 Conflict: If the new username is already taken.
    """
    return await user_service.update_user(db, user.id, user_in)


@router.get("/{user_id}", response_model=user_schema.UserRead)
async def read_user(user_id: int, db: AsyncSession = Depends(get_db)) -> models.User:
    """
    Retrieve a single user by their ID.
    """
    return await user_service.get_user(db, user_id)
