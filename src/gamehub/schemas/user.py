# src/gamehub/schemas/user.py

"""Pydantic schemas for the User resource."""

from pydantic import Field

from gamehub.games import GameId

from .common import APIModel, UTCDateTime


# ===============================================
# Base Schema: Defines shared attributes for creation
# ===============================================
class UserBase(APIModel):
    """Shared properties for a user."""

    username: str = Field(..., min_length=3, max_length=30)
    profile_picture: str = ""


class UserCreate(UserBase):
    """Properties to receive via API on create."""

    pass


# ===============================================
# Update Schema: Defines all fields as optional
# ===============================================
class UserUpdate(APIModel):
    """Properties to receive via API on update, all optional."""

    username: str | None = Field(default=None, min_length=3, max_length=30)
    profile_picture: str | None = None


# ===============================================
# Read Schema: Defines attributes for returning data
# ===============================================
class UserRead(UserBase):
    """Properties to return to the client."""

    id: int
    created_at: UTCDateTime


class UserProfile(APIModel):
    """A user together with their best score in every game they played."""

    user: UserRead
    best_scores: dict[GameId, int] = Field(default_factory=dict)
