# tests/test_api_users.py

"""Tests for the user directory endpoints."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_create_user(async_client: AsyncClient):
    payload = {"username": "newcomer", "profilePicture": "https://img.example/n.png"}

    response = await async_client.post("/users/", json=payload)

    assert response.status_code == 201
    data = response.json()
    assert data["username"] == "newcomer"
    assert data["profilePicture"] == "https://img.example/n.png"
    assert isinstance(data["id"], int)
    assert "createdAt" in data


@pytest.mark.asyncio
async def test_create_user_duplicate_username_conflicts(async_client: AsyncClient):
    first = await async_client.post("/users/", json={"username": "twin"})
    second = await async_client.post("/users/", json={"username": "twin"})

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["error"] == "Username already taken"


@pytest.mark.asyncio
@pytest.mark.parametrize("username", ["ab", "x" * 31])
async def test_create_user_rejects_bad_usernames(
    async_client: AsyncClient, username: str
):
    response = await async_client.post("/users/", json={"username": username})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_read_user(async_client: AsyncClient, make_user):
    user = await make_user("lookup")

    found = await async_client.get(f"/users/{user.id}")
    missing = await async_client.get("/users/999999")

    assert found.status_code == 200
    assert found.json()["username"] == "lookup"
    assert missing.status_code == 404
    assert "not found" in missing.json()["error"].lower()


@pytest.mark.asyncio
async def test_profile_lists_best_score_per_game(
    async_client: AsyncClient, make_user, auth_headers
):
    user = await make_user("collector")
    headers = auth_headers(user.id)
    for game_id, score in [("snake", 4), ("snake", 11), ("snake", 2), ("quiz", 6)]:
        res = await async_client.post(
            f"/scores/{game_id}", json={"score": score}, headers=headers
        )
        assert res.status_code == 201

    response = await async_client.get("/users/me", headers=headers)

    assert response.status_code == 200
    data = response.json()
    assert data["user"]["username"] == "collector"
    assert data["bestScores"] == {"snake": 11, "quiz": 6}


@pytest.mark.asyncio
async def test_profile_requires_authentication(async_client: AsyncClient):
    response = await async_client.get("/users/me")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_update_profile_rejects_taken_username(
    async_client: AsyncClient, make_user, auth_headers
):
    await make_user("taken")
    user = await make_user("renamer")

    response = await async_client.put(
        "/users/me", json={"username": "taken"}, headers=auth_headers(user.id)
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_update_profile_partial(
    async_client: AsyncClient, make_user, auth_headers
):
    user = await make_user("partial", "https://img.example/old.png")

    response = await async_client.put(
        "/users/me",
        json={"profilePicture": "https://img.example/new.png"},
        headers=auth_headers(user.id),
    )

    assert response.status_code == 200
    data = response.json()
    assert data["username"] == "partial"
    assert data["profilePicture"] == "https://img.example/new.png"
