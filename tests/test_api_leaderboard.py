# tests/test_api_leaderboard.py

"""Tests for the leaderboard and recent winner endpoints."""

import pytest
from gamehub.db.models import ScoreRecord
from gamehub.games import GameId
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

# =============================================================================
# Helper Functions
# =============================================================================


async def submit(client: AsyncClient, headers: dict, game_id: str, score: int) -> dict:
    """Helper to submit a score and return the stored record."""
    res = await client.post(
        f"/scores/{game_id}", json={"score": score}, headers=headers
    )
    assert res.status_code == 201
    return res.json()["score"]


# =============================================================================
# Ranked Leaderboard
# =============================================================================


@pytest.mark.asyncio
async def test_leaderboard_ranks_best_score_per_user(
    async_client: AsyncClient, make_user, auth_headers
):
    """A submits 30, 50, 20 and B submits 40 on snake: A leads with 50."""
    alice = await make_user("alice", "https://img.example/alice.png")
    bob = await make_user("bob")

    for score in (30, 50, 20):
        await submit(async_client, auth_headers(alice.id), "snake", score)
    await submit(async_client, auth_headers(bob.id), "snake", 40)

    response = await async_client.get("/leaderboard/snake")

    assert response.status_code == 200
    data = response.json()
    assert [(e["rank"], e["username"], e["score"]) for e in data["leaderboard"]] == [
        (1, "alice", 50),
        (2, "bob", 40),
    ]
    assert data["leaderboard"][0]["profilePicture"] == "https://img.example/alice.png"
    assert data["leaderboard"][1]["profilePicture"] == ""
    assert data["pagination"] == {
        "currentPage": 1,
        "totalPages": 1,
        "totalEntries": 2,
    }


@pytest.mark.asyncio
async def test_best_score_timestamp_is_first_occurrence(
    async_client: AsyncClient, make_user, auth_headers
):
    user = await make_user("repeat")
    first_max = await submit(async_client, auth_headers(user.id), "quiz", 9)
    await submit(async_client, auth_headers(user.id), "quiz", 9)
    await submit(async_client, auth_headers(user.id), "quiz", 3)

    data = (await async_client.get("/leaderboard/quiz")).json()

    assert len(data["leaderboard"]) == 1
    assert data["leaderboard"][0]["score"] == 9
    assert data["leaderboard"][0]["createdAt"] == first_max["createdAt"]


@pytest.mark.asyncio
async def test_leaderboard_pagination_is_continuous(
    async_client: AsyncClient, make_user, auth_headers
):
    for i in range(5):
        user = await make_user(f"player{i}")
        await submit(async_client, auth_headers(user.id), "tictactoe", 100 - i)

    page1 = (await async_client.get("/leaderboard/tictactoe?page=1&limit=2")).json()
    page2 = (await async_client.get("/leaderboard/tictactoe?page=2&limit=2")).json()
    page3 = (await async_client.get("/leaderboard/tictactoe?page=3&limit=2")).json()
    page9 = (await async_client.get("/leaderboard/tictactoe?page=9&limit=2")).json()

    assert [e["rank"] for e in page1["leaderboard"]] == [1, 2]
    assert [e["rank"] for e in page2["leaderboard"]] == [3, 4]
    assert [e["rank"] for e in page3["leaderboard"]] == [5]
    assert page2["leaderboard"][0]["username"] == "player2"
    assert page1["pagination"]["totalPages"] == 3
    assert page1["pagination"]["totalEntries"] == 5

    # Past the last page: empty, not an error
    assert page9["leaderboard"] == []
    assert page9["pagination"]["currentPage"] == 9


@pytest.mark.asyncio
async def test_games_are_ranked_independently(
    async_client: AsyncClient, make_user, auth_headers
):
    user = await make_user("multi")
    await submit(async_client, auth_headers(user.id), "snake", 12)
    await submit(async_client, auth_headers(user.id), "quiz", 7)

    snake = (await async_client.get("/leaderboard/snake")).json()
    quiz = (await async_client.get("/leaderboard/quiz")).json()

    assert [e["score"] for e in snake["leaderboard"]] == [12]
    assert [e["score"] for e in quiz["leaderboard"]] == [7]


@pytest.mark.asyncio
async def test_empty_leaderboard_is_not_an_error(async_client: AsyncClient):
    response = await async_client.get("/leaderboard/quiz")

    assert response.status_code == 200
    assert response.json() == {
        "leaderboard": [],
        "pagination": {"currentPage": 1, "totalPages": 0, "totalEntries": 0},
    }


@pytest.mark.asyncio
async def test_leaderboard_uses_current_display_name(
    async_client: AsyncClient, make_user, auth_headers
):
    """Renaming a user changes existing leaderboard rows."""
    user = await make_user("oldname")
    headers = auth_headers(user.id)
    await submit(async_client, headers, "snake", 5)

    res = await async_client.put(
        "/users/me",
        json={"username": "newname", "profilePicture": "https://img.example/n.png"},
        headers=headers,
    )
    assert res.status_code == 200

    entry = (await async_client.get("/leaderboard/snake")).json()["leaderboard"][0]
    assert entry["username"] == "newname"
    assert entry["profilePicture"] == "https://img.example/n.png"


@pytest.mark.asyncio
async def test_missing_user_shows_placeholder(
    async_client: AsyncClient, db_session: AsyncSession
):
    """Scores whose user no longer exists are still listed, as Unknown."""
    db_session.add(ScoreRecord(user_id=4242, game_id=GameId.SNAKE, score=77))
    await db_session.commit()

    board = (await async_client.get("/leaderboard/snake")).json()
    recent = (await async_client.get("/leaderboard/snake/recent")).json()

    assert board["leaderboard"][0]["username"] == "Unknown"
    assert board["leaderboard"][0]["profilePicture"] == ""
    assert recent["recentWinners"][0]["username"] == "Unknown"


# =============================================================================
# Recent Winners
# =============================================================================


@pytest.mark.asyncio
async def test_recent_winners_newest_first_without_dedup(
    async_client: AsyncClient, make_user, auth_headers
):
    alice = await make_user("alice")
    bob = await make_user("bob")
    await submit(async_client, auth_headers(alice.id), "snake", 10)
    await submit(async_client, auth_headers(bob.id), "snake", 99)
    await submit(async_client, auth_headers(alice.id), "snake", 3)
    await submit(async_client, auth_headers(alice.id), "quiz", 1)

    response = await async_client.get("/leaderboard/snake/recent?limit=10")

    assert response.status_code == 200
    winners = response.json()["recentWinners"]
    assert [(w["username"], w["score"]) for w in winners] == [
        ("alice", 3),
        ("bob", 99),
        ("alice", 10),
    ]
    assert all(w["gameId"] == "snake" for w in winners)
    timestamps = [w["createdAt"] for w in winners]
    assert timestamps == sorted(timestamps, reverse=True)
    assert all(t.endswith(("Z", "+00:00")) for t in timestamps)


@pytest.mark.asyncio
async def test_recent_winners_respects_limit(
    async_client: AsyncClient, make_user, auth_headers
):
    user = await make_user("grinder")
    for score in range(8):
        await submit(async_client, auth_headers(user.id), "tictactoe", score)

    default = (await async_client.get("/leaderboard/tictactoe/recent")).json()
    limited = (await async_client.get("/leaderboard/tictactoe/recent?limit=2")).json()

    assert [w["score"] for w in default["recentWinners"]] == [7, 6, 5, 4, 3]
    assert [w["score"] for w in limited["recentWinners"]] == [7, 6]


@pytest.mark.asyncio
async def test_large_limits_are_accepted(
    async_client: AsyncClient, make_user, auth_headers
):
    user = await make_user("hoarder")
    for score in range(3):
        await submit(async_client, auth_headers(user.id), "quiz", score)

    recent = await async_client.get("/leaderboard/quiz/recent?limit=200")
    board = await async_client.get("/leaderboard/quiz?limit=200")

    assert recent.status_code == 200
    assert len(recent.json()["recentWinners"]) == 3
    assert board.status_code == 200
    assert board.json()["pagination"]["totalPages"] == 1


@pytest.mark.asyncio
async def test_recent_winners_empty(async_client: AsyncClient):
    response = await async_client.get("/leaderboard/tictactoe/recent")

    assert response.status_code == 200
    assert response.json() == {"recentWinners": []}
