"""Tests for API endpoints."""

import pytest
import pytest_asyncio
from datetime import datetime, timedelta
from httpx import AsyncClient, ASGITransport

from api.main import app
from api.routes import game as game_routes
from api.session import get_session_store
from core.cards import Card, Rank, Suit


@pytest_asyncio.fixture
async def client():
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def _new_game(client, **body):
    response = await client.post("/api/game/new", json=body or None)
    assert response.status_code == 200
    data = response.json()
    return data["session_id"], data["state"]


@pytest.mark.asyncio
async def test_health_check(client):
    """Test health check endpoint."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_new_game(client):
    """Test dealing a new game."""
    session_id, state = await _new_game(client)

    assert session_id
    assert state["phase"] == "PLAYING"
    assert state["current_turn"] == "PLAYER"
    assert state["winner"] is None
    assert len(state["player_hand"]) == 8
    assert state["ai_hand_count"] == 8
    assert state["deck_count"] == 35
    assert state["discard_count"] == 1
    assert state["top_card"]["rank"] != "8"
    assert state["active_suit"] == state["top_card"]["suit"]
    assert state["last_event"] == "GAME_STARTED"
    assert not state["ai_pending"]


@pytest.mark.asyncio
async def test_new_game_with_difficulty(client):
    """Test choosing the computer's strength."""
    _, state = await _new_game(client, difficulty="HARD")
    assert state["difficulty"] == "HARD"


@pytest.mark.asyncio
async def test_new_game_invalid_difficulty(client):
    """Test malformed difficulty is rejected by validation."""
    response = await client.post("/api/game/new", json={"difficulty": "IMPOSSIBLE"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_new_game_reuses_session(client):
    """Test that dealing again keeps a valid session id."""
    session_id, _ = await _new_game(client)
    response = await client.post("/api/game/new", headers={"X-Session-ID": session_id})
    assert response.json()["session_id"] == session_id


@pytest.mark.asyncio
async def test_game_state(client):
    """Test getting game state."""
    session_id, created = await _new_game(client)
    response = await client.get("/api/game/state", headers={"X-Session-ID": session_id})

    assert response.status_code == 200
    assert response.json()["player_hand"] == created["player_hand"]


@pytest.mark.asyncio
async def test_unknown_session(client):
    """Test that unknown sessions are 404."""
    response = await client.get("/api/game/state", headers={"X-Session-ID": "nope"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_playable_flags_match_rules(client):
    """Test that highlighted cards are exactly the legal plays."""
    session_id, state = await _new_game(client)
    top = Card.from_id(state["top_card"]["id"])
    active = Suit[state["active_suit"]]

    for card in state["player_hand"]:
        parsed = Card.from_id(card["id"])
        expected = parsed.is_wild or parsed.suit == active or parsed.rank == top.rank
        assert card["playable"] == expected


@pytest.mark.asyncio
async def test_play_card_not_in_hand(client):
    """Test playing a card the human does not hold."""
    session_id, state = await _new_game(client)
    held = {c["id"] for c in state["player_hand"]}
    missing = next(
        Card(r, s).id for r in Rank for s in Suit if Card(r, s).id not in held
    )

    response = await client.post(
        "/api/game/play",
        json={"card_id": missing},
        headers={"X-Session-ID": session_id},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_play_invalid_card_id(client):
    """Test playing a malformed card id."""
    session_id, _ = await _new_game(client)
    response = await client.post(
        "/api/game/play",
        json={"card_id": "11-STARS"},
        headers={"X-Session-ID": session_id},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_play_playable_card(client):
    """Test playing a highlighted card."""
    session_id, state = await _new_game(client)
    playable = [c for c in state["player_hand"] if c["playable"]]
    if not playable:
        pytest.skip("Dealt hand has no playable card")

    card = playable[0]
    response = await client.post(
        "/api/game/play",
        json={"card_id": card["id"]},
        headers={"X-Session-ID": session_id},
    )
    assert response.status_code == 200
    data = response.json()
    assert len(data["player_hand"]) == 7
    assert data["top_card"]["id"] == card["id"]
    if card["rank"] == "8":
        assert data["phase"] == "WILD_SELECTION"
    else:
        assert data["current_turn"] == "AI"
        assert data["ai_pending"]


@pytest.mark.asyncio
async def test_draw_then_computer_turn(client):
    """Test drawing until the turn passes, then running the computer."""
    session_id, _ = await _new_game(client)
    headers = {"X-Session-ID": session_id}

    data = None
    for _ in range(40):
        response = await client.post("/api/game/draw", headers=headers)
        assert response.status_code == 200
        data = response.json()
        if data["current_turn"] == "AI":
            break

    assert data["current_turn"] == "AI"
    assert data["ai_pending"]
    assert data["deck_count"] + len(data["player_hand"]) + data["ai_hand_count"] + data["discard_count"] == 52

    # Not the human's turn any more
    response = await client.post("/api/game/draw", headers=headers)
    assert response.status_code == 400

    response = await client.post("/api/game/ai-turn", headers=headers)
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_ai_turn_when_not_pending(client):
    session_id, _ = await _new_game(client)
    response = await client.post("/api/game/ai-turn", headers={"X-Session-ID": session_id})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_wild_suit_outside_selection(client):
    session_id, _ = await _new_game(client)
    response = await client.post(
        "/api/game/wild-suit",
        json={"suit": "SPADES"},
        headers={"X-Session-ID": session_id},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_wild_suit_invalid_suit(client):
    session_id, _ = await _new_game(client)
    response = await client.post(
        "/api/game/wild-suit",
        json={"suit": "STARS"},
        headers={"X-Session-ID": session_id},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_surrender(client):
    """Test conceding the game."""
    session_id, _ = await _new_game(client)
    headers = {"X-Session-ID": session_id}

    response = await client.post("/api/game/surrender", headers=headers)
    assert response.status_code == 200
    data = response.json()
    assert data["phase"] == "GAME_OVER"
    assert data["winner"] == "AI"
    assert data["last_event"] == "SURRENDERED"

    response = await client.post("/api/game/surrender", headers=headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_end_session(client):
    session_id, _ = await _new_game(client)
    headers = {"X-Session-ID": session_id}

    response = await client.delete("/api/game", headers=headers)
    assert response.status_code == 200

    response = await client.get("/api/game/state", headers=headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_expired_sessions_drop_games(client):
    """Dealing a new game sweeps games whose sessions have expired."""
    session_id, _ = await _new_game(client)
    store = get_session_store()
    store._sessions[session_id] = ({}, datetime.now() - timedelta(seconds=1))

    await _new_game(client)

    assert session_id not in game_routes._games
    response = await client.get("/api/game/state", headers={"X-Session-ID": session_id})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_prune_keeps_live_games(client):
    session_id, _ = await _new_game(client)
    assert session_id not in await game_routes.prune_expired_games()
    assert session_id in game_routes._games
