"""Game API endpoints."""

import logging
from fastapi import APIRouter, HTTPException, Header
from typing import Annotated

from api.schemas import (
    CardResponse,
    GameStateResponse,
    NewGameRequest,
    NewGameResponse,
    PlayRequest,
    WildSuitRequest,
)
from api.session import create_session, delete_session, get_session_store, touch_session
from config import config
from core.cards import Card, Suit
from core.game import CrazyEightsGame, Transition
from core.state import Actor, Difficulty, GamePhase

logger = logging.getLogger(__name__)

router = APIRouter()

# In-memory games keyed by session id
_games: dict[str, CrazyEightsGame] = {}


def create_game(
    difficulty: Difficulty | None = None, deal: bool = True
) -> CrazyEightsGame:
    """Build a controller from configuration and optionally deal its first game."""
    settings = config.game
    game = CrazyEightsGame(
        difficulty=difficulty or Difficulty[settings.default_difficulty],
        hand_size=settings.hand_size,
        ai_think_delay=settings.ai_think_delay,
        surrender_thinking_seconds=settings.surrender_thinking_seconds,
        surrender_card_gap=settings.surrender_card_gap,
    )
    if deal:
        game.start_game()
    return game


def card_response(card: Card, playable: bool = False) -> CardResponse:
    """Convert a Card to CardResponse."""
    return CardResponse(
        id=card.id,
        rank=card.rank.value,
        suit=card.suit.name,
        symbol=str(card),
        is_red=card.suit.is_red,
        playable=playable,
    )


def game_state_response(game: CrazyEightsGame) -> GameStateResponse:
    """Convert game state to response, hiding the computer's cards."""
    state = game.state
    your_move = game.phase == GamePhase.PLAYING and state.current_turn == Actor.PLAYER
    playable = set(game.playable_cards()) if your_move else set()
    last = game.events.last

    return GameStateResponse(
        phase=game.phase.name,
        current_turn=state.current_turn.name,
        winner=state.winner.name if state.winner else None,
        difficulty=state.difficulty.name,
        active_suit=state.active_suit.name if state.active_suit else None,
        top_card=card_response(state.top_card) if state.top_card else None,
        player_hand=[card_response(c, c in playable) for c in state.player_hand],
        ai_hand_count=len(state.ai_hand),
        deck_count=state.deck_size,
        discard_count=len(state.discard_pile),
        can_surrender=game.can_surrender,
        ai_pending=game.ai_pending,
        last_event=last.event_type.name if last else None,
    )


async def _get_game(session_id: str) -> CrazyEightsGame:
    """Get the game for a live session or raise 404."""
    if session_id not in _games or not await touch_session(session_id):
        _games.pop(session_id, None)
        raise HTTPException(status_code=404, detail="Game session not found")
    return _games[session_id]


def _checked(game: CrazyEightsGame, transition: Transition) -> GameStateResponse:
    """Turn a rejected transition into HTTP 400."""
    if not transition.ok:
        raise HTTPException(status_code=400, detail=str(transition.error))
    return game_state_response(game)


async def prune_expired_games() -> list[str]:
    """Drop games whose sessions have expired, stopping their computer moves."""
    store = get_session_store()
    await store.cleanup_expired()
    # Includes sessions already evicted on read
    expired = [sid for sid in list(_games) if await store.get(sid) is None]
    for session_id in expired:
        _games.pop(session_id).cancel_ai_turn()
    if expired:
        logger.debug("Pruned %d expired games", len(expired))
    return expired


@router.post("/new")
async def new_game(
    request: NewGameRequest | None = None,
    session_id: Annotated[str | None, Header(alias="X-Session-ID")] = None,
) -> NewGameResponse:
    """Deal a new game, reusing the caller's session when it is still valid."""
    await prune_expired_games()
    if session_id is None or not await touch_session(session_id):
        session_id = await create_session()

    difficulty = None
    if request is not None and request.difficulty is not None:
        difficulty = Difficulty[request.difficulty]

    previous = _games.get(session_id)
    if previous is not None:
        previous.cancel_ai_turn()

    game = create_game(difficulty)
    _games[session_id] = game
    logger.debug("Session %s dealt a %s game", session_id[:8], game.difficulty.name)

    return NewGameResponse(session_id=session_id, state=game_state_response(game))


@router.get("/state")
async def get_state(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Get current game state."""
    game = await _get_game(session_id)
    return game_state_response(game)


@router.post("/play")
async def play_card(
    request: PlayRequest,
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Play a card from the human's hand."""
    game = await _get_game(session_id)
    try:
        card = Card.from_id(request.card_id)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from None
    return _checked(game, game.play_card(card))


@router.post("/draw")
async def draw_card(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Draw a card for the human."""
    game = await _get_game(session_id)
    return _checked(game, game.draw_card())


@router.post("/wild-suit")
async def select_wild_suit(
    request: WildSuitRequest,
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Declare the active suit after the human's eight."""
    game = await _get_game(session_id)
    return _checked(game, game.select_wild_suit(Suit[request.suit]))


@router.post("/surrender")
async def surrender(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Concede the current game."""
    game = await _get_game(session_id)
    return _checked(game, game.surrender())


@router.post("/ai-turn")
async def run_ai_turn(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Make the computer's pending move now."""
    game = await _get_game(session_id)
    if game.run_ai_turn() is None:
        raise HTTPException(status_code=400, detail="It is not the computer's turn")
    return game_state_response(game)


@router.delete("")
async def end_session(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> dict[str, str]:
    """Drop the session and its game."""
    game = _games.pop(session_id, None)
    if game is not None:
        game.cancel_ai_turn()
    await delete_session(session_id)
    return {"status": "deleted"}
