"""WebSocket connection management with game engine integration."""

import asyncio
import json
import logging
import time
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from typing import Any

from api.routes.game import create_game, game_state_response
from config import config
from core.cards import Card, Suit
from core.game import CrazyEightsGame, Transition
from core.game.events import EventHandler, GameEvent, EventType
from core.game.timer import CancellationToken
from core.state import Difficulty

logger = logging.getLogger(__name__)

router = APIRouter()


class ConnectionManager:
    """Manage WebSocket connections, game instances, and computer moves."""

    def __init__(self) -> None:
        self._connections: dict[str, WebSocket] = {}
        self._games: dict[str, CrazyEightsGame] = {}
        self._handlers: dict[str, tuple[EventHandler, EventHandler]] = {}
        self._event_queues: dict[str, asyncio.Queue] = {}
        self._ai_tasks: dict[str, asyncio.Task] = {}
        self._idle_since: dict[str, float] = {}

    async def connect(self, websocket: WebSocket, session_id: str) -> None:
        """Accept and register a new connection."""
        self.prune_idle()
        await websocket.accept()
        self._connections[session_id] = websocket
        self._event_queues[session_id] = asyncio.Queue()
        self._idle_since.pop(session_id, None)

    def disconnect(self, session_id: str) -> None:
        """Remove a connection and stop its computer move."""
        self._connections.pop(session_id, None)
        self._event_queues.pop(session_id, None)
        self._cancel_ai_task(session_id)
        game = self._games.get(session_id)
        if game is not None:
            game.cancel_ai_turn()
            # Kept for reconnection until idle for a session lifetime
            self._idle_since[session_id] = time.monotonic()

    def prune_idle(self, max_idle: float | None = None) -> list[str]:
        """
        Drop games whose client has been gone longer than max_idle.

        Args:
            max_idle: Seconds of disconnection allowed (defaults to the session TTL)

        Returns:
            Session ids whose games were dropped
        """
        max_idle = config.session_ttl if max_idle is None else max_idle
        now = time.monotonic()
        stale = [
            sid for sid, since in self._idle_since.items() if now - since > max_idle
        ]
        for sid in stale:
            del self._idle_since[sid]
            self._uninstall(sid)
        if stale:
            logger.debug("Pruned %d idle WebSocket games", len(stale))
        return stale

    def get_or_create_game(self, session_id: str) -> CrazyEightsGame:
        """Get or create a game for the session."""
        if session_id not in self._games:
            self._install(session_id, create_game(deal=False)).start_game()
        return self._games[session_id]

    def reset_game(
        self, session_id: str, difficulty: Difficulty | None = None
    ) -> CrazyEightsGame:
        """Replace the session's game with a fresh deal."""
        self._uninstall(session_id)
        game = self._install(session_id, create_game(difficulty, deal=False))
        game.start_game()
        return game

    def _install(self, session_id: str, game: CrazyEightsGame) -> CrazyEightsGame:
        def queue_event(event: GameEvent) -> None:
            self._queue_event(session_id, event)

        def schedule_ai(event: GameEvent) -> None:
            self._schedule_ai(session_id, game, event)

        self._games[session_id] = game
        self._handlers[session_id] = (queue_event, schedule_ai)
        game.subscribe(queue_event)
        game.subscribe(schedule_ai, EventType.AI_TURN_SCHEDULED)
        return game

    def _uninstall(self, session_id: str) -> None:
        """Stop a session's game and detach it from the connection."""
        self._cancel_ai_task(session_id)
        game = self._games.pop(session_id, None)
        handlers = self._handlers.pop(session_id, None)
        if game is None:
            return
        game.cancel_ai_turn()
        if handlers is not None:
            queue_event, schedule_ai = handlers
            game.events.unsubscribe(queue_event)
            game.events.unsubscribe(schedule_ai, EventType.AI_TURN_SCHEDULED)

    def _schedule_ai(
        self, session_id: str, game: CrazyEightsGame, event: GameEvent
    ) -> None:
        """Start an asyncio task that makes the computer's move after its delay."""
        token = game.ai_token
        if token is None or session_id not in self._connections:
            return
        self._cancel_ai_task(session_id)
        self._ai_tasks[session_id] = asyncio.get_running_loop().create_task(
            self._run_ai_after_delay(game, token, event.data.get("delay", 0.0))
        )

    async def _run_ai_after_delay(
        self, game: CrazyEightsGame, token: CancellationToken, delay: float
    ) -> None:
        await asyncio.sleep(delay)
        # A stale token is a no-op, so a late wake-up cannot move twice
        game.run_ai_turn(token)

    def _cancel_ai_task(self, session_id: str) -> None:
        task = self._ai_tasks.pop(session_id, None)
        # The task may be rescheduling from inside itself
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()

    def _queue_event(self, session_id: str, event: GameEvent) -> None:
        """Queue an event for async delivery."""
        if session_id in self._event_queues:
            self._event_queues[session_id].put_nowait(event)

    async def get_event(self, session_id: str) -> GameEvent | None:
        """Get the next event from the queue."""
        if session_id in self._event_queues:
            try:
                return await asyncio.wait_for(
                    self._event_queues[session_id].get(),
                    timeout=0.1,
                )
            except asyncio.TimeoutError:
                return None
        return None

    async def send_message(self, session_id: str, message: dict[str, Any]) -> None:
        """Send a message to a specific session."""
        if session_id in self._connections:
            try:
                await self._connections[session_id].send_json(message)
            except (RuntimeError, WebSocketDisconnect):
                logger.debug("Dropped message for closed session %s", session_id[:8])

    @property
    def active_connections(self) -> int:
        """Return number of active connections."""
        return len(self._connections)


# Global connection manager
manager = ConnectionManager()


def _game_state_to_dict(game: CrazyEightsGame) -> dict[str, Any]:
    """Convert game state to a dictionary for JSON serialization."""
    return game_state_response(game).model_dump()


def _event_to_message(event: GameEvent, game: CrazyEightsGame) -> dict[str, Any]:
    """Convert a game event to a WebSocket message."""
    return {
        "type": "event",
        "event_type": event.event_type.name,
        "data": event.data,
        "state": _game_state_to_dict(game),
    }


def _error_for(transition: Transition) -> dict[str, Any] | None:
    if transition.ok:
        return None
    return {
        "type": "error",
        "code": transition.error.code,
        "message": str(transition.error),
    }


def _handle_command(
    session_id: str, game: CrazyEightsGame, message: dict[str, Any]
) -> tuple[CrazyEightsGame, dict[str, Any] | None]:
    """
    Apply one client command.

    Returns:
        The (possibly replaced) game and an error message, if any
    """
    msg_type = message.get("type")

    if msg_type == "new_game":
        name = str(message.get("difficulty") or "").upper()
        if name and name not in Difficulty.__members__:
            return game, {"type": "error", "message": f"Unknown difficulty: {name}"}
        difficulty = Difficulty[name] if name else None
        return manager.reset_game(session_id, difficulty), None

    if msg_type == "play":
        try:
            card = Card.from_id(str(message.get("card_id", "")))
        except ValueError as exc:
            return game, {"type": "error", "message": str(exc)}
        return game, _error_for(game.play_card(card))

    if msg_type == "draw":
        return game, _error_for(game.draw_card())

    if msg_type == "wild_suit":
        name = str(message.get("suit", "")).upper()
        if name not in Suit.__members__:
            return game, {"type": "error", "message": f"Unknown suit: {name}"}
        return game, _error_for(game.select_wild_suit(Suit[name]))

    if msg_type == "surrender":
        return game, _error_for(game.surrender())

    return game, {"type": "error", "message": f"Unknown message type: {msg_type}"}


@router.websocket("/game/{session_id}")
async def game_websocket(websocket: WebSocket, session_id: str) -> None:
    """
    WebSocket endpoint for real-time game updates.

    Messages from client:
    - {"type": "new_game", "difficulty": "EASY"|"MEDIUM"|"HARD"}
    - {"type": "play", "card_id": "8-HEARTS"}
    - {"type": "draw"}
    - {"type": "wild_suit", "suit": "SPADES"}
    - {"type": "surrender"}
    - {"type": "get_state"}

    Messages to client:
    - {"type": "state_update", "state": {...}}
    - {"type": "event", "event_type": "...", "data": {...}, "state": {...}}
    - {"type": "error", "message": "..."}
    """
    await manager.connect(websocket, session_id)
    game = manager.get_or_create_game(session_id)

    await manager.send_message(session_id, {
        "type": "state_update",
        "state": _game_state_to_dict(game),
    })

    async def process_events():
        """Process game events and send to client."""
        while True:
            event = await manager.get_event(session_id)
            if event:
                await manager.send_message(
                    session_id, _event_to_message(event, manager.get_or_create_game(session_id))
                )

    event_task = asyncio.create_task(process_events())

    # A computer move voided by an earlier disconnect is scheduled again
    if game.resume():
        logger.debug("Session %s resumed the computer's turn", session_id[:8])

    try:
        while True:
            data = await websocket.receive_text()
            try:
                message = json.loads(data)
            except json.JSONDecodeError:
                await manager.send_message(session_id, {
                    "type": "error",
                    "message": "Malformed JSON",
                })
                continue

            if not isinstance(message, dict):
                await manager.send_message(session_id, {
                    "type": "error",
                    "message": "Expected a JSON object",
                })
                continue

            if message.get("type") == "get_state":
                await manager.send_message(session_id, {
                    "type": "state_update",
                    "state": _game_state_to_dict(game),
                })
                continue

            game, error = _handle_command(session_id, game, message)
            if error is not None:
                await manager.send_message(session_id, error)

    except WebSocketDisconnect:
        logger.debug("Session %s disconnected", session_id[:8])
    finally:
        event_task.cancel()
        try:
            await event_task
        except asyncio.CancelledError:
            pass
        manager.disconnect(session_id)
