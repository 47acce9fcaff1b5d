"""Crazy Eights turn controller with state machine."""

import logging
from random import Random
from typing import Callable

from transitions import Machine

from core.cards import Card, Suit
from core.game.events import EventEmitter, EventType, GameEvent
from core.game.moves import (
    HAND_SIZE,
    Transition,
    apply_draw,
    apply_play,
    deal_new_game,
    select_wild_suit,
    surrender,
)
from core.game.timer import AIThinkingTimer, CancellationToken
from core.rules import is_playable, playable_cards
from core.state import Actor, Difficulty, GamePhase, GameState
from core.strategy.opponent import MoveKind, OpponentPolicy, policy_for

logger = logging.getLogger(__name__)


class CrazyEightsGame:
    """
    Crazy Eights turn controller using a state machine.

    Owns the single authoritative snapshot and is its only writer: every
    command runs a pure transition from ``core.game.moves`` and, if it is
    accepted, publishes the new snapshot, advances the phase machine, and
    emits an event. The computer's move is deferred through a cancellable
    ``AIThinkingTimer``; presentation code drives it with ``update(dt)`` or
    by calling ``run_ai_turn`` with the token it was handed.
    """

    # State machine states
    STATES = [p.name.lower() for p in GamePhase]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "deal", "source": "*", "dest": "playing"},
        {"trigger": "await_suit", "source": "playing", "dest": "wild_selection"},
        {"trigger": "suit_chosen", "source": "wild_selection", "dest": "playing"},
        {"trigger": "next_turn", "source": "playing", "dest": "playing"},
        {"trigger": "finish", "source": ["playing", "wild_selection"], "dest": "game_over"},
    ]

    # Trigger fired for each (old phase, new phase) pair of an accepted move
    PHASE_TRIGGERS = {
        (GamePhase.PLAYING, GamePhase.PLAYING): "next_turn",
        (GamePhase.PLAYING, GamePhase.WILD_SELECTION): "await_suit",
        (GamePhase.WILD_SELECTION, GamePhase.PLAYING): "suit_chosen",
        (GamePhase.PLAYING, GamePhase.GAME_OVER): "finish",
        (GamePhase.WILD_SELECTION, GamePhase.GAME_OVER): "finish",
    }

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.MEDIUM,
        hand_size: int = HAND_SIZE,
        ai_think_delay: float = 1.5,
        surrender_thinking_seconds: int = 1,
        surrender_card_gap: int = 2,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize a controller awaiting its first deal.

        Args:
            difficulty: Default computer strength for ``start_game``
            hand_size: Cards dealt to each player
            ai_think_delay: Seconds the computer waits before moving
            surrender_thinking_seconds: Thinking time that unlocks surrender
            surrender_card_gap: Hand-size deficit that unlocks surrender
            rng: Random number generator for reproducible games
        """
        self.difficulty = difficulty
        self.hand_size = hand_size
        self.surrender_thinking_seconds = surrender_thinking_seconds
        self.surrender_card_gap = surrender_card_gap
        self._rng = rng or Random()

        self._state = GameState(difficulty=difficulty)
        self.policy: OpponentPolicy = policy_for(difficulty, self._rng)
        self.events = EventEmitter()
        self.ai_timer = AIThinkingTimer(delay=ai_think_delay)

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="start",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def phase(self) -> GamePhase:
        """Get current game phase as enum."""
        return GamePhase[self._machine_state.upper()]  # type: ignore

    @property
    def state(self) -> GameState:
        """Read-only snapshot of the current game."""
        return self._state

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    # Commands

    def start_game(self, difficulty: Difficulty | None = None) -> Transition:
        """
        Deal a new game, replacing whatever was in progress.

        Args:
            difficulty: Computer strength (keeps the previous one if None)

        Returns:
            The opening transition
        """
        self.difficulty = difficulty or self.difficulty
        self._cancel_ai_turn(reason="new_game")

        self._state = deal_new_game(self.difficulty, self._rng, self.hand_size)
        self.policy = policy_for(self.difficulty, self._rng)
        self.deal()

        starter = self._state.top_card
        logger.info(
            "Game started at %s difficulty, starter %s", self.difficulty.name, starter
        )
        self.events.emit_new(
            EventType.GAME_STARTED,
            difficulty=self.difficulty.name,
            card=starter.id,
            suit=self._state.active_suit.name,
        )
        self._sync_ai_turn()
        return Transition(
            state=self._state,
            outcome=EventType.GAME_STARTED,
            card=starter,
            suit=self._state.active_suit,
        )

    def load_state(self, state: GameState) -> None:
        """Adopt an existing snapshot, e.g. a prepared position."""
        self._cancel_ai_turn(reason="load_state")
        self._state = state
        self.difficulty = state.difficulty
        self.policy = policy_for(state.difficulty, self._rng)
        self._machine_state = state.status.name.lower()
        self._sync_ai_turn()

    def play_card(self, card: Card, is_human: bool = True) -> Transition:
        """Play a card for the human (default) or the computer."""
        actor = Actor.PLAYER if is_human else Actor.AI
        return self._commit(apply_play(self._state, card, actor))

    def draw_card(self, is_human: bool = True) -> Transition:
        """Draw a card for the human (default) or the computer."""
        actor = Actor.PLAYER if is_human else Actor.AI
        return self._commit(apply_draw(self._state, actor))

    def select_wild_suit(self, suit: Suit) -> Transition:
        """Declare the active suit after the human's eight."""
        return self._commit(select_wild_suit(self._state, suit))

    def surrender(self) -> Transition:
        """Concede the game to the computer."""
        return self._commit(surrender(self._state))

    # Computer turn

    @property
    def ai_pending(self) -> bool:
        """Check if a computer move is scheduled."""
        return self.ai_timer.pending

    @property
    def ai_token(self) -> CancellationToken | None:
        """Token for the scheduled computer move, if any."""
        return self.ai_timer.token

    @property
    def ai_thinking_seconds(self) -> int:
        """Whole seconds the computer has been thinking."""
        return self.ai_timer.thinking_seconds

    def cancel_ai_turn(self) -> bool:
        """Void the scheduled computer move, if any."""
        return self._cancel_ai_turn(reason="cancelled")

    def resume(self) -> bool:
        """
        Re-arm the computer move after it was cancelled mid-turn.

        Returns:
            True if a move was scheduled
        """
        if self.ai_timer.pending:
            return False
        if self._state.status != GamePhase.PLAYING or self._state.current_turn != Actor.AI:
            return False
        self._sync_ai_turn()
        return True

    def run_ai_turn(self, token: CancellationToken | None = None) -> Transition | None:
        """
        Make the computer's move now.

        Args:
            token: Token handed out when the move was scheduled; a stale or
                cancelled token makes this a no-op. None runs whatever move
                is pending.

        Returns:
            The computer's transition, or None if no move was due
        """
        if token is not None and not self.ai_timer.is_current(token):
            logger.debug("Ignoring stale computer move (generation %d)", token.generation)
            return None
        if not self.ai_timer.pending:
            return None

        self.ai_timer.cancel()
        move = self.policy.choose_move(self._state)
        logger.debug("Computer (%s) chose to %s", self.difficulty.name, move)

        if move.kind == MoveKind.PLAY:
            return self.play_card(move.card, is_human=False)
        return self.draw_card(is_human=False)

    def update(self, dt: float) -> Transition | None:
        """
        Advance the computer's thinking clock.

        Args:
            dt: Seconds since the last update

        Returns:
            The computer's transition if its delay elapsed, else None
        """
        if self.ai_timer.advance(dt):
            return self.run_ai_turn(self.ai_timer.token)
        return None

    def _sync_ai_turn(self) -> None:
        """Schedule or void the computer move to match the snapshot."""
        if self._state.status == GamePhase.PLAYING and self._state.current_turn == Actor.AI:
            token = self.ai_timer.arm()
            logger.debug("Computer move scheduled (generation %d)", token.generation)
            self.events.emit_new(
                EventType.AI_TURN_SCHEDULED,
                generation=token.generation,
                delay=self.ai_timer.delay,
            )
        else:
            self._cancel_ai_turn(reason="turn_changed")

    def _cancel_ai_turn(self, reason: str) -> bool:
        token = self.ai_timer.token
        if not self.ai_timer.cancel():
            return False
        logger.debug("Computer move cancelled (%s)", reason)
        self.events.emit_new(
            EventType.AI_TURN_CANCELLED,
            generation=token.generation,
            reason=reason,
        )
        return True

    # Transition bookkeeping

    def _commit(self, transition: Transition) -> Transition:
        """Publish an accepted transition, or report a rejected one."""
        if not transition.ok:
            logger.debug("Rejected move: %s", transition.error)
            self.events.emit_new(
                EventType.INVALID_ACTION,
                error=transition.error.code,
                message=str(transition.error),
                actor=transition.actor.name if transition.actor else None,
            )
            return transition

        trigger = self.PHASE_TRIGGERS[(self._state.status, transition.state.status)]
        getattr(self, trigger)()
        self._state = transition.state

        self._emit_outcome(transition)
        self._sync_ai_turn()
        return transition

    def _emit_outcome(self, transition: Transition) -> None:
        state = transition.state
        data: dict[str, str | None] = {
            "actor": transition.actor.name if transition.actor else None,
        }
        if transition.card is not None:
            data["card"] = transition.card.id
        if transition.suit is not None:
            data["suit"] = transition.suit.name
        if state.winner is not None:
            data["winner"] = state.winner.name
            logger.info("Game over, %s wins", state.winner.name)

        self.events.emit_new(transition.outcome, **data)

    # Queries

    def is_playable(self, card: Card) -> bool:
        """Check if a card could be played on the current discard pile."""
        if self._state.top_card is None:
            return False
        return is_playable(card, self._state.top_card, self._state.active_suit)

    def playable_cards(self, is_human: bool = True) -> list[Card]:
        """Playable cards in a player's hand, in hand order."""
        hand = self._state.hand_for(Actor.PLAYER if is_human else Actor.AI)
        return playable_cards(hand, self._state.top_card, self._state.active_suit)

    @property
    def deck_size(self) -> int:
        """Return the number of cards left to draw."""
        return self._state.deck_size

    @property
    def player_hand_size(self) -> int:
        return len(self._state.player_hand)

    @property
    def ai_hand_size(self) -> int:
        return len(self._state.ai_hand)

    @property
    def can_surrender(self) -> bool:
        """
        Check if the surrender option should be offered.

        Available while playing once the computer has been thinking for a
        while, or when the human trails by more than a few cards.
        """
        if self.phase != GamePhase.PLAYING:
            return False
        if self.ai_timer.thinking_seconds >= self.surrender_thinking_seconds:
            return True
        return self.player_hand_size - self.ai_hand_size > self.surrender_card_gap
