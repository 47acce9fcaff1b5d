"""Adapter connecting the core Crazy Eights engine to the PyGame UI.

Nothing in this module imports pygame, so it can be exercised headless.
"""

import logging
from dataclasses import dataclass
from random import Random
from typing import Callable, Optional

from config import GameConfig, config
from core.cards import Card, Rank, Suit
from core.game.engine import CrazyEightsGame
from core.game.events import EventType, GameEvent
from core.state import Actor, Difficulty, GamePhase

logger = logging.getLogger(__name__)


# Map core Suit to pygame_ui suit names
SUIT_MAP = {
    Suit.HEARTS: "hearts",
    Suit.DIAMONDS: "diamonds",
    Suit.CLUBS: "clubs",
    Suit.SPADES: "spades",
}

# Title-screen text for each difficulty
DIFFICULTY_LABELS = {
    Difficulty.EASY: ("Easy", "The computer plays at random"),
    Difficulty.MEDIUM: ("Medium", "Standard game"),
    Difficulty.HARD: ("Hard", "The computer plays deliberately"),
}


def _suit_name(name: Optional[str]) -> str:
    return name.capitalize() if name else "?"


def _card_name(card_id: Optional[str]) -> str:
    if not card_id:
        return "a card"
    return str(Card.from_id(card_id))


def describe_event(event: GameEvent) -> Optional[str]:
    """Translate an engine event into a status line, or None to keep the old one."""
    data = event.data
    etype = event.event_type
    by_human = data.get("actor") == Actor.PLAYER.name

    if etype == EventType.GAME_STARTED:
        label = DIFFICULTY_LABELS[Difficulty[data["difficulty"]]][0]
        return f"Game started! Difficulty: {label}. Your turn!"
    if etype == EventType.GAME_OVER:
        if data.get("winner") == Actor.PLAYER.name:
            return "You win!"
        return "The computer wins."
    if etype == EventType.SURRENDERED:
        return "You surrendered."
    if etype == EventType.PLAYED:
        if by_human:
            return "Computer is thinking..."
        return f"Computer played {_card_name(data.get('card'))}. Your turn!"
    if etype == EventType.WILD_PLAYED:
        if by_human:
            return "Choose a suit for your eight."
        return f"Computer played an 8 and changed the suit to {_suit_name(data.get('suit'))}!"
    if etype == EventType.WILD_SUIT_SELECTED:
        return f"You changed the suit to {_suit_name(data.get('suit'))}! Computer's turn."
    if etype == EventType.DREW_PLAYABLE:
        return "You drew a playable card!" if by_human else "Computer drew a playable card."
    if etype == EventType.DREW_UNPLAYABLE:
        return "Drawn card not playable. Computer's turn." if by_human else "Computer drew. Your turn!"
    if etype == EventType.DECK_EMPTY_SKIPPED:
        return "Deck is empty! Skipping turn."
    if etype == EventType.INVALID_ACTION:
        return data.get("message") or "You can't do that now."
    return None


@dataclass
class UICardInfo:
    """Card information for the UI layer."""

    card_id: str
    value: str  # "A", "2", "K", etc.
    suit: str   # "hearts", "diamonds", "clubs", "spades"
    face_up: bool = True
    playable: bool = False

    @classmethod
    def from_core_card(
        cls, card: Card, face_up: bool = True, playable: bool = False
    ) -> "UICardInfo":
        """Create UICardInfo from a core Card."""
        return cls(
            card_id=card.id,
            value=card.rank.value,
            suit=SUIT_MAP[card.suit],
            face_up=face_up,
            playable=playable,
        )

    @property
    def is_wild(self) -> bool:
        return self.value == Rank.EIGHT.value


@dataclass
class GameSnapshot:
    """Snapshot of game state for UI rendering."""

    phase: GamePhase
    current_turn: Actor
    winner: Optional[Actor]
    player_hand: list[UICardInfo]
    ai_card_count: int
    top_card: Optional[UICardInfo]
    active_suit: Optional[str]
    deck_count: int
    can_draw: bool
    can_surrender: bool
    choosing_suit: bool
    ai_thinking: bool
    status: str


class EngineAdapter:
    """Adapter between the core CrazyEightsGame and PyGame UI.

    Subscribes to engine events, keeps a status line, and exposes a small
    command surface keyed by hand index so scenes never touch core types.
    """

    def __init__(
        self,
        settings: Optional[GameConfig] = None,
        rng: Optional[Random] = None,
    ):
        """Initialize the adapter.

        Args:
            settings: Game settings (defaults to the global configuration)
            rng: Random number generator for reproducible games
        """
        self.settings = settings or config.game
        self.status = "Welcome to Crazy Eights!"
        self.game = CrazyEightsGame(
            difficulty=Difficulty[self.settings.default_difficulty],
            hand_size=self.settings.hand_size,
            ai_think_delay=self.settings.ai_think_delay,
            surrender_thinking_seconds=self.settings.surrender_thinking_seconds,
            surrender_card_gap=self.settings.surrender_card_gap,
            rng=rng,
        )
        self.game.subscribe(self._handle_event)

        # UI callbacks
        self._on_game_over: Optional[Callable[[Actor], None]] = None
        self._on_invalid_action: Optional[Callable[[str], None]] = None

    def _handle_event(self, event: GameEvent) -> None:
        """Handle events from the core engine."""
        message = describe_event(event)
        if message is not None:
            self.status = message

        if event.event_type == EventType.GAME_OVER and self._on_game_over:
            self._on_game_over(Actor[event.data["winner"]])
        elif event.event_type == EventType.SURRENDERED and self._on_game_over:
            self._on_game_over(Actor.AI)
        elif event.event_type == EventType.INVALID_ACTION and self._on_invalid_action:
            self._on_invalid_action(self.status)

    def set_callbacks(
        self,
        on_game_over: Optional[Callable[[Actor], None]] = None,
        on_invalid_action: Optional[Callable[[str], None]] = None,
    ) -> None:
        """Set UI callbacks for engine events."""
        self._on_game_over = on_game_over
        self._on_invalid_action = on_invalid_action

    # Commands

    def start(self, difficulty: Optional[Difficulty] = None) -> None:
        """Deal a new game."""
        self.game.start_game(difficulty)

    def play(self, index: int) -> bool:
        """Play the card at a position in the human's hand."""
        hand = self.game.state.player_hand
        if not 0 <= index < len(hand):
            return False
        return self.game.play_card(hand.cards[index]).ok

    def draw(self) -> bool:
        return self.game.draw_card().ok

    def choose_suit(self, suit_name: str) -> bool:
        """Declare the suit after an eight, by UI suit name."""
        suits = {name: suit for suit, name in SUIT_MAP.items()}
        if suit_name not in suits:
            return False
        return self.game.select_wild_suit(suits[suit_name]).ok

    def surrender(self) -> bool:
        return self.game.surrender().ok

    def update(self, dt: float) -> None:
        """Advance the computer's thinking clock."""
        self.game.update(dt)

    def stop(self) -> None:
        """Cancel any pending computer move, e.g. when leaving the table."""
        self.game.cancel_ai_turn()

    # Queries

    def snapshot(self) -> GameSnapshot:
        """Get the current state for rendering."""
        game = self.game
        state = game.state
        your_move = game.phase == GamePhase.PLAYING and state.current_turn == Actor.PLAYER
        playable = set(game.playable_cards()) if your_move else set()

        return GameSnapshot(
            phase=game.phase,
            current_turn=state.current_turn,
            winner=state.winner,
            player_hand=[
                UICardInfo.from_core_card(c, playable=c in playable)
                for c in state.player_hand
            ],
            ai_card_count=len(state.ai_hand),
            top_card=UICardInfo.from_core_card(state.top_card) if state.top_card else None,
            active_suit=SUIT_MAP[state.active_suit] if state.active_suit else None,
            deck_count=state.deck_size,
            can_draw=your_move,
            can_surrender=game.can_surrender,
            choosing_suit=game.phase == GamePhase.WILD_SELECTION,
            ai_thinking=game.ai_pending,
            status=self.status,
        )
