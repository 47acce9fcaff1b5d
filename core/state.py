"""Game state snapshot and the enumerations it is built from."""

from dataclasses import dataclass, field
from enum import Enum, auto

from core.cards import Card, Suit
from core.hand import Hand

DECK_SIZE = 52


class GamePhase(Enum):
    """
    Game state machine phases.

    Flow: START → PLAYING → (WILD_SELECTION → PLAYING)* → GAME_OVER
    """

    # Before the first deal
    START = auto()

    # Players alternate plays and draws
    PLAYING = auto()

    # The human played an eight and must name a suit
    WILD_SELECTION = auto()

    # Terminal until a new game replaces the state
    GAME_OVER = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


class Actor(Enum):
    """The two seats at the table."""

    PLAYER = auto()
    AI = auto()

    @property
    def opponent(self) -> "Actor":
        """Return the other seat."""
        return Actor.AI if self == Actor.PLAYER else Actor.PLAYER


class Difficulty(Enum):
    """Computer opponent strength."""

    EASY = auto()
    MEDIUM = auto()
    HARD = auto()


@dataclass(frozen=True)
class GameState:
    """
    Immutable snapshot of a single game.

    Transitions never mutate a snapshot; they build the next one with
    ``dataclasses.replace``. Invariants once dealt: the four card
    collections always hold exactly 52 cards, ``winner`` is set iff
    ``status`` is GAME_OVER, and ``active_suit`` is never None.
    """

    deck: tuple[Card, ...] = ()
    player_hand: Hand = field(default_factory=Hand)
    ai_hand: Hand = field(default_factory=Hand)
    discard_pile: tuple[Card, ...] = ()
    current_turn: Actor = Actor.PLAYER
    status: GamePhase = GamePhase.START
    winner: Actor | None = None
    active_suit: Suit | None = None
    difficulty: Difficulty = Difficulty.MEDIUM

    @property
    def top_card(self) -> Card | None:
        """The most recently discarded card."""
        return self.discard_pile[-1] if self.discard_pile else None

    def hand_for(self, actor: Actor) -> Hand:
        """Return the hand owned by an actor."""
        return self.player_hand if actor == Actor.PLAYER else self.ai_hand

    @property
    def deck_size(self) -> int:
        """Return the number of cards left to draw."""
        return len(self.deck)

    @property
    def card_count(self) -> int:
        """Total cards across deck, hands, and discard pile."""
        return (
            len(self.deck)
            + len(self.player_hand)
            + len(self.ai_hand)
            + len(self.discard_pile)
        )

    @property
    def is_over(self) -> bool:
        """Check if the game has finished."""
        return self.status == GamePhase.GAME_OVER
