"""Computer opponent decision policies for each difficulty tier."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from random import Random

from core.cards import Card, Suit
from core.hand import Hand
from core.rules import playable_cards
from core.state import Actor, Difficulty, GameState


class MoveKind(Enum):
    """What the computer decides to do on its turn."""

    PLAY = auto()
    DRAW = auto()

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class Move:
    """A chosen move: play a specific card, or draw."""

    kind: MoveKind
    card: Card | None = None

    @classmethod
    def play(cls, card: Card) -> "Move":
        return cls(MoveKind.PLAY, card)

    @classmethod
    def draw(cls) -> "Move":
        return cls(MoveKind.DRAW)

    def __str__(self) -> str:
        if self.card is None:
            return str(self.kind)
        return f"{self.kind} {self.card}"


def choose_wild_suit(hand: Hand) -> Suit:
    """
    Pick the suit to declare after playing an eight.

    The suit held most often wins; ties go to the earlier suit in
    HEARTS, DIAMONDS, CLUBS, SPADES order. An empty hand yields HEARTS.
    """
    counts = hand.suit_counts()
    best = Suit.HEARTS
    for suit in Suit:
        if counts[suit] > counts[best]:
            best = suit
    return best


class OpponentPolicy(ABC):
    """Base class for difficulty-specific move selection."""

    difficulty: Difficulty

    def playable(self, state: GameState) -> list[Card]:
        """Playable cards in the computer's hand, in hand order."""
        return playable_cards(state.ai_hand, state.top_card, state.active_suit)

    def choose_move(self, state: GameState) -> Move:
        """Choose the computer's move; draws when nothing is playable."""
        candidates = self.playable(state)
        if not candidates:
            return Move.draw()
        return Move.play(self.select(candidates, state.hand_for(Actor.AI)))

    @abstractmethod
    def select(self, candidates: list[Card], hand: Hand) -> Card:
        """
        Pick one card among the playable candidates.

        Args:
            candidates: Non-empty list of playable cards, in hand order
            hand: The computer's whole hand

        Returns:
            The card to play
        """


class EasyPolicy(OpponentPolicy):
    """Plays a uniformly random playable card."""

    difficulty = Difficulty.EASY

    def __init__(self, rng: Random | None = None) -> None:
        self._rng = rng or Random()

    def select(self, candidates: list[Card], hand: Hand) -> Card:
        return self._rng.choice(candidates)


class MediumPolicy(OpponentPolicy):
    """Plays the first playable non-eight, keeping eights in reserve."""

    difficulty = Difficulty.MEDIUM

    def select(self, candidates: list[Card], hand: Hand) -> Card:
        for card in candidates:
            if not card.is_wild:
                return card
        return candidates[0]


class HardPolicy(OpponentPolicy):
    """
    Plays the non-eight whose suit is most common in hand.

    Following the longest suit keeps later plays open. Ties keep the
    first-encountered card. Eights are played only when nothing else fits.
    """

    difficulty = Difficulty.HARD

    def select(self, candidates: list[Card], hand: Hand) -> Card:
        non_eights = [c for c in candidates if not c.is_wild]
        if not non_eights:
            return candidates[0]

        counts = hand.suit_counts()
        best = non_eights[0]
        for card in non_eights[1:]:
            if counts[card.suit] > counts[best.suit]:
                best = card
        return best


def policy_for(difficulty: Difficulty, rng: Random | None = None) -> OpponentPolicy:
    """Create the policy for a difficulty tier."""
    if difficulty == Difficulty.EASY:
        return EasyPolicy(rng)
    if difficulty == Difficulty.MEDIUM:
        return MediumPolicy()
    return HardPolicy()


def choose_move(state: GameState, rng: Random | None = None) -> Move:
    """Choose the computer's move using the state's difficulty."""
    return policy_for(state.difficulty, rng).choose_move(state)
