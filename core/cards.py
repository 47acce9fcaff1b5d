"""Card, Deck, and deck construction - immutable card representations."""

from dataclasses import dataclass
from enum import Enum, auto
from random import Random
from typing import Iterator


class Suit(Enum):
    """Card suits, declared in tie-break order."""

    HEARTS = auto()
    DIAMONDS = auto()
    CLUBS = auto()
    SPADES = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.HEARTS: "♥",
            Suit.DIAMONDS: "♦",
            Suit.CLUBS: "♣",
            Suit.SPADES: "♠",
        }
        return symbols[self]

    @property
    def is_red(self) -> bool:
        """Check if this suit is printed in red."""
        return self in (Suit.HEARTS, Suit.DIAMONDS)


class Rank(Enum):
    """Card ranks from ACE to KING, valued by their face label."""

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"

    def __str__(self) -> str:
        return self.value

    @property
    def is_wild(self) -> bool:
        """Eights are wild."""
        return self == Rank.EIGHT


_RANK_ALIASES = {"T": Rank.TEN}

_SUIT_LOOKUP = {
    "H": Suit.HEARTS,
    "♥": Suit.HEARTS,
    "D": Suit.DIAMONDS,
    "♦": Suit.DIAMONDS,
    "C": Suit.CLUBS,
    "♣": Suit.CLUBS,
    "S": Suit.SPADES,
    "♠": Suit.SPADES,
}


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def id(self) -> str:
        """Stable identifier derived from rank and suit, e.g. ``8-HEARTS``."""
        return f"{self.rank.value}-{self.suit.name}"

    @property
    def is_wild(self) -> bool:
        """Check if this card is an eight."""
        return self.rank.is_wild

    @classmethod
    def from_id(cls, card_id: str) -> "Card":
        """Create a card from its identifier, e.g. ``'10-SPADES'``."""
        rank_str, sep, suit_str = card_id.strip().rpartition("-")
        if not sep:
            raise ValueError(f"Invalid card id: {card_id}")
        try:
            return cls(Rank(rank_str.upper()), Suit[suit_str.upper()])
        except (KeyError, ValueError) as exc:
            raise ValueError(f"Invalid card id: {card_id}") from exc

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '8♠', '10H', 'qd'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        if rank_str in _RANK_ALIASES:
            rank = _RANK_ALIASES[rank_str]
        else:
            try:
                rank = Rank(rank_str)
            except ValueError:
                raise ValueError(f"Invalid rank: {rank_str}") from None

        if suit_str not in _SUIT_LOOKUP:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(rank, _SUIT_LOOKUP[suit_str])


class Deck:
    """A standard 52-card deck."""

    def __init__(self, rng: Random | None = None) -> None:
        """Initialize a new deck in suit-then-rank order."""
        self._rng = rng or Random()
        self._cards: list[Card] = []
        self.reset()

    def reset(self) -> None:
        """Reset deck to all 52 cards in order."""
        self._cards = [Card(rank, suit) for suit in Suit for rank in Rank]

    def shuffle(self) -> None:
        """Shuffle the deck in place.

        ``Random.shuffle`` is a Fisher-Yates shuffle: walking from the last
        index down to 1, each position is swapped with a uniformly chosen
        index in ``[0, i]``.
        """
        self._rng.shuffle(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)


def build_deck(rng: Random | None = None) -> tuple[Card, ...]:
    """
    Build a freshly shuffled 52-card deck.

    Args:
        rng: Random number generator for reproducible shuffles

    Returns:
        Every (suit, rank) pair exactly once, in shuffled order
    """
    deck = Deck(rng=rng)
    deck.shuffle()
    return tuple(deck)
