"""Hands of cards held by the two players."""

from dataclasses import dataclass
from typing import Iterable, Iterator

from core.cards import Card, Suit


@dataclass(frozen=True)
class Hand:
    """
    An immutable hand of cards.

    Order is insertion order and only matters for display and for
    first-encountered tie-breaks in the opponent policy.
    """

    cards: tuple[Card, ...] = ()

    @classmethod
    def of(cls, cards: Iterable[Card]) -> "Hand":
        """Create a hand from any iterable of cards."""
        return cls(tuple(cards))

    def with_card(self, card: Card) -> "Hand":
        """Return a new hand with a card appended."""
        return Hand(self.cards + (card,))

    def without_card(self, card: Card) -> "Hand":
        """
        Return a new hand with the first copy of a card removed.

        Raises:
            ValueError: If the card is not in the hand
        """
        if card not in self.cards:
            raise ValueError(f"{card!r} is not in hand")
        index = self.cards.index(card)
        return Hand(self.cards[:index] + self.cards[index + 1:])

    def suit_counts(self) -> dict[Suit, int]:
        """Count cards per suit, with every suit present as a key."""
        counts = {suit: 0 for suit in Suit}
        for card in self.cards:
            counts[card.suit] += 1
        return counts

    @property
    def is_empty(self) -> bool:
        """Check if the hand has been played out."""
        return not self.cards

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __contains__(self, card: object) -> bool:
        return card in self.cards

    def __str__(self) -> str:
        return " ".join(str(card) for card in self.cards)
