"""Move legality for Crazy Eights."""

from typing import Iterable

from core.cards import Card, Suit


def is_playable(card: Card, top_card: Card | None, active_suit: Suit | None) -> bool:
    """
    Check if a card may be played on the discard pile.

    Eights are always playable. Any other card must match the active suit
    or the rank of the top card; a rank match is legal even when the active
    suit has been changed by an earlier eight.

    Args:
        card: Card the actor wants to play
        top_card: Card currently on top of the discard pile
        active_suit: Suit that plays must currently follow

    Returns:
        True if the card can be played
    """
    if card.is_wild:
        return True
    if card.suit == active_suit:
        return True
    return top_card is not None and card.rank == top_card.rank


def playable_cards(
    cards: Iterable[Card],
    top_card: Card | None,
    active_suit: Suit | None,
) -> list[Card]:
    """Return the playable cards, keeping their original order."""
    return [c for c in cards if is_playable(c, top_card, active_suit)]
