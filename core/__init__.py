"""Core Crazy Eights engine - 100% UI-agnostic."""

from core.cards import Card, Deck, Rank, Suit, build_deck
from core.hand import Hand
from core.state import Actor, Difficulty, GamePhase, GameState

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "build_deck",
    "Hand",
    "Actor",
    "Difficulty",
    "GamePhase",
    "GameState",
]
