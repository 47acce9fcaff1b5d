"""Pytest fixtures for Crazy Eights tests."""

import pytest
from random import Random

from core.cards import Card
from core.game import CrazyEightsGame
from core.hand import Hand
from core.state import Actor, Difficulty, GamePhase, GameState


def cards(*codes: str) -> tuple[Card, ...]:
    """Build cards from short codes such as '8H', '10S', 'QD'."""
    return tuple(Card.from_string(code) for code in codes)


def make_state(
    player=(),
    ai=(),
    discard=("5H",),
    deck=(),
    turn=Actor.PLAYER,
    status=GamePhase.PLAYING,
    active_suit=None,
    difficulty=Difficulty.MEDIUM,
    winner=None,
) -> GameState:
    """
    Build a snapshot from card codes.

    The active suit defaults to the suit of the top discard.
    """
    discard_cards = cards(*discard)
    if active_suit is None and discard_cards:
        active_suit = discard_cards[-1].suit
    return GameState(
        deck=cards(*deck),
        player_hand=Hand.of(cards(*player)),
        ai_hand=Hand.of(cards(*ai)),
        discard_pile=discard_cards,
        current_turn=turn,
        status=status,
        winner=winner,
        active_suit=active_suit,
        difficulty=difficulty,
    )


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def game(rng):
    """A dealt game with the computer thinking instantly."""
    g = CrazyEightsGame(ai_think_delay=0.0, rng=rng)
    g.start_game()
    return g


@pytest.fixture
def fresh_game(rng):
    """A controller that has not dealt yet."""
    return CrazyEightsGame(ai_think_delay=1.5, rng=rng)


@pytest.fixture
def events(game):
    """Events emitted by the game fixture after the deal."""
    received = []
    game.subscribe(received.append)
    return received


@pytest.fixture
def build_state():
    """Factory for snapshots described with card codes."""
    return make_state


@pytest.fixture
def parse_cards():
    """Factory for card tuples described with card codes."""
    return cards
