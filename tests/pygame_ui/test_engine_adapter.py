"""Tests for the engine adapter used by the PyGame UI."""

import pytest
from random import Random

from config import GameConfig
from core.cards import Card, Rank, Suit
from core.game.events import EventType, GameEvent
from core.state import Actor, Difficulty, GamePhase
from pygame_ui.core.engine_adapter import (
    EngineAdapter,
    UICardInfo,
    describe_event,
)


@pytest.fixture
def adapter():
    return EngineAdapter(settings=GameConfig(ai_think_delay=0.0), rng=Random(3))


class TestDescribeEvent:
    """Tests for status line text."""

    @pytest.mark.parametrize(
        "event_type,data,expected",
        [
            (EventType.GAME_STARTED, {"difficulty": "HARD"}, "Game started! Difficulty: Hard. Your turn!"),
            (EventType.GAME_OVER, {"winner": "PLAYER"}, "You win!"),
            (EventType.GAME_OVER, {"winner": "AI"}, "The computer wins."),
            (EventType.SURRENDERED, {}, "You surrendered."),
            (EventType.PLAYED, {"actor": "PLAYER", "card": "5-SPADES"}, "Computer is thinking..."),
            (EventType.PLAYED, {"actor": "AI", "card": "5-SPADES"}, "Computer played 5♠. Your turn!"),
            (EventType.WILD_PLAYED, {"actor": "PLAYER"}, "Choose a suit for your eight."),
            (
                EventType.WILD_PLAYED,
                {"actor": "AI", "suit": "CLUBS"},
                "Computer played an 8 and changed the suit to Clubs!",
            ),
            (
                EventType.WILD_SUIT_SELECTED,
                {"actor": "PLAYER", "suit": "SPADES"},
                "You changed the suit to Spades! Computer's turn.",
            ),
            (EventType.DREW_PLAYABLE, {"actor": "PLAYER"}, "You drew a playable card!"),
            (EventType.DREW_UNPLAYABLE, {"actor": "AI"}, "Computer drew. Your turn!"),
            (EventType.DECK_EMPTY_SKIPPED, {"actor": "PLAYER"}, "Deck is empty! Skipping turn."),
            (EventType.INVALID_ACTION, {"message": "Not your turn"}, "Not your turn"),
            (EventType.INVALID_ACTION, {}, "You can't do that now."),
        ],
    )
    def test_messages(self, event_type, data, expected):
        assert describe_event(GameEvent(event_type, data)) == expected

    def test_scheduling_keeps_status(self):
        assert describe_event(GameEvent(EventType.AI_TURN_SCHEDULED, {"delay": 1.5})) is None


class TestUICardInfo:
    def test_from_core_card(self):
        info = UICardInfo.from_core_card(Card(Rank.EIGHT, Suit.DIAMONDS), playable=True)
        assert info.card_id == "8-DIAMONDS"
        assert info.value == "8"
        assert info.suit == "diamonds"
        assert info.playable
        assert info.is_wild


class TestEngineAdapter:
    """Tests for the adapter's command surface."""

    def test_initial_snapshot(self, adapter):
        snap = adapter.snapshot()
        assert snap.phase == GamePhase.START
        assert snap.status == "Welcome to Crazy Eights!"
        assert snap.top_card is None
        assert not snap.can_draw

    def test_start(self, adapter):
        adapter.start(Difficulty.EASY)
        snap = adapter.snapshot()

        assert snap.phase == GamePhase.PLAYING
        assert snap.current_turn == Actor.PLAYER
        assert len(snap.player_hand) == 8
        assert snap.ai_card_count == 8
        assert snap.deck_count == 35
        assert snap.active_suit == snap.top_card.suit
        assert snap.can_draw
        assert snap.status == "Game started! Difficulty: Easy. Your turn!"

    def test_playable_flags(self, adapter):
        adapter.start()
        game = adapter.game
        expected = [game.is_playable(c) for c in game.state.player_hand]
        assert [c.playable for c in adapter.snapshot().player_hand] == expected

    def test_play_out_of_range(self, adapter):
        adapter.start()
        assert not adapter.play(-1)
        assert not adapter.play(99)

    def test_play_unplayable_sets_status(self, adapter):
        adapter.start()
        messages = []
        adapter.set_callbacks(on_invalid_action=messages.append)

        hand = adapter.snapshot().player_hand
        blocked = [i for i, c in enumerate(hand) if not c.playable]
        if not blocked:
            pytest.skip("Every dealt card is playable")

        assert not adapter.play(blocked[0])
        assert messages == [adapter.status]

    def test_draw_and_computer_reply(self, adapter):
        adapter.start()
        for _ in range(40):
            assert adapter.draw()
            if adapter.snapshot().current_turn == Actor.AI:
                break

        assert adapter.snapshot().ai_thinking
        adapter.update(0.0)
        snap = adapter.snapshot()
        assert snap.current_turn == Actor.PLAYER or snap.ai_thinking

    def test_choose_suit_unknown_name(self, adapter):
        adapter.start()
        assert not adapter.choose_suit("stars")

    def test_choose_suit_outside_selection(self, adapter):
        adapter.start()
        assert not adapter.choose_suit("spades")

    def test_surrender_reports_game_over(self, adapter):
        winners = []
        adapter.set_callbacks(on_game_over=winners.append)
        adapter.start()

        assert adapter.surrender()
        snap = adapter.snapshot()
        assert snap.phase == GamePhase.GAME_OVER
        assert snap.winner == Actor.AI
        assert snap.status == "You surrendered."
        assert winners == [Actor.AI]

    def test_stop_cancels_computer(self, adapter):
        adapter.start()
        for _ in range(40):
            adapter.draw()
            if adapter.game.ai_pending:
                break

        adapter.stop()
        assert not adapter.game.ai_pending
