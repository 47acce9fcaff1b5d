"""Tests for the computer opponent policies."""

import pytest
from random import Random

from core.cards import Card, Rank, Suit
from core.hand import Hand
from core.state import Actor, Difficulty
from core.strategy import (
    EasyPolicy,
    HardPolicy,
    MediumPolicy,
    Move,
    MoveKind,
    choose_move,
    choose_wild_suit,
    policy_for,
)


class TestChooseWildSuit:
    """Tests for wild suit selection."""

    def test_most_held_suit(self, parse_cards):
        assert choose_wild_suit(Hand.of(parse_cards("2H", "2D", "9D"))) == Suit.DIAMONDS

    def test_ties_go_to_earlier_suit(self, parse_cards):
        assert choose_wild_suit(Hand.of(parse_cards("2S", "3C", "4C", "5S"))) == Suit.CLUBS
        assert choose_wild_suit(Hand.of(parse_cards("2S", "3D"))) == Suit.DIAMONDS

    def test_empty_hand(self):
        assert choose_wild_suit(Hand()) == Suit.HEARTS


class TestPolicyFor:
    """Tests for the policy factory."""

    @pytest.mark.parametrize(
        "difficulty,cls",
        [
            (Difficulty.EASY, EasyPolicy),
            (Difficulty.MEDIUM, MediumPolicy),
            (Difficulty.HARD, HardPolicy),
        ],
    )
    def test_policy_for(self, difficulty, cls):
        policy = policy_for(difficulty)
        assert isinstance(policy, cls)
        assert policy.difficulty == difficulty


class TestChooseMove:
    """Tests for move selection at each difficulty."""

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_draws_when_nothing_playable(self, build_state, difficulty):
        state = build_state(ai=("2C", "3C"), discard=("5H",), turn=Actor.AI, difficulty=difficulty)
        assert choose_move(state, Random(1)) == Move.draw()

    def test_easy_picks_a_playable_card(self, build_state, parse_cards):
        state = build_state(ai=("2H", "2C", "8S", "5D"), discard=("5H",), turn=Actor.AI)
        playable = set(parse_cards("2H", "8S", "5D"))
        policy = EasyPolicy(Random(0))
        for _ in range(20):
            move = policy.choose_move(state)
            assert move.kind == MoveKind.PLAY
            assert move.card in playable

    def test_easy_uses_every_candidate(self, build_state):
        state = build_state(ai=("2H", "3H", "4H"), discard=("5H",), turn=Actor.AI)
        policy = EasyPolicy(Random(0))
        chosen = {policy.choose_move(state).card for _ in range(60)}
        assert len(chosen) == 3

    def test_medium_prefers_first_non_eight(self, build_state):
        state = build_state(ai=("8S", "2C", "KH", "QH"), discard=("5H",), turn=Actor.AI)
        assert MediumPolicy().choose_move(state) == Move.play(Card(Rank.KING, Suit.HEARTS))

    def test_medium_falls_back_to_eight(self, build_state):
        state = build_state(ai=("2C", "8S", "8D"), discard=("5H",), turn=Actor.AI)
        assert MediumPolicy().choose_move(state) == Move.play(Card(Rank.EIGHT, Suit.SPADES))

    def test_hard_tie_keeps_first_encountered(self, build_state):
        """3♥ and 3♦ are both held once; the first in hand order wins."""
        state = build_state(
            ai=("3H", "3D", "8C"), discard=("3S",), active_suit=Suit.SPADES, turn=Actor.AI
        )
        assert HardPolicy().choose_move(state) == Move.play(Card(Rank.THREE, Suit.HEARTS))

    def test_hard_follows_longest_suit(self, build_state):
        state = build_state(
            ai=("3H", "3D", "7D", "8C"), discard=("3S",), active_suit=Suit.SPADES, turn=Actor.AI
        )
        assert HardPolicy().choose_move(state) == Move.play(Card(Rank.THREE, Suit.DIAMONDS))

    def test_hard_counts_eights_toward_suits(self, build_state):
        """The eight of clubs makes clubs the longer suit."""
        state = build_state(
            ai=("5D", "5C", "8C"), discard=("5S",), active_suit=Suit.SPADES, turn=Actor.AI
        )
        assert HardPolicy().choose_move(state) == Move.play(Card(Rank.FIVE, Suit.CLUBS))

    def test_hard_plays_eight_last(self, build_state):
        state = build_state(ai=("2C", "8D", "8S"), discard=("5H",), turn=Actor.AI)
        assert HardPolicy().choose_move(state) == Move.play(Card(Rank.EIGHT, Suit.DIAMONDS))

    def test_module_choose_move_uses_state_difficulty(self, build_state):
        state = build_state(
            ai=("8S", "2C", "KH"), discard=("5H",), turn=Actor.AI, difficulty=Difficulty.MEDIUM
        )
        assert choose_move(state) == Move.play(Card(Rank.KING, Suit.HEARTS))

    def test_move_str(self):
        assert str(Move.draw()) == "draw"
        assert str(Move.play(Card(Rank.EIGHT, Suit.HEARTS))) == "play 8♥"
