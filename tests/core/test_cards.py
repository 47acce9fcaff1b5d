"""Tests for Card and Deck classes."""

import pytest
from random import Random

from hypothesis import given, strategies as st

from core.cards import Card, Deck, Rank, Suit, build_deck


class TestCard:
    """Tests for the Card class."""

    def test_card_creation(self):
        """Test creating a card."""
        card = Card(Rank.ACE, Suit.SPADES)
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES

    def test_card_immutability(self):
        """Test that cards are immutable."""
        card = Card(Rank.ACE, Suit.SPADES)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    def test_card_id(self):
        """Test stable identifiers."""
        assert Card(Rank.EIGHT, Suit.HEARTS).id == "8-HEARTS"
        assert Card(Rank.TEN, Suit.SPADES).id == "10-SPADES"
        assert Card(Rank.QUEEN, Suit.DIAMONDS).id == "Q-DIAMONDS"

    def test_card_from_id(self):
        """Test parsing identifiers."""
        assert Card.from_id("8-HEARTS") == Card(Rank.EIGHT, Suit.HEARTS)
        assert Card.from_id("10-spades") == Card(Rank.TEN, Suit.SPADES)

    @pytest.mark.parametrize("bad", ["", "8", "8-STARS", "1-HEARTS", "HEARTS-8"])
    def test_card_from_id_invalid(self, bad):
        """Test that malformed identifiers are rejected."""
        with pytest.raises(ValueError):
            Card.from_id(bad)

    def test_card_is_wild(self):
        """Test that only eights are wild."""
        assert Card(Rank.EIGHT, Suit.CLUBS).is_wild
        assert not Card(Rank.NINE, Suit.CLUBS).is_wild

    def test_card_from_string(self):
        """Test creating cards from strings."""
        assert Card.from_string("AS") == Card(Rank.ACE, Suit.SPADES)
        assert Card.from_string("2H") == Card(Rank.TWO, Suit.HEARTS)
        assert Card.from_string("10D") == Card(Rank.TEN, Suit.DIAMONDS)
        assert Card.from_string("TD") == Card(Rank.TEN, Suit.DIAMONDS)
        assert Card.from_string("kc") == Card(Rank.KING, Suit.CLUBS)

    def test_card_from_string_with_symbols(self):
        """Test creating cards from strings with suit symbols."""
        assert Card.from_string("8♠") == Card(Rank.EIGHT, Suit.SPADES)
        assert Card.from_string("K♥") == Card(Rank.KING, Suit.HEARTS)

    def test_card_from_string_invalid(self):
        """Test invalid card strings."""
        with pytest.raises(ValueError):
            Card.from_string("X")
        with pytest.raises(ValueError):
            Card.from_string("ZH")
        with pytest.raises(ValueError):
            Card.from_string("AX")

    def test_card_str(self):
        """Test string representation."""
        assert str(Card(Rank.EIGHT, Suit.HEARTS)) == "8♥"

    def test_card_hash(self):
        """Test that cards can be used in sets/dicts."""
        assert len({Card(Rank.ACE, Suit.SPADES), Card(Rank.ACE, Suit.SPADES)}) == 1

    def test_suit_colors(self):
        """Test red and black suits."""
        assert Suit.HEARTS.is_red and Suit.DIAMONDS.is_red
        assert not Suit.CLUBS.is_red and not Suit.SPADES.is_red


class TestDeck:
    """Tests for the Deck class and build_deck."""

    def test_deck_creation(self):
        """Test creating a new deck."""
        assert len(Deck()) == 52

    def test_deck_has_all_cards(self):
        """Test that deck contains all 52 unique cards."""
        deck = Deck()
        assert len(set(deck)) == 52
        assert set(deck) == {Card(r, s) for r in Rank for s in Suit}

    def test_deck_shuffle_keeps_cards(self, rng):
        """Test that shuffling only reorders."""
        deck = Deck(rng=rng)
        before = list(deck)
        deck.shuffle()
        assert sorted(before, key=lambda c: c.id) == sorted(deck, key=lambda c: c.id)
        assert list(deck) != before

    def test_build_deck_reproducible(self):
        """Test that the same seed gives the same order."""
        assert build_deck(Random(7)) == build_deck(Random(7))
        assert build_deck(Random(7)) != build_deck(Random(8))

    def test_deck_reset(self, rng):
        """Test resetting restores the ordered deck."""
        deck = Deck(rng=rng)
        ordered = list(deck)
        deck.shuffle()
        deck.reset()
        assert list(deck) == ordered

    @given(st.integers(min_value=0, max_value=2**32))
    def test_build_deck_is_a_permutation(self, seed):
        """Any shuffle holds every (rank, suit) pair exactly once."""
        deck = build_deck(Random(seed))
        assert len(deck) == 52
        assert len(set(deck)) == 52
        assert sum(1 for c in deck if c.is_wild) == 4
