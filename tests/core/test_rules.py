"""Tests for move legality."""

import pytest

from core.cards import Card, Rank, Suit
from core.rules import is_playable, playable_cards


class TestIsPlayable:
    """Tests for is_playable."""

    def test_eight_always_playable(self):
        """Eights go on anything."""
        top = Card(Rank.KING, Suit.SPADES)
        for suit in Suit:
            assert is_playable(Card(Rank.EIGHT, suit), top, Suit.SPADES)

    def test_suit_match(self):
        """Test matching the active suit."""
        assert is_playable(Card(Rank.TWO, Suit.HEARTS), Card(Rank.KING, Suit.HEARTS), Suit.HEARTS)

    def test_rank_match(self):
        """Test matching the top card's rank."""
        assert is_playable(Card(Rank.KING, Suit.CLUBS), Card(Rank.KING, Suit.HEARTS), Suit.HEARTS)

    def test_no_match(self):
        """Test a card matching neither suit nor rank."""
        assert not is_playable(Card(Rank.TWO, Suit.CLUBS), Card(Rank.KING, Suit.HEARTS), Suit.HEARTS)

    def test_active_suit_overrides_top_card_suit(self):
        """After an eight, the declared suit is what must be followed."""
        top = Card(Rank.EIGHT, Suit.HEARTS)
        assert is_playable(Card(Rank.TWO, Suit.SPADES), top, Suit.SPADES)
        assert not is_playable(Card(Rank.TWO, Suit.HEARTS), top, Suit.SPADES)

    def test_rank_match_still_allowed_after_wild(self):
        """A rank match on the top card is legal whatever suit was declared."""
        top = Card(Rank.SEVEN, Suit.HEARTS)
        assert is_playable(Card(Rank.SEVEN, Suit.CLUBS), top, Suit.SPADES)

    def test_no_top_card(self):
        """Without a discard only suit matches and eights count."""
        assert not is_playable(Card(Rank.TWO, Suit.CLUBS), None, None)
        assert is_playable(Card(Rank.EIGHT, Suit.CLUBS), None, None)


class TestPlayableCards:
    """Tests for playable_cards."""

    def test_keeps_hand_order(self, parse_cards):
        hand = parse_cards("8S", "2C", "QH", "5H", "KD")
        top = Card(Rank.FIVE, Suit.HEARTS)
        assert playable_cards(hand, top, Suit.HEARTS) == list(parse_cards("8S", "QH", "5H"))

    @pytest.mark.parametrize("codes", [(), ("2C", "3C", "KD")])
    def test_nothing_playable(self, parse_cards, codes):
        top = Card(Rank.FIVE, Suit.HEARTS)
        assert playable_cards(parse_cards(*codes), top, Suit.HEARTS) == []
