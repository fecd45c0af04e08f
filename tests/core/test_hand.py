"""Tests for Hand evaluation."""

import pytest
from hypothesis import given

from conftest import hand_strategy, make_hand
from core.cards import Card, Rank, Suit
from core.hand import Hand, evaluate_hands, hand_total, is_blackjack


class TestHandTotal:
    """Tests for ace-adjusted totals."""

    @pytest.mark.parametrize(
        "cards,expected",
        [
            (("AS", "AH"), 12),
            (("AS", "KH"), 21),
            (("AS", "9H", "9C"), 19),
            (("10S", "10H", "5C"), 25),
            (("AS", "AH", "AC", "9D"), 12),
            (("AS", "AH", "9C"), 21),
            (("5S", "6H"), 11),
            ((), 0),
        ],
    )
    def test_totals(self, cards, expected):
        assert hand_total(make_hand(*cards).cards) == expected

    @given(hand_strategy())
    def test_total_is_best_without_busting(self, hand):
        """Total equals the largest ace assignment that stays at or under 21."""
        hard = sum(1 if c.is_ace else c.value for c in hand.cards)
        aces = sum(1 for c in hand.cards if c.is_ace)
        candidates = [hard + 10 * k for k in range(aces + 1)]
        under = [t for t in candidates if t <= 21]
        expected = max(under) if under else hard
        assert hand_total(hand.cards) == expected


class TestIsBlackjack:
    """Tests for natural detection."""

    def test_ace_king(self):
        assert is_blackjack(make_hand("AS", "KH").cards)

    def test_three_card_21_is_not_blackjack(self):
        assert not is_blackjack(make_hand("AS", "5H", "5C").cards)

    def test_two_cards_not_21(self):
        assert not is_blackjack(make_hand("AS", "9H").cards)

    @given(hand_strategy(min_cards=3))
    def test_never_blackjack_with_more_than_two_cards(self, hand):
        assert not is_blackjack(hand.cards)


class TestHand:
    """Tests for the Hand class."""

    def test_empty_hand(self, empty_hand):
        assert len(empty_hand) == 0
        assert empty_hand.value == 0
        assert not empty_hand.is_soft
        assert not empty_hand.is_blackjack
        assert not empty_hand.is_busted

    def test_add_card(self, empty_hand):
        empty_hand.add_card(Card(Rank.TEN, Suit.SPADES))
        assert len(empty_hand) == 1
        assert empty_hand.value == 10

    def test_hard_hand_value(self, hard_16_hand):
        assert hard_16_hand.value == 16
        assert not hard_16_hand.is_soft

    def test_soft_hand_value(self, soft_17_hand):
        assert soft_17_hand.value == 17
        assert soft_17_hand.is_soft

    def test_blackjack(self, blackjack_hand):
        assert blackjack_hand.is_blackjack
        assert blackjack_hand.value == 21

    def test_bust(self, bust_hand):
        assert bust_hand.is_busted
        assert bust_hand.value == 26

    def test_soft_to_hard_transition(self):
        """Test ace switching from 11 to 1."""
        hand = make_hand("AS")
        assert hand.value == 11
        assert hand.is_soft

        hand.add_card(Card(Rank.FIVE, Suit.HEARTS))
        assert hand.value == 16
        assert hand.is_soft

        hand.add_card(Card(Rank.EIGHT, Suit.CLUBS))
        assert hand.value == 14
        assert not hand.is_soft

    def test_can_double(self):
        hand = make_hand("5S", "6H")
        assert hand.can_double

        hand.add_card(Card(Rank.TWO, Suit.CLUBS))
        assert not hand.can_double

    def test_copy_is_independent(self, blackjack_hand):
        clone = blackjack_hand.copy()
        clone.add_card(Card(Rank.TWO, Suit.CLUBS))
        assert len(blackjack_hand) == 2
        assert len(clone) == 3

    def test_str(self, blackjack_hand, bust_hand, soft_17_hand):
        assert str(blackjack_hand).endswith("(BLACKJACK)")
        assert str(bust_hand).endswith("(BUST)")
        assert str(soft_17_hand).endswith("(soft 17)")


class TestEvaluateHands:
    """Tests for hand comparison."""

    def test_player_wins_higher_value(self):
        assert evaluate_hands(make_hand("10S", "9H"), make_hand("10C", "8D")) == 1

    def test_dealer_wins_higher_value(self):
        assert evaluate_hands(make_hand("10S", "7H"), make_hand("10C", "9D")) == -1

    def test_push(self):
        assert evaluate_hands(make_hand("10S", "8H"), make_hand("10C", "8D")) == 0

    def test_player_bust_loses(self):
        assert evaluate_hands(make_hand("10S", "6H", "KC"), make_hand("10D", "7S")) == -1

    def test_dealer_bust_player_wins(self):
        assert evaluate_hands(make_hand("10S", "7H"), make_hand("10C", "6D", "KS")) == 1

    def test_both_bust_player_loses(self):
        player = make_hand("10S", "6H", "KC")
        dealer = make_hand("10D", "6D", "KS")
        assert evaluate_hands(player, dealer) == -1

    def test_natural_ties_three_card_21(self):
        """A natural is compared on its total only."""
        assert evaluate_hands(make_hand("AS", "KH"), make_hand("7C", "7D", "7S")) == 0

    @given(hand_strategy(), hand_strategy())
    def test_player_bust_always_loses(self, player, dealer):
        if player.value > 21:
            assert evaluate_hands(player, dealer) == -1
