"""Pytest fixtures for blackjack tests."""

import pytest
from random import Random

from hypothesis import strategies as st

from core.cards import Card, Deck, Rank, Suit
from core.hand import Hand
from core.game import GameEngine


def make_hand(*cards: str) -> Hand:
    """Build a hand from card strings like 'AS', '10H'."""
    return Hand(cards=[Card.from_string(c) for c in cards])


def stacked_deck(*top: str) -> Deck:
    """
    A full 52-card deck that deals ``top`` first, in order.

    The remaining cards follow in a fixed order with the low cards last,
    so tests that reach past ``top`` should list every card they need.
    """
    top_cards = [Card.from_string(c) for c in top]
    rest = [
        Card(rank, suit)
        for rank in reversed(list(Rank))
        for suit in Suit
        if Card(rank, suit) not in top_cards
    ]
    return Deck.from_cards(top_cards + rest)


def deck_sequence(*decks: Deck):
    """Deck factory returning the given decks in turn, then shuffled ones."""
    queue = list(decks)
    rng = Random(7)

    def factory() -> Deck:
        if queue:
            return queue.pop(0)
        deck = Deck(rng=rng)
        deck.shuffle()
        return deck

    return factory


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck(rng):
    """A shuffled deck."""
    d = Deck(rng=rng)
    d.shuffle()
    return d


@pytest.fixture
def empty_hand():
    """An empty player hand."""
    return Hand()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return make_hand("AS", "KH")


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return make_hand("AS", "6H")


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return make_hand("10S", "6H")


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return make_hand("10S", "6H", "KC")


@pytest.fixture
def game(rng):
    """A new game with a seeded shuffle."""
    return GameEngine(starting_bankroll=1000, rng=rng)


@pytest.fixture
def make_game():
    """
    Build a game whose hands come from stacked decks.

    The first deck is used for the deal at start-up, the next for the deal
    after the first bet, and so on. Deal order is player, dealer, player,
    dealer.
    """

    def _make(*decks: Deck, starting_bankroll: int = 1000) -> GameEngine:
        return GameEngine(
            starting_bankroll=starting_bankroll,
            deck_factory=deck_sequence(*decks),
        )

    return _make


# Hypothesis strategies for property-based testing
@st.composite
def card_strategy(draw):
    """Generate a random card."""
    rank = draw(st.sampled_from(list(Rank)))
    suit = draw(st.sampled_from(list(Suit)))
    return Card(rank, suit)


@st.composite
def hand_strategy(draw, min_cards=2, max_cards=6):
    """Generate a random hand."""
    cards = draw(st.lists(card_strategy(), min_size=min_cards, max_size=max_cards))
    return Hand(cards=cards)
