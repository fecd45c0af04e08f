"""Core blackjack engine - 100% UI-agnostic."""

from core.cards import Card, Deck, Rank, Suit, create_deck
from core.hand import Hand, hand_total, is_blackjack

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "create_deck",
    "Hand",
    "hand_total",
    "is_blackjack",
]
