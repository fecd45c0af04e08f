"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from core.cards import Card


def hand_total(cards: Iterable[Card]) -> int:
    """
    Calculate the best total for a set of cards.

    Aces start at 11 and are demoted to 1 one at a time while the total is
    over 21. Returns the highest total that doesn't bust, or the lowest bust
    total when every ace has already been demoted.
    """
    total = 0
    aces = 0

    for card in cards:
        if card.is_ace:
            aces += 1
        total += card.value

    while total > 21 and aces > 0:
        total -= 10
        aces -= 1

    return total


def is_blackjack(cards: Iterable[Card]) -> bool:
    """Check for a natural: exactly two cards totalling 21."""
    cards = list(cards)
    return len(cards) == 2 and hand_total(cards) == 21


@dataclass
class Hand:
    """A blackjack hand with value calculation."""

    cards: list[Card] = field(default_factory=list)

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    @property
    def value(self) -> int:
        return hand_total(self.cards)

    @property
    def is_soft(self) -> bool:
        """
        Check if the hand is soft (has an ace counted as 11).

        A hand is soft if it contains an ace that can be counted as 11
        without busting.
        """
        if not any(card.is_ace for card in self.cards):
            return False

        total_hard = sum(1 if card.is_ace else card.value for card in self.cards)
        return total_hard + 10 <= 21

    @property
    def is_blackjack(self) -> bool:
        return is_blackjack(self.cards)

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return self.value > 21

    @property
    def can_double(self) -> bool:
        """Doubling is only allowed on the first two cards."""
        return len(self.cards) == 2

    def copy(self) -> "Hand":
        return Hand(cards=list(self.cards))

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        value_str = f"({self.value})"
        if self.is_soft:
            value_str = f"(soft {self.value})"
        if self.is_blackjack:
            value_str = "(BLACKJACK)"
        if self.is_busted:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"


def evaluate_hands(player_hand: Hand, dealer_hand: Hand) -> int:
    """
    Compare player and dealer hands on totals alone.

    A natural gets no special treatment here; it wins or ties on its total
    like any other 21.

    Returns:
        1 if player wins
        -1 if dealer wins
        0 if push (tie)
    """
    player_value = player_hand.value
    dealer_value = dealer_hand.value

    # Player busts always loses, even when the dealer busts too
    if player_value > 21:
        return -1

    if dealer_value > 21:
        return 1

    if player_value > dealer_value:
        return 1
    if dealer_value > player_value:
        return -1
    return 0
