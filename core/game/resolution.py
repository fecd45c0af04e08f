"""Settling a finished hand."""

from dataclasses import dataclass
from enum import Enum

from core.hand import Hand, evaluate_hands


class Winner(Enum):
    """Who took the hand."""

    PLAYER = "player"
    DEALER = "dealer"
    PUSH = "push"


@dataclass(frozen=True)
class Resolution:
    """Outcome of a hand and the credits it produces."""

    winner: Winner
    player_total: int
    dealer_total: int
    player_credit: int = 0
    dealer_credit: int = 0
    player_blackjack: bool = False


def resolve(player_hand: Hand, dealer_hand: Hand, current_bet: int) -> Resolution:
    """
    Compute the outcome of a finished hand.

    The stake has already left the player's bankroll, so a win credits twice
    the stake, a push returns it, and a loss credits the stake to the dealer.
    A natural is flagged on the result but paid like any other win.
    """
    outcome = evaluate_hands(player_hand, dealer_hand)
    totals = {
        "player_total": player_hand.value,
        "dealer_total": dealer_hand.value,
        "player_blackjack": player_hand.is_blackjack,
    }

    if outcome == 1:
        return Resolution(Winner.PLAYER, player_credit=current_bet * 2, **totals)
    if outcome == -1:
        return Resolution(Winner.DEALER, dealer_credit=current_bet, **totals)
    return Resolution(Winner.PUSH, player_credit=current_bet, **totals)
