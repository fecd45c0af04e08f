"""Game phase enumeration and the engine-owned table state."""

from dataclasses import dataclass, field
from enum import Enum, auto

from core.cards import Deck
from core.hand import Hand


class Phase(Enum):
    """
    Game state machine phases.

    Flow: WAITING_FOR_BET → PLAYER_TURN → DEALER_TURN → ROUND_COMPLETE → WAITING_FOR_BET
    """

    # Cards are on the table but nothing is wagered yet
    WAITING_FOR_BET = auto()

    # Player actions
    PLAYER_TURN = auto()

    # Dealer draws to 17
    DEALER_TURN = auto()

    # Settled, waiting for next hand
    ROUND_COMPLETE = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


@dataclass
class GameState:
    """
    Everything on the table for one player.

    Owned and mutated by the engine only; readers should take a
    ``snapshot()``.
    """

    deck: Deck = field(default_factory=Deck)
    player_hand: Hand = field(default_factory=Hand)
    dealer_hand: Hand = field(default_factory=Hand)
    player_score: int = 1000
    dealer_score: int = 1000
    current_bet: int = 0
    is_player_turn: bool = True
    is_game_over: bool = False

    def snapshot(self) -> "GameState":
        """Return a copy that later actions will not mutate."""
        return GameState(
            deck=Deck.from_cards(self.deck),
            player_hand=self.player_hand.copy(),
            dealer_hand=self.dealer_hand.copy(),
            player_score=self.player_score,
            dealer_score=self.dealer_score,
            current_bet=self.current_bet,
            is_player_turn=self.is_player_turn,
            is_game_over=self.is_game_over,
        )
