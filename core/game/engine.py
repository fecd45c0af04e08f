"""Blackjack game engine with state machine."""

import logging
from random import Random
from typing import Callable

from transitions import Machine

from core.cards import Card, Deck, create_deck
from core.errors import (
    BetAlreadyActiveError,
    GameError,
    InsufficientFundsError,
    InvalidActionError,
)
from core.hand import Hand
from core.game.events import EventEmitter, EventType, GameEvent, Notification
from core.game.resolution import Resolution, Winner, resolve
from core.game.state import GameState, Phase

logger = logging.getLogger(__name__)

_REJECTION_EVENTS: dict[type[GameError], EventType] = {
    InsufficientFundsError: EventType.INSUFFICIENT_FUNDS,
    BetAlreadyActiveError: EventType.BET_ALREADY_ACTIVE,
}


class GameEngine:
    """
    Single-player blackjack against an automated dealer.

    The engine owns one ``GameState`` and mutates it only through the action
    methods (``place_bet``, ``hit``, ``stand``, ``double``, ``next_hand``).
    Every action runs to completion synchronously: ending the player's turn
    plays out the dealer and settles the hand before the call returns.

    Rejected actions never raise. They return False, leave the state
    untouched and emit an error event; rejected bets also set
    ``notification`` so the caller can show why.
    """

    # State machine states
    STATES = [p.name.lower() for p in Phase]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "bet_accepted", "source": "waiting_for_bet", "dest": "player_turn"},
        {"trigger": "player_done", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "dealer_done", "source": "dealer_turn", "dest": "round_complete"},
        {"trigger": "new_round", "source": "round_complete", "dest": "waiting_for_bet"},
    ]

    def __init__(
        self,
        starting_bankroll: int = 1000,
        dealer_stands_on: int = 17,
        rng: Random | None = None,
        deck_factory: Callable[[], Deck] | None = None,
    ) -> None:
        """
        Initialize the table and deal the first hand.

        Args:
            starting_bankroll: Opening balance for both player and dealer
            dealer_stands_on: Dealer draws while below this total
            rng: Random number generator for reproducible shuffles
            deck_factory: Supplies the deck for each hand; overrides ``rng``
        """
        self._rng = rng or Random()
        self._deck_factory = deck_factory or (lambda: create_deck(self._rng))
        self.dealer_stands_on = dealer_stands_on

        self.state = GameState(
            player_score=starting_bankroll,
            dealer_score=starting_bankroll,
        )
        self.notification: Notification | None = None
        self.events = EventEmitter()

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="waiting_for_bet",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

        self.events.emit_new(EventType.GAME_STARTED, bankroll=starting_bankroll)
        self.deal_initial_hand()

    @property
    def phase(self) -> Phase:
        """Get current phase as enum."""
        return Phase[self._machine_state.upper()]  # type: ignore

    def snapshot(self) -> GameState:
        """Return a copy of the table state."""
        return self.state.snapshot()

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    # Actions

    def place_bet(self, amount: int) -> bool:
        """
        Wager ``amount`` and deal a fresh hand.

        Returns:
            True if the bet was accepted
        """
        try:
            if amount <= 0:
                raise InvalidActionError("Bet must be a positive amount")
            if self.state.current_bet > 0 or self.phase != Phase.WAITING_FOR_BET:
                raise BetAlreadyActiveError("A bet is already active for this hand")
            if amount > self.state.player_score:
                raise InsufficientFundsError(
                    f"Bet of {amount} exceeds bankroll of {self.state.player_score}"
                )
        except GameError as e:
            self.notification = Notification("rejected-bet", str(e))
            return self._reject("bet", e)

        logger.debug("Bet placed: %d", amount)
        self.state.player_score -= amount
        self.state.current_bet = amount
        self.notification = None
        self.events.emit_new(
            EventType.BET_PLACED,
            amount=amount,
            bankroll=self.state.player_score,
        )

        self.deal_initial_hand()
        self.bet_accepted()
        return True

    def hit(self) -> bool:
        """Player takes another card; 21 or more ends the turn."""
        try:
            self._require_player_turn("hit")
        except GameError as e:
            return self._reject("hit", e)

        hand = self.state.player_hand
        self._deal_card_to_hand(hand)
        self.events.emit_new(EventType.PLAYER_HIT, hand_value=hand.value)
        logger.debug("Player hits: %s", hand)

        if hand.is_busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand_value=hand.value)
        if hand.value >= 21:
            self._end_player_turn()
        return True

    def stand(self) -> bool:
        """Player keeps the current hand."""
        try:
            self._require_player_turn("stand")
        except GameError as e:
            return self._reject("stand", e)

        self.events.emit_new(EventType.PLAYER_STAND, hand_value=self.state.player_hand.value)
        logger.debug("Player stands on %d", self.state.player_hand.value)
        self._end_player_turn()
        return True

    def double(self) -> bool:
        """Double the stake, take exactly one card and end the turn."""
        hand = self.state.player_hand
        try:
            self._require_player_turn("double")
            if not hand.can_double:
                raise InvalidActionError("Can only double on the first two cards")
        except GameError as e:
            return self._reject("double", e)

        # The extra stake is taken even if it leaves the bankroll negative.
        self.state.player_score -= self.state.current_bet
        self.state.current_bet *= 2

        self._deal_card_to_hand(hand)
        self.events.emit_new(
            EventType.PLAYER_DOUBLE,
            hand_value=hand.value,
            new_bet=self.state.current_bet,
        )
        logger.debug("Player doubles to %d: %s", self.state.current_bet, hand)

        if hand.is_busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand_value=hand.value)
        self._end_player_turn()
        return True

    def next_hand(self) -> bool:
        """Clear the settled bet and deal the next hand."""
        if not self.state.is_game_over:
            return self._reject("next_hand", InvalidActionError("Hand is still in play"))

        self.state.current_bet = 0
        self.notification = None
        self.new_round()
        self.deal_initial_hand()
        return True

    # Turn sequencing

    def deal_initial_hand(self) -> None:
        """Discard the table and deal two cards each from a fresh deck."""
        self.state.deck = self._deck_factory()
        self.events.emit_new(
            EventType.DECK_SHUFFLED,
            cards_remaining=self.state.deck.cards_remaining,
        )

        self.state.player_hand = Hand()
        self.state.dealer_hand = Hand()

        # Deal: player, dealer, player, dealer (face down)
        self._deal_card_to_hand(self.state.player_hand)
        self._deal_card_to_hand(self.state.dealer_hand)
        self._deal_card_to_hand(self.state.player_hand)
        self._deal_card_to_hand(self.state.dealer_hand, face_up=False)

        self.state.is_player_turn = True
        self.state.is_game_over = False
        self.events.emit_new(EventType.ROUND_STARTED, bet=self.state.current_bet)

        if self.state.player_hand.is_blackjack:
            self.events.emit_new(EventType.PLAYER_BLACKJACK)

    def dealer_play(self) -> bool:
        """Dealer draws until reaching ``dealer_stands_on``, then the hand settles."""
        if self.phase != Phase.DEALER_TURN:
            return self._reject("dealer_play", InvalidActionError("Not the dealer's turn"))

        dealer = self.state.dealer_hand
        self.events.emit_new(
            EventType.DEALER_REVEALS,
            card=str(dealer.cards[1]),
            hand_value=dealer.value,
        )

        # Stands on soft 17
        while dealer.value < self.dealer_stands_on:
            self._deal_card_to_hand(dealer)
            self.events.emit_new(EventType.DEALER_HITS, hand_value=dealer.value)

        if dealer.is_busted:
            self.events.emit_new(EventType.DEALER_BUSTS, hand_value=dealer.value)
        else:
            self.events.emit_new(EventType.DEALER_STANDS, hand_value=dealer.value)

        self.state.is_game_over = True
        self.dealer_done()
        self._settle()
        return True

    def _end_player_turn(self) -> None:
        self.state.is_player_turn = False
        self.player_done()
        self.dealer_play()

    def _settle(self) -> Resolution:
        """Pay out the finished hand."""
        result = resolve(
            self.state.player_hand,
            self.state.dealer_hand,
            self.state.current_bet,
        )
        self.state.player_score += result.player_credit
        self.state.dealer_score += result.dealer_credit

        if result.winner == Winner.PLAYER:
            self.events.emit_new(EventType.PLAYER_WINS, amount=result.player_credit)
            message = "Blackjack! Player wins!" if result.player_blackjack else "Player wins!"
            self.notification = Notification("win", message)
        elif result.winner == Winner.DEALER:
            self.events.emit_new(EventType.PLAYER_LOSES, amount=result.dealer_credit)
            self.notification = Notification("loss", "Dealer wins!")
        else:
            self.events.emit_new(EventType.PUSH, amount=result.player_credit)
            self.notification = Notification("push", "Push!")

        self.events.emit_new(
            EventType.ROUND_ENDED,
            winner=result.winner.value,
            player_total=result.player_total,
            dealer_total=result.dealer_total,
            bankroll=self.state.player_score,
        )
        logger.info(
            "Hand settled: %s (player %d, dealer %d), bankroll %d",
            result.winner.value,
            result.player_total,
            result.dealer_total,
            self.state.player_score,
        )
        return result

    def _deal_card_to_hand(self, hand: Hand, face_up: bool = True) -> Card:
        """Deal a card to a hand."""
        card = self.state.deck.draw()
        hand.add_card(card)
        is_dealer = hand is self.state.dealer_hand
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=str(card) if face_up else "??",
            hand="dealer" if is_dealer else "player",
            hand_value=hand.value if face_up or not is_dealer else None,
        )
        return card

    def _require_player_turn(self, action: str) -> None:
        if self.phase != Phase.PLAYER_TURN:
            raise InvalidActionError(f"Cannot {action} now")

    def _reject(self, action: str, error: GameError) -> bool:
        event_type = _REJECTION_EVENTS.get(type(error), EventType.INVALID_ACTION)
        logger.warning("Rejected %s: %s", action, error)
        self.events.emit_new(event_type, action=action, message=str(error))
        return False

    # Capability queries

    @property
    def can_bet(self) -> bool:
        """Check if a new bet can be placed."""
        return self.phase == Phase.WAITING_FOR_BET and self.state.player_score > 0

    @property
    def can_hit(self) -> bool:
        return self.phase == Phase.PLAYER_TURN

    @property
    def can_stand(self) -> bool:
        return self.phase == Phase.PLAYER_TURN

    @property
    def can_double(self) -> bool:
        """Check if doubling is allowed."""
        if self.phase != Phase.PLAYER_TURN:
            return False
        return self.state.player_hand.can_double

    @property
    def can_next_hand(self) -> bool:
        return self.state.is_game_over
