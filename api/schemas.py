"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Literal


class BetRequest(BaseModel):
    """Request to place a bet."""

    amount: int = Field(..., ge=1, description="Bet amount")


class ActionRequest(BaseModel):
    """Request for player action."""

    action: Literal["hit", "stand", "double"]


class CardResponse(BaseModel):
    """Card representation. Face-down cards carry no rank, suit or value."""

    rank: str | None
    suit: str | None
    value: int | None
    face_up: bool = True


class HandResponse(BaseModel):
    """Hand representation; ``value`` is None while a card is face down."""

    cards: list[CardResponse]
    value: int | None
    is_soft: bool
    is_blackjack: bool
    is_busted: bool


class NotificationResponse(BaseModel):
    """Outcome or rejection message for the player."""

    kind: Literal["win", "loss", "push", "rejected-bet"]
    message: str


class GameStateResponse(BaseModel):
    """Current table state."""

    phase: str
    player_hand: HandResponse
    dealer_hand: HandResponse
    player_score: int
    dealer_score: int
    current_bet: int
    is_player_turn: bool
    is_game_over: bool
    bet_options: list[int]
    can_bet: bool
    can_hit: bool
    can_stand: bool
    can_double: bool
    can_next_hand: bool
    notification: NotificationResponse | None = None
