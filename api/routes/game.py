"""Game API endpoints."""

import asyncio
import logging
import time
from typing import Annotated, Any

from fastapi import APIRouter, Header, HTTPException

from api.schemas import (
    ActionRequest,
    BetRequest,
    CardResponse,
    GameStateResponse,
    HandResponse,
    NotificationResponse,
)
from api.session import create_session, get_session, update_session
from config import config
from core.cards import Card
from core.game import GameEngine
from core.hand import Hand

logger = logging.getLogger(__name__)

router = APIRouter()

# Session data keys
SESSION_KEY_ENGINE = "engine"
SESSION_KEY_LOCK = "lock"
SESSION_KEY_CREATED_AT = "created_at"
SESSION_KEY_LAST_ACTIVITY = "last_activity"


def _new_engine() -> GameEngine:
    return GameEngine(
        starting_bankroll=config.game.starting_bankroll,
        dealer_stands_on=config.game.dealer_stands_on,
    )


def _card_to_response(card: Card) -> CardResponse:
    return CardResponse(rank=str(card.rank), suit=str(card.suit), value=card.value)


def _hand_to_response(hand: Hand, hide_hole_card: bool = False) -> HandResponse:
    """Convert a Hand to HandResponse, optionally masking the second card."""
    cards = [_card_to_response(c) for c in hand.cards]
    if hide_hole_card and len(cards) > 1:
        cards[1] = CardResponse(rank=None, suit=None, value=None, face_up=False)
        return HandResponse(
            cards=cards,
            value=None,
            is_soft=False,
            is_blackjack=False,
            is_busted=False,
        )

    return HandResponse(
        cards=cards,
        value=hand.value,
        is_soft=hand.is_soft,
        is_blackjack=hand.is_blackjack,
        is_busted=hand.is_busted,
    )


def _game_state_response(game: GameEngine) -> GameStateResponse:
    """Convert engine state to response."""
    state = game.snapshot()
    hide_hole_card = state.is_player_turn and not state.is_game_over

    notification = None
    if game.notification is not None:
        notification = NotificationResponse(
            kind=game.notification.kind,
            message=game.notification.message,
        )

    return GameStateResponse(
        phase=game.phase.name,
        player_hand=_hand_to_response(state.player_hand),
        dealer_hand=_hand_to_response(state.dealer_hand, hide_hole_card=hide_hole_card),
        player_score=state.player_score,
        dealer_score=state.dealer_score,
        current_bet=state.current_bet,
        is_player_turn=state.is_player_turn,
        is_game_over=state.is_game_over,
        bet_options=list(config.game.bet_options),
        can_bet=game.can_bet,
        can_hit=game.can_hit,
        can_stand=game.can_stand,
        can_double=game.can_double,
        can_next_hand=game.can_next_hand,
        notification=notification,
    )


async def _get_session_data(session_id: str) -> dict[str, Any]:
    """Load the session or fail with 404."""
    session_data = await get_session(session_id)
    if session_data is None or SESSION_KEY_ENGINE not in session_data:
        raise HTTPException(status_code=404, detail="Unknown or expired session")
    return session_data


async def _run_action(
    session_id: str,
    action: str,
    *args: Any,
) -> GameStateResponse:
    """
    Run one engine action under the session lock.

    Actions on a single table are serialized; a rejected action becomes a
    400 carrying the engine's message.
    """
    session_data = await _get_session_data(session_id)
    game: GameEngine = session_data[SESSION_KEY_ENGINE]

    async with session_data[SESSION_KEY_LOCK]:
        accepted = getattr(game, action)(*args)
        if not accepted:
            detail = f"Cannot {action.replace('_', ' ')} now"
            if action == "place_bet" and game.notification is not None:
                detail = game.notification.message
            raise HTTPException(status_code=400, detail=detail)

        session_data[SESSION_KEY_LAST_ACTIVITY] = int(time.time())
        await update_session(session_id, session_data)
        return _game_state_response(game)


@router.post("/new")
async def new_game(
    session_id: Annotated[str | None, Header(alias="X-Session-ID")] = None,
) -> dict[str, str]:
    """Create a new table, reusing the session when one is supplied."""
    data = {
        SESSION_KEY_ENGINE: _new_engine(),
        SESSION_KEY_LOCK: asyncio.Lock(),
        SESSION_KEY_CREATED_AT: int(time.time()),
        SESSION_KEY_LAST_ACTIVITY: int(time.time()),
    }

    if session_id is not None and await get_session(session_id) is not None:
        await update_session(session_id, data)
    else:
        session_id = await create_session(data)

    logger.info("New table created")
    return {"session_id": session_id}


@router.get("/state")
async def get_state(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Get current table state."""
    session_data = await _get_session_data(session_id)
    return _game_state_response(session_data[SESSION_KEY_ENGINE])


@router.post("/bet")
async def place_bet(
    request: BetRequest,
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Place a bet and deal cards."""
    return await _run_action(session_id, "place_bet", request.amount)


@router.post("/action")
async def player_action(
    request: ActionRequest,
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Execute a player action."""
    return await _run_action(session_id, request.action)


@router.post("/next")
async def next_hand(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Clear the settled hand and deal the next one."""
    return await _run_action(session_id, "next_hand")
