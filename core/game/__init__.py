"""Game engine and state management."""

from core.game.events import EventType, GameEvent, Notification
from core.game.resolution import Resolution, Winner, resolve
from core.game.state import GameState, Phase
from core.game.engine import GameEngine

__all__ = [
    "EventType",
    "GameEvent",
    "Notification",
    "Resolution",
    "Winner",
    "resolve",
    "GameState",
    "Phase",
    "GameEngine",
]
