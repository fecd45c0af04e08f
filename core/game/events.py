"""Game events for the event system."""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable, Literal


class EventType(Enum):
    """Types of game events."""

    # Game flow events
    GAME_STARTED = auto()
    ROUND_STARTED = auto()
    ROUND_ENDED = auto()

    # Betting events
    BET_PLACED = auto()

    # Card events
    CARD_DEALT = auto()
    DECK_SHUFFLED = auto()

    # Player action events
    PLAYER_HIT = auto()
    PLAYER_STAND = auto()
    PLAYER_DOUBLE = auto()

    # Dealer events
    DEALER_REVEALS = auto()
    DEALER_HITS = auto()
    DEALER_STANDS = auto()
    DEALER_BUSTS = auto()

    # Outcome events
    PLAYER_BLACKJACK = auto()
    PLAYER_BUSTS = auto()
    PLAYER_WINS = auto()
    PLAYER_LOSES = auto()
    PUSH = auto()

    # Error events
    INVALID_ACTION = auto()
    INSUFFICIENT_FUNDS = auto()
    BET_ALREADY_ACTIVE = auto()


@dataclass(frozen=True)
class GameEvent:
    """
    Immutable game event.

    Events are the primary communication mechanism between the core engine
    and the presentation layer.
    """

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


NotificationKind = Literal["win", "loss", "push", "rejected-bet"]


@dataclass(frozen=True)
class Notification:
    """A short message for the player, typically shown as a toast."""

    kind: NotificationKind
    message: str


# Type alias for event handlers
EventHandler = Callable[[GameEvent], None]


class EventEmitter:
    """
    Simple event emitter for game events.

    Allows subscribing to specific event types or all events. Only the
    most recent ``max_history`` events are kept.
    """

    def __init__(self, max_history: int = 500) -> None:
        """Initialize the event emitter."""
        self._handlers: dict[EventType | None, list[EventHandler]] = {}
        self._event_history: deque[GameEvent] = deque(maxlen=max_history)

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """
        Subscribe to events.

        Args:
            handler: Function to call when event occurs
            event_type: Specific event type to subscribe to, or None for all events
        """
        self._handlers.setdefault(event_type, []).append(handler)

    def emit(self, event: GameEvent) -> None:
        """
        Emit an event to all subscribers.

        Args:
            event: The event to emit
        """
        self._event_history.append(event)

        for handler in self._handlers.get(event.event_type, []):
            handler(event)

        # Catch-all handlers
        for handler in self._handlers.get(None, []):
            handler(event)

    def emit_new(
        self,
        event_type: EventType,
        **data: Any,
    ) -> GameEvent:
        """
        Create and emit a new event.

        Args:
            event_type: Type of event
            **data: Event data

        Returns:
            The created event
        """
        event = GameEvent(event_type=event_type, data=data)
        self.emit(event)
        return event

    @property
    def history(self) -> list[GameEvent]:
        """Return the event history."""
        return list(self._event_history)

    def clear_history(self) -> None:
        self._event_history.clear()
