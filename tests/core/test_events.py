"""Tests for the event emitter."""

from random import Random

from core.game import GameEngine
from core.game.events import EventEmitter, EventType, GameEvent
from core.game.state import Phase


class TestEventEmitter:
    """Tests for EventEmitter."""

    def test_typed_subscription(self):
        emitter = EventEmitter()
        received = []
        emitter.subscribe(received.append, EventType.PLAYER_HIT)

        emitter.emit_new(EventType.PLAYER_HIT, hand_value=15)
        emitter.emit_new(EventType.PLAYER_STAND, hand_value=15)

        assert [e.event_type for e in received] == [EventType.PLAYER_HIT]
        assert received[0].data == {"hand_value": 15}

    def test_catch_all_subscription(self):
        emitter = EventEmitter()
        received = []
        emitter.subscribe(received.append)

        emitter.emit_new(EventType.PLAYER_HIT)
        emitter.emit_new(EventType.PUSH)

        assert len(received) == 2

    def test_history(self):
        emitter = EventEmitter()
        emitter.emit(GameEvent(EventType.BET_PLACED, {"amount": 10}))

        history = emitter.history
        assert len(history) == 1
        assert str(history[0]) == "BET_PLACED: {'amount': 10}"

        history.clear()
        assert len(emitter.history) == 1

        emitter.clear_history()
        assert emitter.history == []

    def test_history_is_bounded(self):
        emitter = EventEmitter(max_history=3)
        for amount in range(5):
            emitter.emit_new(EventType.BET_PLACED, amount=amount)

        assert [e.data["amount"] for e in emitter.history] == [2, 3, 4]

    def test_history_bounded_across_many_hands(self):
        """A long-running table does not accumulate every event it ever emitted."""
        game = GameEngine(rng=Random(7))
        game.events = EventEmitter(max_history=50)
        for _ in range(40):
            game.place_bet(1)
            game.stand()
            game.next_hand()

        assert len(game.events.history) == 50
        assert game.events.history[-1].event_type in (
            EventType.ROUND_STARTED,
            EventType.PLAYER_BLACKJACK,
        )


class TestPhase:
    """Tests for Phase."""

    def test_str(self):
        assert str(Phase.WAITING_FOR_BET) == "Waiting For Bet"
