"""Round events for the event system."""

from collections import defaultdict
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable, Iterator


class EventType(Enum):
    """Types of round events."""

    # Round flow events
    ROUND_STARTED = auto()
    ROUND_ENDED = auto()

    # Deck events
    DECK_SHUFFLED = auto()
    CARD_DEALT = auto()
    DECK_EXHAUSTED = auto()

    # Player action events
    PLAYER_HIT = auto()
    PLAYER_STAND = auto()
    PLAYER_DOUBLE = auto()
    PLAYER_SPLIT = auto()
    PLAYER_SURRENDER = auto()

    # Outcome events
    PLAYER_BUSTS = auto()
    PLAYER_WINS = auto()
    PLAYER_LOSES = auto()


@dataclass(frozen=True)
class GameEvent:
    """
    Immutable round event.

    Events are the primary communication mechanism between the core engine
    and the presentation layer.
    """

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


EventHandler = Callable[[GameEvent], None]


class EventEmitter:
    """
    Fans round events out to subscribers and keeps every event emitted.

    Handlers registered for one event type run before catch-all handlers.
    """

    def __init__(self) -> None:
        self._handlers: defaultdict[EventType | None, list[EventHandler]] = defaultdict(list)
        self._event_history: list[GameEvent] = []

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """Call ``handler`` for each event of ``event_type``, or for all events when None."""
        self._handlers[event_type].append(handler)

    def unsubscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """Stop calling ``handler``; handlers that were never subscribed are ignored."""
        if handler in self._handlers[event_type]:
            self._handlers[event_type].remove(handler)

    @contextmanager
    def subscribed(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> Iterator[None]:
        """Keep ``handler`` subscribed for the body of a ``with`` block."""
        self.subscribe(handler, event_type)
        try:
            yield
        finally:
            self.unsubscribe(handler, event_type)

    def emit(self, event: GameEvent) -> None:
        self._event_history.append(event)
        for handler in (*self._handlers[event.event_type], *self._handlers[None]):
            handler(event)

    def emit_new(self, event_type: EventType, **data: Any) -> GameEvent:
        """Build an event from keyword data, emit it and return it."""
        event = GameEvent(event_type=event_type, data=data)
        self.emit(event)
        return event

    @property
    def history(self) -> list[GameEvent]:
        """Return a copy of every event emitted so far."""
        return self._event_history.copy()

    def event_types(self) -> list[EventType]:
        """Return the types of all emitted events, oldest first."""
        return [event.event_type for event in self._event_history]
