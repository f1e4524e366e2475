"""Reporting channel between the encounter service and its listeners.

The combat core never prints. The service publishes each outcome here as a
GameEvent holding ids and plain values; listeners (the narration log, tests,
an API client) decide what to do with it.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)

ALL_EVENTS = "*"


@dataclass(frozen=True)
class GameEvent:
    event_type: str
    data: dict[str, Any]
    source: str


EventHandler = Callable[[GameEvent], None]


class EventBus:
    """Synchronous publish/subscribe.

    Handlers for a type run in subscription order, then the ALL_EVENTS
    handlers. A handler that raises is logged and skipped; the publisher
    never sees the error.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)
        else:
            logger.warning("No such handler for %s: %r", event_type, handler)

    def emit(self, event: GameEvent) -> None:
        handlers = self._handlers.get(event.event_type, []) + self._handlers.get(
            ALL_EVENTS, []
        )
        logger.debug(
            "%s from %s -> %d handler(s)", event.event_type, event.source, len(handlers)
        )
        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception("Handler failed for %s", event.event_type)

    def clear(self) -> None:
        self._handlers.clear()

    @property
    def handler_count(self) -> int:
        return sum(len(h) for h in self._handlers.values())
