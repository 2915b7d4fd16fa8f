"""Main-thread pub/sub bus carrying host lifecycle and message events."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from typing import Any

from autoheight.logging import get_logger

EventHandler = Callable[[Any], None]

# Host -> core
MODE_ENTERED = "mode.entered"
MODE_LEFT = "mode.left"
RESIZED = "host.resized"
IDLE = "host.idle"
TEXT_PRINTED = "text.printed"
TEXT_ECHOED = "text.echoed"

# Core -> observers
REGION_GROWN = "region.grown"
REGION_RESTORED = "region.restored"


class EventBus:
    """Minimal event bus for callbacks running on the host's main loop.

    A failing handler is logged and skipped so the remaining subscribers
    still see the event.
    """

    def __init__(self) -> None:
        self._subscribers: defaultdict[str, list[EventHandler]] = defaultdict(list)
        self.logger = get_logger("events")

    def subscribe(self, topic: str, handler: EventHandler) -> None:
        if handler not in self._subscribers[topic]:
            self._subscribers[topic].append(handler)

    def unsubscribe(self, topic: str, handler: EventHandler) -> None:
        if handler in self._subscribers[topic]:
            self._subscribers[topic].remove(handler)

    def subscribers(self, topic: str) -> list[EventHandler]:
        return list(self._subscribers.get(topic, ()))

    def emit(self, topic: str, payload: Any = None) -> None:
        for handler in self.subscribers(topic):
            try:
                handler(payload)
            except Exception:
                self.logger.exception("Handler for {} failed", topic)
