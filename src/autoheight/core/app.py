"""autoheight composition root."""

from __future__ import annotations

from dataclasses import dataclass

from autoheight.config import AppSettings
from autoheight.core import events as topics
from autoheight.core.events import EventBus
from autoheight.core.manager import HeightManager
from autoheight.host.protocol import EditorHost
from autoheight.logging import get_logger


@dataclass(slots=True)
class AutoHeightContext:
    settings: AppSettings
    events: EventBus
    host: EditorHost
    manager: HeightManager

    def printed(self, *values: object) -> str:
        return self.manager.on_printed_text(*values)

    def echoed(self, chunks: object) -> object:
        return self.manager.on_echoed_text(chunks)

    def mode_entered(self) -> None:
        self.events.emit(topics.MODE_ENTERED)

    def mode_left(self) -> None:
        self.events.emit(topics.MODE_LEFT)

    def resized(self) -> None:
        self.events.emit(topics.RESIZED)

    def idle(self) -> None:
        self.events.emit(topics.IDLE)

    def stop(self) -> None:
        # Re-running setup without a bus restores the region and drops subscriptions.
        self.manager.setup(self.manager.settings, events=None)


def build_context(settings: AppSettings, host: EditorHost) -> AutoHeightContext:
    events = EventBus()
    manager = HeightManager(host)
    manager.setup(settings.height, events)

    logger = get_logger("bootstrap")
    logger.info("autoheight context ready")

    return AutoHeightContext(
        settings=settings,
        events=events,
        host=host,
        manager=manager,
    )
