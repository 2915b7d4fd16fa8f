"""Grow the output region to fit long messages and shrink it back afterwards."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from autoheight.config import HeightSettings
from autoheight.core import events as topics
from autoheight.core.events import EventBus
from autoheight.core.measure import measure
from autoheight.core.probes import echoed_message, printed_message
from autoheight.core.reversion import ReversionScheduler
from autoheight.core.state import ManagerState
from autoheight.core.views import ViewSnapshot, restore_views, save_views
from autoheight.host.protocol import EditorHost
from autoheight.logging import get_logger

# Options that claim columns on the last row and are switched off while a
# message needs the full width.
COSMETIC_OPTIONS = ("ruler", "showcmd")


class HeightManager:
    """Decides the region height for each intercepted message.

    One instance per editor. An episode starts with the first message that
    does not fit the baseline height and ends with ``deactivate``; in
    between the region never drops below the baseline, and every message is
    re-measured from the un-overridden state so heights do not compound.
    """

    def __init__(
        self,
        host: EditorHost,
        is_unsafe_context: Callable[[], bool] | None = None,
    ) -> None:
        self.host = host
        self.is_unsafe_context = is_unsafe_context or host.in_fast_event
        self.logger = get_logger("height-manager")
        self.state = ManagerState()
        self.events: EventBus | None = None
        self._deactivate_generation = 0
        self.settings = HeightSettings()
        self.reversion = self._build_reversion()

    def _build_reversion(self) -> ReversionScheduler:
        return ReversionScheduler(
            self.host,
            self.settings,
            on_expired=self.deactivate,
            on_key=self.schedule_deactivate,
        )

    def setup(
        self,
        settings: HeightSettings | Mapping[str, Any] | None = None,
        events: EventBus | None = None,
    ) -> None:
        if not isinstance(settings, HeightSettings):
            settings = HeightSettings.from_options(settings)
        self.deactivate()
        self.reversion.cancel()
        self.settings = settings
        self.reversion = self._build_reversion()

        if self.events is not None:
            self._unsubscribe(self.events)
        if events is not None:
            self._subscribe(events)
        self.events = events
        self.logger.debug("Configured: {}", settings.model_dump())

    def _handlers(self) -> dict[str, Callable[[Any], Any]]:
        return {
            topics.MODE_ENTERED: self.on_mode_entered,
            topics.MODE_LEFT: self.on_mode_left,
            topics.RESIZED: self.on_resized,
            topics.IDLE: self.on_idle,
            topics.TEXT_PRINTED: self._on_printed_event,
            topics.TEXT_ECHOED: self.on_echoed_text,
        }

    def _subscribe(self, events: EventBus) -> None:
        for topic, handler in self._handlers().items():
            events.subscribe(topic, handler)

    def _unsubscribe(self, events: EventBus) -> None:
        for topic, handler in self._handlers().items():
            events.unsubscribe(topic, handler)

    def _emit(self, topic: str, payload: Any) -> None:
        if self.events is not None:
            self.events.emit(topic, payload)

    # Probes

    def on_printed_text(self, *values: Any) -> str:
        message = printed_message(*values)
        self.activate(message)
        return message

    def _on_printed_event(self, payload: Any) -> None:
        # Bus events carry the message as their payload; an empty event prints nothing.
        if payload is not None:
            self.on_printed_text(payload)

    def on_echoed_text(self, chunks: Any) -> Any:
        message = echoed_message(chunks)
        if message is None:
            self.logger.trace("Ignoring malformed echo payload")
            return chunks
        self.activate(message.text)
        return message.chunks

    # Cosmetic options

    def _override_settings(self) -> None:
        if self.state.overridden_settings is None:
            self.state.overridden_settings = {
                name: self.host.get_option(name) for name in COSMETIC_OPTIONS
            }
            for name in COSMETIC_OPTIONS:
                self.host.set_option(name, False)

    def _restore_settings(self) -> None:
        if self.state.overridden_settings is not None:
            for name, value in self.state.overridden_settings.items():
                self.host.set_option(name, value)
            self.state.overridden_settings = None

    # Episode

    def activate(self, text: str) -> None:
        state = self.state
        if state.in_excluded_mode or self.is_unsafe_context():
            self.logger.trace("Skipping message in excluded or unsafe context")
            return
        if state.processed_this_tick:
            self.schedule_deactivate()
            return
        state.processed_this_tick = True

        snapshot = save_views(self.host)
        self._restore_settings()
        if not state.active:
            state.baseline_height = self.host.get_region_height()
        baseline = state.baseline_height

        result = measure(text, self.host.columns(), self.host.echospace(), baseline)
        fits = result.required_rows <= baseline and not result.override_needed
        too_large = result.required_rows > self.settings.max_lines
        if (fits or too_large) and not self.settings.clear_always:
            if too_large:
                self.logger.debug(
                    "Message needs {} rows, over max_lines={}", result.required_rows, self.settings.max_lines
                )
            self.deactivate(snapshot)
            return

        state.active = True
        self._cancel_scheduled_deactivate()
        self.reversion.arm()
        if result.override_needed:
            self._override_settings()
        height = max(result.required_rows, baseline)
        self.host.set_region_height(height)
        restore_views(self.host, snapshot)
        self.host.redraw()
        self.logger.debug("Region grown to {} rows (baseline {})", height, baseline)
        self._emit(topics.REGION_GROWN, height)

    def deactivate(self, snapshot: ViewSnapshot | None = None) -> None:
        state = self.state
        if not state.active:
            return
        if snapshot is None:
            snapshot = save_views(self.host)
        state.active = False

        baseline = state.baseline_height
        for tab in self.host.list_tabs():
            self.host.set_region_height(baseline, tab=tab)
        if self.settings.clear_always:
            self.host.clear_messages()
        self._restore_settings()
        self.reversion.cancel()
        self.host.set_region_height(baseline)
        restore_views(self.host, snapshot)
        self.host.redraw()
        self.logger.debug("Region restored to {} rows", baseline)
        self._emit(topics.REGION_RESTORED, baseline)

    def schedule_deactivate(self) -> None:
        if self.state.deactivate_pending:
            return
        self.state.deactivate_pending = True
        self._deactivate_generation += 1
        generation = self._deactivate_generation

        def run() -> None:
            if self.state.deactivate_pending and generation == self._deactivate_generation:
                self.state.deactivate_pending = False
                self.deactivate()

        self.host.schedule(run)

    def _cancel_scheduled_deactivate(self) -> None:
        self.state.deactivate_pending = False

    # Host lifecycle

    def on_mode_entered(self, payload: Any = None) -> None:
        self.state.in_excluded_mode = True
        self._cancel_scheduled_deactivate()
        self.deactivate()

    def on_mode_left(self, payload: Any = None) -> None:
        self.state.in_excluded_mode = False
        self.deactivate()

    def on_resized(self, payload: Any = None) -> None:
        self.deactivate()

    def on_idle(self, payload: Any = None) -> None:
        self.state.processed_this_tick = False
        # Only a grown region needs a deferred shrink.
        if self.state.active and not self.state.deactivate_pending and self.host.is_idle():
            self.schedule_deactivate()
