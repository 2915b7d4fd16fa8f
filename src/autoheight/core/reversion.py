"""Timer and key-press triggers that end a grown-region episode."""

from __future__ import annotations

from collections.abc import Callable, Hashable

from autoheight.config import HeightSettings
from autoheight.core.state import ReversionPhase
from autoheight.host.protocol import EditorHost
from autoheight.logging import get_logger


class ReversionScheduler:
    """Two-step reversion: a one-shot timer, then optionally a key watch.

    IDLE --arm--> TIMER_ARMED --fire--> KEY_ARMED --key--> IDLE
    When ``remove_on_key`` is off the timer fire goes straight back to IDLE
    and calls ``on_expired``. ``cancel`` returns to IDLE from any phase.
    """

    def __init__(
        self,
        host: EditorHost,
        settings: HeightSettings,
        on_expired: Callable[[], None],
        on_key: Callable[[], None],
    ) -> None:
        self.host = host
        self.settings = settings
        self.on_expired = on_expired
        self.on_key = on_key
        self.logger = get_logger("reversion")
        self.phase = ReversionPhase.IDLE
        self.timer_handle: Hashable | None = None
        self._generation = 0

    @property
    def armed(self) -> bool:
        return self.phase is not ReversionPhase.IDLE

    def arm(self) -> None:
        self.cancel()
        self._generation += 1
        generation = self._generation
        self.timer_handle = self.host.defer(
            lambda: self._timer_fired(generation), self.settings.duration_ms
        )
        self.phase = ReversionPhase.TIMER_ARMED

    def cancel(self) -> None:
        if self.phase is ReversionPhase.KEY_ARMED:
            self.host.unsubscribe_key()
        if self.timer_handle is not None:
            self.host.cancel_timer(self.timer_handle)
            self.timer_handle = None
        self.phase = ReversionPhase.IDLE

    def _timer_fired(self, generation: int) -> None:
        # A cancelled timer may still fire once on hosts that cannot revoke it.
        if generation != self._generation or self.phase is not ReversionPhase.TIMER_ARMED:
            return
        self.timer_handle = None
        if self.settings.remove_on_key:
            self.logger.trace("Timer elapsed, waiting for a key press")
            self.host.subscribe_key(self._key_observed)
            self.phase = ReversionPhase.KEY_ARMED
        else:
            self.logger.trace("Timer elapsed, reverting")
            self.phase = ReversionPhase.IDLE
            self.on_expired()

    def _key_observed(self, key: str) -> None:
        if self.phase is not ReversionPhase.KEY_ARMED:
            return
        self.host.unsubscribe_key()
        self.phase = ReversionPhase.IDLE
        self.on_key()
