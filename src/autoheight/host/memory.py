"""In-memory editor host with a manual clock."""

from __future__ import annotations

import heapq
import itertools
from collections import deque
from collections.abc import Hashable
from dataclasses import dataclass, field

from autoheight.host.protocol import Callback, KeyCallback, View


@dataclass(slots=True)
class Window:
    id: int
    topline: int = 1
    lnum: int = 1
    col: int = 0

    def view(self) -> dict[str, int]:
        return {"topline": self.topline, "lnum": self.lnum, "col": self.col}


@dataclass(slots=True)
class Tab:
    id: int
    windows: list[Window] = field(default_factory=list)
    region_height: int = 1


class MemoryHost:
    """Editor stand-in implementing ``EditorHost``.

    Growing the region of a tab scrolls its windows by the same number of
    rows, the way a real editor shrinks the text area, so view snapshots have
    something to undo. Time only moves through ``advance``.
    """

    def __init__(
        self,
        columns: int = 80,
        echospace: int = 68,
        region_height: int = 1,
        windows: int = 1,
        tabs: int = 1,
    ) -> None:
        self._columns = columns
        self._echospace = echospace
        self.options: dict[str, bool] = {"ruler": True, "showcmd": True}
        self._ids = itertools.count(1000)
        self.tabs: list[Tab] = [self._new_tab(windows, region_height) for _ in range(tabs)]
        self.current_tab = self.tabs[0]
        self.now = 0.0
        self.fast_event = False
        self.idle = False
        self.redraws = 0
        self.clears = 0
        self.broken_windows: set[int] = set()
        self._timers: list[tuple[float, int, Callback]] = []
        self._cancelled: set[int] = set()
        self._timer_ids = itertools.count(1)
        self._pending: deque[Callback] = deque()
        self._key_callback: KeyCallback | None = None

    def _new_tab(self, windows: int, region_height: int) -> Tab:
        tab = Tab(id=next(self._ids), region_height=region_height)
        tab.windows = [Window(id=next(self._ids)) for _ in range(max(windows, 1))]
        return tab

    def _tab(self, tab_id: Hashable | None) -> Tab:
        if tab_id is None:
            return self.current_tab
        for tab in self.tabs:
            if tab.id == tab_id:
                return tab
        raise KeyError(f"Invalid tabpage id: {tab_id}")

    def _window(self, window_id: Hashable) -> Window:
        for window in self.current_tab.windows:
            if window.id == window_id:
                return window
        raise KeyError(f"Invalid window id: {window_id}")

    # Settings

    def get_region_height(self) -> int:
        return self.current_tab.region_height

    def set_region_height(self, height: int, tab: Hashable | None = None) -> None:
        target = self._tab(tab)
        delta = height - target.region_height
        target.region_height = height
        for window in target.windows:
            window.topline = max(1, window.topline + delta)

    def get_option(self, name: str) -> bool:
        return self.options[name]

    def set_option(self, name: str, value: bool) -> None:
        self.options[name] = value

    def columns(self) -> int:
        return self._columns

    def echospace(self) -> int:
        return self._echospace

    def resize(self, columns: int) -> None:
        self._echospace += columns - self._columns
        self._columns = columns

    # Windows and views

    def list_tabs(self) -> list[int]:
        return [tab.id for tab in self.tabs]

    def list_windows(self) -> list[int]:
        return [window.id for window in self.current_tab.windows]

    def save_view(self, window: Hashable) -> View:
        return self._window(window).view()

    def restore_view(self, window: Hashable, view: View) -> None:
        if window in self.broken_windows:
            raise RuntimeError(f"Invalid window id: {window}")
        target = self._window(window)
        target.topline = view["topline"]
        target.lnum = view["lnum"]
        target.col = view["col"]

    def views(self) -> dict[int, dict[str, int]]:
        return {window.id: window.view() for window in self.current_tab.windows}

    def redraw(self) -> None:
        self.redraws += 1

    def clear_messages(self) -> None:
        self.clears += 1

    # Loop state

    def in_fast_event(self) -> bool:
        return self.fast_event

    def is_idle(self) -> bool:
        return self.idle

    # Timers and deferred callbacks

    def defer(self, callback: Callback, ms: int) -> int:
        handle = next(self._timer_ids)
        heapq.heappush(self._timers, (self.now + ms / 1000, handle, callback))
        return handle

    def cancel_timer(self, handle: Hashable) -> None:
        self._cancelled.add(handle)

    @property
    def active_timers(self) -> int:
        return sum(1 for _, handle, _ in self._timers if handle not in self._cancelled)

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing due timers and then pending callbacks."""

        deadline = self.now + seconds
        while self._timers and self._timers[0][0] <= deadline:
            due, handle, callback = heapq.heappop(self._timers)
            self.now = due
            if handle in self._cancelled:
                self._cancelled.discard(handle)
                continue
            callback()
        self.now = deadline
        self.run_pending()

    def schedule(self, callback: Callback) -> None:
        self._pending.append(callback)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def run_pending(self) -> int:
        ran = 0
        while self._pending:
            self._pending.popleft()()
            ran += 1
        return ran

    # Key observer

    def subscribe_key(self, callback: KeyCallback) -> None:
        self._key_callback = callback

    def unsubscribe_key(self) -> None:
        self._key_callback = None

    @property
    def key_subscribed(self) -> bool:
        return self._key_callback is not None

    def feed_key(self, key: str = "j") -> None:
        if self._key_callback is not None:
            self._key_callback(key)
