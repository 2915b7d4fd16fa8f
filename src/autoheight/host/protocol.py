"""Capabilities the editor integration layer provides to the core."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Mapping
from typing import Any, Protocol

Callback = Callable[[], None]
KeyCallback = Callable[[str], None]
View = Mapping[str, Any]


class EditorHost(Protocol):
    # Region height is tab-local; ``tab=None`` means the current tab.
    def get_region_height(self) -> int: ...

    def set_region_height(self, height: int, tab: Hashable | None = None) -> None: ...

    def get_option(self, name: str) -> bool: ...

    def set_option(self, name: str, value: bool) -> None: ...

    def columns(self) -> int: ...

    def echospace(self) -> int: ...

    def list_tabs(self) -> list[Hashable]: ...

    def list_windows(self) -> list[Hashable]:
        """Windows of the current tab."""
        ...

    def save_view(self, window: Hashable) -> View: ...

    def restore_view(self, window: Hashable, view: View) -> None: ...

    def redraw(self) -> None: ...

    def clear_messages(self) -> None: ...

    def in_fast_event(self) -> bool:
        """True inside callbacks where window and option state must not change."""
        ...

    def is_idle(self) -> bool:
        """True when the host has settled with messages scrolled into the region."""
        ...

    def defer(self, callback: Callback, ms: int) -> Hashable: ...

    def cancel_timer(self, handle: Hashable) -> None: ...

    def schedule(self, callback: Callback) -> None:
        """Run ``callback`` on the next safe tick of the main loop."""
        ...

    def subscribe_key(self, callback: KeyCallback) -> None: ...

    def unsubscribe_key(self) -> None: ...
