"""Save and restore the scroll/cursor view of every window in the current tab."""

from __future__ import annotations

from collections.abc import Hashable

from autoheight.host.protocol import EditorHost, View
from autoheight.logging import get_logger

ViewSnapshot = dict[Hashable, View]

logger = get_logger("views")


def save_views(host: EditorHost) -> ViewSnapshot:
    snapshot: ViewSnapshot = {}
    for window in host.list_windows():
        try:
            snapshot[window] = host.save_view(window)
        except Exception as exc:
            logger.debug("Could not save view of window {}: {}", window, exc)
    return snapshot


def restore_views(host: EditorHost, snapshot: ViewSnapshot) -> None:
    """Reapply ``snapshot`` window by window.

    A window that closed or rejects its view is skipped; the rest are still
    restored.
    """
    for window, view in snapshot.items():
        try:
            host.restore_view(window, view)
        except Exception as exc:
            logger.debug("Could not restore view of window {}: {}", window, exc)
