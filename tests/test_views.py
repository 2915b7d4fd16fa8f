from autoheight.core.views import restore_views, save_views
from autoheight.host.memory import MemoryHost


def test_save_and_restore_round_trip():
    host = MemoryHost(windows=3)
    for offset, window in enumerate(host.current_tab.windows):
        window.topline = 5 + offset
    snapshot = save_views(host)
    assert set(snapshot) == set(host.list_windows())

    host.set_region_height(4)
    assert host.views() != snapshot
    restore_views(host, snapshot)
    assert host.views() == snapshot


def test_restore_skips_failing_windows():
    host = MemoryHost(windows=3)
    for window in host.current_tab.windows:
        window.topline = 20
    snapshot = save_views(host)
    host.set_region_height(6)
    first, *rest = host.list_windows()
    host.broken_windows.add(first)

    restore_views(host, snapshot)
    views = host.views()
    assert views[first]["topline"] == 25
    assert all(views[window]["topline"] == 20 for window in rest)


def test_restore_skips_closed_windows():
    host = MemoryHost(windows=2)
    snapshot = save_views(host)
    host.current_tab.windows.pop()
    restore_views(host, snapshot)
    assert len(host.views()) == 1


def test_save_skips_windows_that_fail(monkeypatch):
    host = MemoryHost(windows=2)
    closing, open_window = host.list_windows()
    real_save = host.save_view

    def save_view(window):
        if window == closing:
            raise RuntimeError(f"Invalid window id: {window}")
        return real_save(window)

    monkeypatch.setattr(host, "save_view", save_view)
    assert list(save_views(host)) == [open_window]
