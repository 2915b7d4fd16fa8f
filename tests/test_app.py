from autoheight.config import AppSettings, HeightSettings
from autoheight.core import events as topics
from autoheight.core.app import build_context


def test_build_context_wires_bus(host):
    ctx = build_context(AppSettings(height=HeightSettings(max_lines=3)), host)
    assert ctx.manager.settings.max_lines == 3
    assert ctx.events.subscribers(topics.IDLE) == [ctx.manager.on_idle]

    assert ctx.printed("a\nb") == "a\nb"
    assert host.get_region_height() == 2
    ctx.mode_entered()
    assert host.get_region_height() == 1
    ctx.mode_left()
    ctx.idle()
    assert ctx.echoed([["a\nb\nc", "Normal"]]) == [["a\nb\nc", "Normal"]]
    assert host.get_region_height() == 3
    ctx.resized()
    assert host.get_region_height() == 1


def test_stop_restores_region_and_unsubscribes(host):
    ctx = build_context(AppSettings(), host)
    ctx.printed("a\nb\nc")
    ctx.stop()
    assert host.get_region_height() == 1
    assert ctx.events.subscribers(topics.TEXT_PRINTED) == []
    ctx.events.emit(topics.TEXT_PRINTED, "a\nb\nc")
    assert host.get_region_height() == 1
