from autoheight.config import HeightSettings
from autoheight.core.reversion import ReversionScheduler
from autoheight.core.state import ReversionPhase


def make_scheduler(host, **options):
    calls = {"expired": 0, "key": 0}

    def expired():
        calls["expired"] += 1

    def key():
        calls["key"] += 1

    scheduler = ReversionScheduler(host, HeightSettings(**options), on_expired=expired, on_key=key)
    return scheduler, calls


def test_arm_starts_single_timer(host):
    scheduler, _ = make_scheduler(host)
    scheduler.arm()
    scheduler.arm()
    assert scheduler.phase is ReversionPhase.TIMER_ARMED
    assert scheduler.armed is True
    assert host.active_timers == 1


def test_timer_expiry_without_key_watch(host):
    scheduler, calls = make_scheduler(host, remove_on_key=False, duration=1.0)
    scheduler.arm()
    host.advance(1.0)
    assert calls == {"expired": 1, "key": 0}
    assert scheduler.phase is ReversionPhase.IDLE
    assert scheduler.timer_handle is None


def test_timer_expiry_switches_to_key_watch(host):
    scheduler, calls = make_scheduler(host, remove_on_key=True, duration=0.1)
    scheduler.arm()
    host.advance(0.1)
    assert scheduler.phase is ReversionPhase.KEY_ARMED
    assert calls == {"expired": 0, "key": 0}

    host.feed_key()
    host.feed_key()
    assert calls == {"expired": 0, "key": 1}
    assert scheduler.phase is ReversionPhase.IDLE


def test_cancel_from_every_phase(host):
    scheduler, calls = make_scheduler(host, duration=0.1)
    scheduler.cancel()
    assert scheduler.phase is ReversionPhase.IDLE

    scheduler.arm()
    scheduler.cancel()
    host.advance(1.0)
    assert host.key_subscribed is False
    assert calls == {"expired": 0, "key": 0}

    scheduler.arm()
    host.advance(0.1)
    scheduler.cancel()
    assert host.key_subscribed is False
    host.feed_key()
    assert calls == {"expired": 0, "key": 0}


def test_stale_timer_fire_is_ignored(host):
    scheduler, calls = make_scheduler(host, remove_on_key=False, duration=0.1)
    fired = []
    real_defer = host.defer

    def capturing_defer(callback, ms):
        fired.append(callback)
        return real_defer(callback, ms)

    host.defer = capturing_defer
    scheduler.arm()
    scheduler.arm()
    fired[0]()
    assert calls["expired"] == 0
    assert scheduler.phase is ReversionPhase.TIMER_ARMED
