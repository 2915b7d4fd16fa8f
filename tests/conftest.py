import pytest

from autoheight.config import HeightSettings
from autoheight.core.events import EventBus
from autoheight.core.manager import HeightManager
from autoheight.host.memory import MemoryHost


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    monkeypatch.setenv("AUTOHEIGHT_HOME", str(tmp_path / "autoheight-home"))
    for name in ("MAX_LINES", "DURATION", "REMOVE_ON_KEY", "CLEAR_ALWAYS", "LOG_LEVEL"):
        monkeypatch.delenv(f"AUTOHEIGHT_{name}", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def host():
    return MemoryHost(columns=80, echospace=68, region_height=1, windows=2)


@pytest.fixture
def events():
    return EventBus()


@pytest.fixture
def make_manager(host, events):
    def factory(**options):
        manager = HeightManager(host)
        manager.setup(HeightSettings(**options), events)
        return manager

    return factory


@pytest.fixture
def manager(make_manager):
    return make_manager()
