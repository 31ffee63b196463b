"""
Shared pytest fixtures for deckwm tests.
"""

import pytest
from pubsub import pub

from deckwm.config import WMConfig
from deckwm.display import RecordingDisplay
from deckwm.layouts import DeckLayout, FloatingLayout, MonocleLayout, TileLayout
from deckwm.manager import WindowManager
from deckwm.objects import Client
from deckwm.protocol import Area, WindowAttributes


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without a display server")


@pytest.fixture(autouse=True)
def clean_event_bus():
    """Drop listeners and topic definitions left over from other tests."""
    pub.unsubAll()
    pub.getDefaultTopicMgr().clearTree()
    yield
    pub.unsubAll()
    pub.getDefaultTopicMgr().clearTree()


@pytest.fixture
def standard_area():
    """Standard 1000x800 area for layout tests."""
    return Area(0, 0, 1000, 800)


@pytest.fixture
def mock_client():
    """Factory fixture for bare clients, as layouts see them."""

    def make(window=1, name="test", marked=False):
        c = Client(window, name=name)
        c.marked = marked
        return c

    return make


@pytest.fixture
def make_config():
    """Factory for configs without rules and with tile as the default layout."""

    def make(**kwargs):
        kwargs.setdefault("rules", [])
        kwargs.setdefault(
            "layouts",
            [TileLayout(), MonocleLayout(), DeckLayout(), FloatingLayout()],
        )
        return WMConfig(**kwargs)

    return make


@pytest.fixture
def display():
    return RecordingDisplay()


@pytest.fixture
def wm(make_config, display):
    """A window manager on a single 1000x800 monitor, tile layout."""
    return WindowManager(make_config(), display, root=Area(0, 0, 1000, 800))


@pytest.fixture
def manage(wm):
    """Factory that maps a new window and returns its client."""
    counter = {"next": 100}

    def make(name=None, window=None, **kwargs):
        if window is None:
            counter["next"] += 1
            window = counter["next"]
        kwargs.setdefault("width", 300)
        kwargs.setdefault("height", 200)
        attrs = WindowAttributes(name=name or f"win{window}", **kwargs)
        return wm.events.manage(window, attrs)

    return make
