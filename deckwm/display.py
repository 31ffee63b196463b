"""
Display Adapter Interface

The window management core never talks to a display server itself. It hands
placement, stacking, visibility and focus instructions to a ``Display``
implementation. ``RecordingDisplay`` keeps those instructions in memory and
is what the headless driver and the tests use.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Hashable, List, Optional, Sequence, Tuple

from .protocol import BarState, BorderScheme, WindowGeometry, WMState

log = logging.getLogger(__name__)


class Display(ABC):
    """Instructions the core issues to the display-server adapter."""

    @abstractmethod
    def move_resize(self, window: Hashable, geometry: WindowGeometry):
        """Place a window. Only called when its geometry actually changed."""
        pass

    @abstractmethod
    def configure(self, window: Hashable, geometry: WindowGeometry):
        """Tell a window its current geometry without changing it."""
        pass

    @abstractmethod
    def move(self, window: Hashable, x: int, y: int):
        """Move a window without resizing it (used to show and hide)."""
        pass

    @abstractmethod
    def set_state(self, window: Hashable, state: WMState):
        pass

    @abstractmethod
    def restack(self, windows: Sequence[Hashable]):
        """Stack tiled windows front-to-back in the given order."""
        pass

    @abstractmethod
    def raise_window(self, window: Hashable):
        pass

    @abstractmethod
    def set_input_focus(self, window: Optional[Hashable]):
        """Give input focus to a window, or to the root when None."""
        pass

    @abstractmethod
    def set_border(self, window: Hashable, scheme: BorderScheme):
        pass

    @abstractmethod
    def set_fullscreen(self, window: Hashable, fullscreen: bool):
        """Publish a window's fullscreen state on the window itself."""
        pass

    @abstractmethod
    def clear_urgency(self, window: Hashable):
        pass

    @abstractmethod
    def send_take_focus(self, window: Hashable):
        pass

    @abstractmethod
    def close(self, window: Hashable):
        """Ask a window to close, killing it if it does not cooperate."""
        pass

    @abstractmethod
    def grab_buttons(self, window: Hashable, focused: bool):
        pass

    @abstractmethod
    def update_bar(self, monitor_num: int, state: BarState):
        pass

    @abstractmethod
    def set_client_list(self, windows: Sequence[Hashable]):
        pass


class RecordingDisplay(Display):
    """In-memory display that records every instruction it receives.

    Besides the raw call log it tracks the latest geometry, state, border and
    bar of each window/monitor so that tests can assert on end results.
    """

    def __init__(self):
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []
        self.geometries: Dict[Hashable, WindowGeometry] = {}
        self.states: Dict[Hashable, WMState] = {}
        self.borders: Dict[Hashable, BorderScheme] = {}
        self.bars: Dict[int, BarState] = {}
        self.stacking: List[Hashable] = []
        self.focused: Optional[Hashable] = None
        self.client_list: List[Hashable] = []
        self.closed: List[Hashable] = []

    def _record(self, name: str, *args):
        log.debug("%s%s", name, args)
        self.calls.append((name, args))

    def calls_to(self, name: str) -> List[Tuple[Any, ...]]:
        """Arguments of every recorded call to ``name``."""
        return [args for call, args in self.calls if call == name]

    def clear(self):
        self.calls.clear()

    def move_resize(self, window, geometry):
        self._record("move_resize", window, geometry)
        self.geometries[window] = geometry

    def configure(self, window, geometry):
        self._record("configure", window, geometry)

    def move(self, window, x, y):
        self._record("move", window, x, y)
        geometry = self.geometries.get(window)
        if geometry is not None:
            self.geometries[window] = WindowGeometry(
                x, y, geometry.width, geometry.height, geometry.border_width
            )

    def set_state(self, window, state):
        self._record("set_state", window, state)
        self.states[window] = state

    def restack(self, windows):
        self._record("restack", list(windows))
        self.stacking = list(windows)

    def raise_window(self, window):
        self._record("raise_window", window)

    def set_input_focus(self, window):
        self._record("set_input_focus", window)
        self.focused = window

    def set_border(self, window, scheme):
        self._record("set_border", window, scheme)
        self.borders[window] = scheme

    def set_fullscreen(self, window, fullscreen):
        self._record("set_fullscreen", window, fullscreen)

    def clear_urgency(self, window):
        self._record("clear_urgency", window)

    def send_take_focus(self, window):
        self._record("send_take_focus", window)

    def close(self, window):
        self._record("close", window)
        self.closed.append(window)

    def grab_buttons(self, window, focused):
        self._record("grab_buttons", window, focused)

    def update_bar(self, monitor_num, state):
        self._record("update_bar", monitor_num, state)
        self.bars[monitor_num] = state

    def set_client_list(self, windows):
        self._record("set_client_list", list(windows))
        self.client_list = list(windows)
