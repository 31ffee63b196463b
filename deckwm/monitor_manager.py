"""
Monitor Manager

Keeps the monitor list in sync with the outputs reported by the adapter and
answers "which monitor" questions for rectangles, directions and windows.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Hashable, List, Optional

from .objects import Monitor
from .protocol import Area

if TYPE_CHECKING:
    from .manager import WindowManager

log = logging.getLogger(__name__)


def unique_screens(screens: List[Area]) -> List[Area]:
    """Drop outputs whose rectangle duplicates an earlier one (cloned outputs)."""
    unique: List[Area] = []
    for screen in screens:
        if screen not in unique:
            unique.append(screen)
    return unique


class MonitorManager:
    """Manages the monitor topology of a WindowManager."""

    def __init__(self, wm: "WindowManager"):
        """Initialize monitor manager.

        Args:
            wm: The window manager owning the monitors
        """
        self.wm = wm

    @property
    def monitors(self) -> List[Monitor]:
        return self.wm.monitors

    def update_geometry(self, screens: List[Area], root: Area) -> bool:
        """Reconcile monitors with the current outputs.

        Args:
            screens: Output rectangles as reported by the adapter
            root: The virtual screen; used as the only output when screens is empty

        Returns:
            True if any monitor was added, removed or changed geometry
        """
        from pubsub import pub
        from . import topics

        self.wm.screen = Area(root.x, root.y, root.width, root.height)
        unique = unique_screens(screens) or [Area(root.x, root.y, root.width, root.height)]
        dirty = False

        # New outputs
        while len(self.monitors) < len(unique):
            m = Monitor(len(self.monitors), self.wm.config)
            self.monitors.append(m)
            log.info("Monitor %d added", m.num)
            pub.sendMessage(topics.MONITOR_ADDED, monitor=m)

        # Removed outputs; their clients move to the first monitor
        while len(self.monitors) > len(unique):
            m = self.monitors.pop()
            target = self.monitors[0]
            for c in list(m.clients):
                dirty = True
                m.detach(c)
                m.stack_detach(c)
                c.monitor = target
                target.attach(c)
                target.stack_attach(c)
            if m is self.wm.selmon:
                self.wm.selmon = target
            log.info("Monitor %d removed", m.num)
            pub.sendMessage(topics.MONITOR_REMOVED, monitor=m)

        for i, (m, screen) in enumerate(zip(self.monitors, unique)):
            if m.mon_area != screen:
                dirty = True
                m.num = i
                m.mon_area = Area(screen.x, screen.y, screen.width, screen.height)
                m.win_area = Area(screen.x, screen.y, screen.width, screen.height)
                self.update_bar_positions(m)
                log.info("Monitor %d geometry %s", i, screen)

        if dirty or self.wm.selmon is None:
            self.wm.selmon = self.window_to_monitor(None)
        return dirty

    def update_bar_positions(self, m: Monitor):
        """Reserve space for the tag and client bars in a monitor's work area."""
        config = self.wm.config
        m.update_bar_positions(config.bar_height, config.clientbar_height)

    def rect_to_monitor(self, x: int, y: int, w: int, h: int) -> Monitor:
        """Monitor with the largest intersection, defaulting to the selected one."""
        result = self.wm.selmon or self.monitors[0]
        best = 0
        for m in self.monitors:
            a = m.win_area.intersection(x, y, w, h)
            if a > best:
                best = a
                result = m
        return result

    def direction_to_monitor(self, direction: int) -> Monitor:
        """Next (direction > 0) or previous monitor, cycling."""
        i = self.monitors.index(self.wm.selmon)
        step = 1 if direction > 0 else -1
        return self.monitors[(i + step) % len(self.monitors)]

    def window_to_monitor(self, window: Optional[Hashable]) -> Monitor:
        """Monitor a window belongs to; None stands for the root window."""
        if window is None:
            x, y = self.wm.pointer
            return self.rect_to_monitor(x, y, 1, 1)
        c = self.wm.window_to_client(window)
        if c is not None:
            return c.monitor
        return self.wm.selmon or self.monitors[0]
