"""
Focus Manager

Handles client and monitor focus transitions.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, List, Optional

from .protocol import BorderScheme

if TYPE_CHECKING:
    from .manager import WindowManager
    from .objects import Client, Monitor

log = logging.getLogger(__name__)


def cycle_among(clients: List["Client"], current: "Client", direction: int) -> Optional["Client"]:
    """Pick the candidate after (or before) ``current`` in list order, wrapping.

    Args:
        clients: Candidates and ``current``, in list order
        current: Reference client
        direction: > 0 for the next candidate, otherwise the previous one

    Returns:
        The chosen candidate or None if there is none
    """
    i = clients.index(current)
    if direction > 0:
        ordered = clients[i + 1:] + clients[: i + 1]
    else:
        ordered = list(reversed(clients[:i])) + list(reversed(clients[i:]))
    return next(iter(ordered), None)


class FocusManager:
    """Manages focus for clients and monitors.

    The selected client of the selected monitor is the focused one. Focus
    changes publish FOCUS_CHANGED; monitor switches publish
    FOCUSED_MONITOR_CHANGED.
    """

    def __init__(self, wm: "WindowManager"):
        """Initialize focus manager.

        Args:
            wm: The window manager whose selection is tracked
        """
        self.wm = wm

    @property
    def focused_client(self) -> Optional["Client"]:
        return self.wm.selmon.sel if self.wm.selmon else None

    def focus(self, c: Optional["Client"]):
        """Give focus to a client.

        When ``c`` is None or not visible, the first visible, non-minimized
        client in the selected monitor's stack is focused instead; if there
        is none, focus goes to the root window.

        Args:
            c: The client to focus, or None
        """
        from pubsub import pub
        from . import topics

        wm = self.wm
        if c is None or not c.is_visible:
            c = next(
                (s for s in wm.selmon.stack_clients() if s.is_visible and not s.minimized),
                None,
            )
        if wm.selmon.sel is not None and wm.selmon.sel is not c:
            self.unfocus(wm.selmon.sel)

        if c is not None:
            if c.monitor is not wm.selmon:
                self.set_focused_monitor(c.monitor)
            if c.is_urgent:
                self.clear_urgent(c)
            c.monitor.stack_detach(c)
            c.monitor.stack_attach(c)
            wm.display.grab_buttons(c.window, True)
            wm.display.set_border(c.window, BorderScheme.SELECTED)
            if not c.never_focus:
                wm.display.set_input_focus(c.window)
            wm.display.send_take_focus(c.window)
        else:
            self.focus_root()

        wm.selmon.sel = c
        log.debug("Focus %s", c)
        pub.sendMessage(topics.FOCUS_CHANGED, client=c)
        wm.arrange(wm.selmon)

    def unfocus(self, c: Optional["Client"], set_focus: bool = False):
        """Reset a client's decoration and button grabs."""
        if c is None:
            return
        self.wm.display.grab_buttons(c.window, False)
        self.wm.display.set_border(c.window, BorderScheme.NORMAL)
        if set_focus:
            self.focus_root()

    def focus_root(self):
        self.wm.display.set_input_focus(None)

    def clear_urgent(self, c: "Client"):
        c.is_urgent = False
        self.wm.display.clear_urgency(c.window)

    def select_monitor(self, m: "Monitor"):
        """Move focus to another monitor and focus its best client."""
        if m is self.wm.selmon:
            return
        self.unfocus(self.wm.selmon.sel, True)
        self.set_focused_monitor(m)
        self.focus(None)

    def set_focused_monitor(self, m: "Monitor"):
        from pubsub import pub
        from . import topics

        self.wm.selmon = m
        pub.sendMessage(topics.FOCUSED_MONITOR_CHANGED, monitor=m)

    def cycle(self, direction: int) -> bool:
        """Focus the next/previous visible, non-minimized client in list order.

        Returns:
            True if focus moved
        """
        m = self.wm.selmon
        if m.sel is None:
            return False
        candidates = [c for c in m.clients if c.is_visible and not c.minimized]
        target = cycle_among(
            [c for c in m.clients if c in candidates or c is m.sel], m.sel, direction
        )
        if target is None or target not in candidates:
            return False
        self.focus(target)
        self.wm.restack(m)
        return True

    def cycle_stackarea(self, direction: int) -> bool:
        """Cycle the focus through the clients buried in the deck's stack column.

        Returns:
            True if focus moved
        """
        from .layouts import LayoutKind

        m = self.wm.selmon
        if m.layout.kind != LayoutKind.DECK:
            return self.cycle(direction)

        current = next(
            (c for c in m.clients if c.onscreen and not c.marked and not c.is_floating), None
        )
        if current is None:
            return False
        candidates = [
            c for c in m.clients if c.is_visible and not c.minimized and not c.onscreen
        ]
        target = cycle_among(
            [c for c in m.clients if c in candidates or c is current], current, direction
        )
        if target is None or target not in candidates:
            return False
        self.focus(target)
        self.wm.restack(m)
        return True

    def cycle_monitor(self, direction: int) -> bool:
        """Select the next/previous monitor.

        Returns:
            True if the selected monitor changed
        """
        if len(self.wm.monitors) < 2:
            return False
        m = self.wm.monitor_manager.direction_to_monitor(direction)
        if m is self.wm.selmon:
            return False
        self.select_monitor(m)
        return True
