"""
Window Manager

The context object of deckwm. It owns the monitors, tracks the selected
monitor and runs the arrangement pass: onscreen computation, visibility,
bar reservation, layout placement and stacking. The components that act on
this state (focus, workspace commands, interactive operations, adapter
notifications, monitor topology) are created here and receive the manager.
"""

from __future__ import annotations
import logging
import os
from typing import Hashable, Iterator, List, Optional

from pubsub import pub

from . import topics
from .config import WMConfig
from .display import Display, RecordingDisplay
from .events import EventHandler
from .focus_manager import FocusManager
from .monitor_manager import MonitorManager
from .objects import Client, Monitor
from .operation_manager import OperationManager
from .protocol import Area, BarState, ClientTab, WMState
from .rules import RuleMatcher
from .sizehints import resolve
from .workspace import WorkspaceController

log = logging.getLogger(__name__)

DEFAULT_ROOT = Area(0, 0, 1920, 1080)


class WindowManager:
    """
    deckwm window manager core.

    Every public command or notification runs to completion, including the
    concluding arrange pass, before the next one is handled.
    """

    def __init__(
        self,
        config: Optional[WMConfig] = None,
        display: Optional[Display] = None,
        root: Optional[Area] = None,
        screens: Optional[List[Area]] = None,
    ):
        """Initialize the window manager.

        Args:
            config: Configuration, defaults to WMConfig()
            display: Adapter receiving instructions, defaults to a RecordingDisplay
            root: Virtual screen area
            screens: Output rectangles; empty means one monitor covering root
        """
        self.config = config or WMConfig()
        self.display = display or RecordingDisplay()
        self.tagset = self.config.tagset

        self.monitors: List[Monitor] = []
        self.selmon: Optional[Monitor] = None
        self.screen = Area()
        self.pointer = (0, 0)
        self.status_text = self.config.status_text
        self.running = True

        # Setup debug event logging if enabled
        if os.getenv("DECKWM_DEBUG"):
            pub.subscribe(self.debug_event_logger, pub.ALL_TOPICS)

        self.rules = RuleMatcher(self.config.rules, self.tagset)
        self.monitor_manager = MonitorManager(self)
        self.focus_manager = FocusManager(self)
        self.controller = WorkspaceController(self)
        self.operations = OperationManager(self)
        self.events = EventHandler(self)

        self.monitor_manager.update_geometry(screens or [], root or DEFAULT_ROOT)
        self.arrange()

    def debug_event_logger(self, topic=pub.AUTO_TOPIC, **kwargs):
        """Log all events published on the event bus."""
        data_str = ", ".join(f"{k}={v}" for k, v in kwargs.items())
        log.debug("EVENT: %s | %s", topic.getName(), data_str)

    # Lookup

    def all_clients(self) -> Iterator[Client]:
        for m in self.monitors:
            yield from m.clients

    def window_to_client(self, window: Hashable) -> Optional[Client]:
        for m in self.monitors:
            c = m.client_for(window)
            if c is not None and c in m.clients:
                return c
        return None

    def check_invariants(self):
        """Raise AssertionError if any monitor's model is inconsistent."""
        for m in self.monitors:
            m.check_invariants()

    # Placement

    def resize(self, c: Client, x: int, y: int, w: int, h: int, interact: bool = False):
        """Place a client after resolving its constraints."""
        x, y, w, h, changed = resolve(
            c,
            x,
            y,
            w,
            h,
            interact,
            screen=self.screen,
            bar_height=self.config.bar_height,
            respect_hints=self.config.resize_hints,
        )
        if changed:
            self.resize_client(c, x, y, w, h)

    def resize_client(self, c: Client, x: int, y: int, w: int, h: int):
        """Place a client exactly, without consulting its size hints."""
        c.set_geometry(x, y, w, h)
        self.display.move_resize(c.window, c.geometry())

    # Arrangement

    def arrange(self, m: Optional[Monitor] = None):
        """Run the arrangement pass on one monitor, or on all of them."""
        if m is None:
            for mon in self.monitors:
                self._arrange_monitor(mon)
        else:
            self._arrange_monitor(m)

    def _arrange_monitor(self, m: Monitor):
        m.compute_onscreen()
        self.update_visibility(m)
        self.monitor_manager.update_bar_positions(m)

        layout = m.layout
        m.layout_symbol = layout.symbol
        if layout.arranges:
            clients = m.tiled_clients()
            result = layout.calculate(
                clients,
                m.win_area,
                num_marked=m.num_marked,
                marked_width=m.marked_width,
                visible_count=len(m.visible_clients()),
            )
            m.layout_symbol = result.symbol
            for c in clients:
                g = result.geometries[c]
                self.resize(c, g.x, g.y, g.width - 2 * c.bw, g.height - 2 * c.bw, False)

        self.draw_bar(m)

    def update_visibility(self, m: Monitor):
        """Show clients top down and hide the rest bottom up."""
        shown: List[Client] = []
        hidden: List[Client] = []
        for c in m.stack_clients():
            if c.is_visible and (
                c.onscreen or (not self.config.hide_buried_windows and not c.minimized)
            ):
                shown.append(c)
            else:
                hidden.append(c)

        for c in shown:
            self.display.move(c.window, c.x, c.y)
            if (not m.layout.arranges or c.is_floating) and not c.is_fullscreen:
                self.resize(c, c.x, c.y, c.w, c.h, False)
            self.display.set_state(c.window, WMState.NORMAL)

        for c in reversed(hidden):
            self.display.move(c.window, c.width * -2, c.y)
            self.display.set_state(c.window, WMState.ICONIC)

    def restack(self, m: Monitor):
        """Raise the selection if it floats and order tiled windows by recency."""
        self.draw_bar(m)
        if m.sel is None:
            return
        if m.sel.is_floating or not m.layout.arranges:
            self.display.raise_window(m.sel.window)
        if m.layout.arranges:
            self.display.restack(
                [c.window for c in m.stack_clients() if not c.is_floating and c.is_visible]
            )

    # Bars

    def bar_state(self, m: Monitor) -> BarState:
        """Snapshot of what a status bar shows for a monitor."""
        occupied = m.occupied_tags()
        selected = m.current_tags
        shown = [
            i
            for i in range(len(self.tagset))
            if not self.config.hide_inactive_tags
            or self.tagset.contains(occupied, i)
            or self.tagset.contains(selected, i)
        ]
        tabs = [
            ClientTab(
                window=c.window,
                name=c.name,
                selected=c is m.sel,
                urgent=c.is_urgent,
                minimized=c.minimized,
                onscreen=c.onscreen,
                marked=c.marked,
            )
            for c in m.visible_clients()
        ]
        return BarState(
            monitor=m.num,
            layout_symbol=m.layout_symbol,
            selected_tags=selected,
            occupied_tags=occupied,
            urgent_tags=m.urgent_tags(),
            shown_tags=shown,
            title=m.sel.name if m.sel else "",
            show_tagbar=m.show_tagbar,
            show_clientbar=m.show_clientbar,
            tagbar_pos=m.tagbar_pos,
            clientbar_pos=m.clientbar_pos,
            tabs=tabs,
            status=self.status_text,
        )

    def draw_bar(self, m: Monitor):
        state = self.bar_state(m)
        self.display.update_bar(m.num, state)
        pub.sendMessage(topics.BAR_UPDATED, state=state)

    def draw_bars(self):
        for m in self.monitors:
            self.draw_bar(m)

    def update_client_list(self):
        self.display.set_client_list([c.window for c in self.all_clients()])
