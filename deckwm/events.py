"""
Event Handler

Maps the display-server adapter's notifications onto the model: window
creation and destruction, configure requests, property changes, client
messages, pointer crossings and output topology changes.

Notifications about windows that are not managed are benign misses; they are
logged at debug level and dropped.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Any, Hashable, List, Optional, Sequence, Tuple

from .objects import Client
from .protocol import (
    Area,
    BorderScheme,
    ConfigureChanges,
    FullscreenAction,
    Property,
    WindowAttributes,
    WindowType,
    WMHintsInfo,
    WMState,
)
from .rules import BROKEN
from .sizehints import SizeHints

if TYPE_CHECKING:
    from .manager import WindowManager
    from .objects import Monitor

log = logging.getLogger(__name__)


class EventHandler:
    """Handles adapter notifications for a WindowManager."""

    def __init__(self, wm: "WindowManager"):
        """Initialize event handler.

        Args:
            wm: The window manager to update
        """
        self.wm = wm
        self.config = wm.config
        self._motion_monitor: Optional["Monitor"] = None

    @property
    def focus_manager(self):
        return self.wm.focus_manager

    @property
    def controller(self):
        return self.wm.controller

    def _client(self, window: Hashable, event: str) -> Optional[Client]:
        c = self.wm.window_to_client(window)
        if c is None:
            log.debug("%s for unmanaged window %r dropped", event, window)
        return c

    # Window lifecycle

    def manage(self, window: Hashable, attrs: WindowAttributes) -> Optional[Client]:
        """Start managing a newly mapped window.

        Args:
            window: Adapter handle of the window
            attrs: Attributes reported with the map request

        Returns:
            The new client, or None if the window is not managed
        """
        from pubsub import pub
        from . import topics

        wm = self.wm
        if attrs.override_redirect or wm.window_to_client(window) is not None:
            return None

        c = Client(window, name=attrs.name or BROKEN)
        c.wm_class = attrs.wm_class
        c.instance = attrs.instance

        parent = None
        if attrs.transient_for is not None:
            parent = wm.window_to_client(attrs.transient_for)
        if parent is not None:
            wm.rules.inherit(c, parent)
        else:
            c.monitor = wm.selmon
            wm.rules.apply(c, wm.monitors)

        c.x = c.old_x = attrs.x
        c.y = c.old_y = attrs.y
        c.w = c.old_w = attrs.width
        c.h = c.old_h = attrs.height
        c.old_bw = attrs.border_width
        self._place_initially(c)

        c.bw = (
            self.config.float_border_width
            if c.is_floating or attrs.transient_for is not None
            else self.config.border_width
        )
        wm.display.set_border(window, BorderScheme.NORMAL)
        wm.display.configure(window, c.geometry())

        if attrs.window_type == WindowType.DIALOG:
            c.is_floating = True
        c.hints = SizeHints.from_info(attrs.size_hints)
        self._update_wm_hints(c, WMHintsInfo(attrs.urgent, attrs.accepts_input))
        wm.display.grab_buttons(window, False)

        c.was_floating = False
        if not c.is_floating:
            c.is_floating = c.was_floating = attrs.transient_for is not None or c.is_fixed
        if c.is_floating:
            wm.display.raise_window(window)

        m = c.monitor
        m.attach(c)
        m.stack_attach(c)
        wm.update_client_list()
        wm.display.set_state(window, WMState.NORMAL)
        if m is wm.selmon:
            self.focus_manager.unfocus(wm.selmon.sel)
        if c.is_visible:
            m.sel = c
        wm.arrange(m)
        log.info("Managing %s on monitor %d", c, m.num)

        if attrs.fullscreen:
            self.controller.set_fullscreen(c, True)
        if self.config.follow_new_windows and m is wm.selmon and not c.is_visible:
            self.controller.view_tag(c.tags)
        wm.restack(wm.selmon)
        self.focus_manager.focus(c)

        pub.sendMessage(topics.CLIENT_MANAGED, client=c)
        return c

    def _place_initially(self, c: Client):
        """Keep a new window inside its monitor and off a top tag bar."""
        m = c.monitor
        area = m.mon_area
        if c.x + c.width > area.right:
            c.x = area.right - c.width
        if c.y + c.height > area.bottom:
            c.y = area.bottom - c.height
        c.x = max(c.x, area.x)

        center = c.x + c.w // 2
        covers_bar = (
            m.show_tagbar
            and m.tagbar_pos == area.y
            and m.win_area.x <= center < m.win_area.right
        )
        c.y = max(c.y, area.y + self.config.bar_height if covers_bar else area.y)

    def unmanage(self, window: Hashable, destroyed: bool = False) -> bool:
        """Stop managing a window.

        Args:
            window: Adapter handle of the window
            destroyed: True if the window no longer exists

        Returns:
            True if the window was managed
        """
        from pubsub import pub
        from . import topics

        c = self._client(window, "unmanage")
        if c is None:
            return False

        m = c.monitor
        m.detach(c)
        m.stack_detach(c)
        if not destroyed:
            self.wm.display.grab_buttons(window, False)
            self.wm.display.set_state(window, WMState.WITHDRAWN)

        self.focus_manager.focus(None)
        self.wm.update_client_list()
        self.wm.arrange(m)
        log.info("Unmanaged %s", c)
        pub.sendMessage(topics.CLIENT_UNMANAGED, client=c)
        return True

    def unmap(self, window: Hashable, synthetic: bool = False) -> bool:
        """A window was unmapped. A synthetic unmap only withdraws it."""
        c = self._client(window, "unmap")
        if c is None:
            return False
        if synthetic:
            self.wm.display.set_state(window, WMState.WITHDRAWN)
            return True
        return self.unmanage(window, False)

    def scan(self, windows: Sequence[Tuple[Hashable, WindowAttributes]]) -> List[Client]:
        """Adopt windows that existed before startup, transients last."""
        managed = []
        candidates = [
            (w, a) for w, a in windows if not a.override_redirect and a.viewable
        ]
        for transient in (False, True):
            for window, attrs in candidates:
                if (attrs.transient_for is not None) != transient:
                    continue
                c = self.manage(window, attrs)
                if c is not None:
                    managed.append(c)
        return managed

    def shutdown(self):
        """Release every client, leaving windows visible and withdrawn."""
        from .layouts import FloatingLayout

        wm = self.wm
        if wm.selmon.current_tags != wm.tagset.mask:
            self.controller.view_tag(wm.tagset.mask)
        wm.selmon.layouts[wm.selmon.selected_layout] = FloatingLayout("")
        for m in wm.monitors:
            while m.stack:
                c = next(m.stack_clients())
                self.unmanage(c.window, False)
        self.focus_manager.focus_root()
        log.info("Shut down")

    # Requests and properties

    def configure_request(self, window: Hashable, changes: ConfigureChanges) -> bool:
        """Handle a client's request to change its geometry.

        Returns:
            False if the window is not managed; the adapter then applies the
            request unchanged.
        """
        c = self._client(window, "configure_request")
        if c is None:
            return False

        wm = self.wm
        m = c.monitor
        if changes.border_width is not None:
            c.bw = changes.border_width
        elif c.is_floating or not wm.selmon.layout.arranges:
            area = m.mon_area
            if changes.x is not None:
                c.old_x, c.x = c.x, area.x + changes.x
            if changes.y is not None:
                c.old_y, c.y = c.y, area.y + changes.y
            if changes.width is not None:
                c.old_w, c.w = c.w, changes.width
            if changes.height is not None:
                c.old_h, c.h = c.h, changes.height
            if c.x + c.w > area.right and c.is_floating:
                c.x = area.x + (area.width // 2 - c.width // 2)
            if c.y + c.h > area.bottom and c.is_floating:
                c.y = area.y + (area.height // 2 - c.height // 2)

            moved = changes.x is not None or changes.y is not None
            resized = changes.width is not None or changes.height is not None
            if moved and not resized:
                wm.display.configure(window, c.geometry())
            if c.is_visible:
                wm.display.move_resize(window, c.geometry())
        else:
            wm.display.configure(window, c.geometry())
        return True

    def property_notify(self, window: Hashable, prop: Property, value: Any = None) -> bool:
        """Handle a property change on a managed window.

        Args:
            window: Adapter handle of the window
            prop: Which property changed
            value: The new value: title string, SizeHintsInfo, WMHintsInfo,
                transient-for window handle or WindowType
        """
        c = self._client(window, f"property {prop.name}")
        if c is None:
            return False

        wm = self.wm
        if prop == Property.TITLE:
            c.name = value or BROKEN
            wm.draw_bar(c.monitor)
        elif prop == Property.NORMAL_HINTS:
            c.hints = SizeHints.from_info(value)
        elif prop == Property.WM_HINTS:
            self._update_wm_hints(c, value or WMHintsInfo())
            wm.draw_bars()
        elif prop == Property.TRANSIENT_FOR:
            if not c.is_floating and value is not None and wm.window_to_client(value):
                c.is_floating = True
                c.monitor.reattach(c)
                wm.arrange(c.monitor)
        elif prop == Property.WINDOW_TYPE:
            if value == WindowType.DIALOG and not c.is_floating:
                c.is_floating = True
                c.monitor.reattach(c)
                wm.arrange(c.monitor)
        return True

    def _update_wm_hints(self, c: Client, hints: WMHintsInfo):
        if hints.urgent and c is self.wm.selmon.sel:
            self.wm.display.clear_urgency(c.window)
        else:
            c.is_urgent = hints.urgent
        c.never_focus = hints.accepts_input is False

    def root_name_changed(self, text: str):
        """The status text (root window name) changed."""
        self.wm.status_text = text or self.config.status_text
        self.wm.draw_bar(self.wm.selmon)

    # Client messages

    def client_message_fullscreen(self, window: Hashable, action: FullscreenAction) -> bool:
        """_NET_WM_STATE fullscreen request."""
        c = self._client(window, "fullscreen message")
        if c is None:
            return False
        fullscreen = action == FullscreenAction.ADD or (
            action == FullscreenAction.TOGGLE and not c.is_fullscreen
        )
        self.controller.set_fullscreen(c, fullscreen)
        return True

    def activate_window(self, window: Hashable) -> bool:
        """_NET_ACTIVE_WINDOW request: show the client's tags and focus it."""
        c = self._client(window, "activate")
        if c is None:
            return False
        if not c.is_visible:
            m = c.monitor
            m.selected_tags ^= 1
            m.tagset[m.selected_tags] = c.tags
        self.controller.pop(c)
        return True

    # Pointer and focus

    def enter_notify(self, window: Optional[Hashable]):
        """The pointer entered a window; None stands for the root window."""
        if self.wm.operations.is_active():
            return
        c = self.wm.window_to_client(window) if window is not None else None
        m = c.monitor if c else self.wm.monitor_manager.window_to_monitor(window)
        if m is not self.wm.selmon:
            self.focus_manager.unfocus(self.wm.selmon.sel, True)
            self.focus_manager.set_focused_monitor(m)
        elif c is None or c is m.sel:
            return
        self.focus_manager.focus(c)

    def pointer_motion(self, x: int, y: int):
        """Root pointer motion; drives interactive operations when one is active."""
        self.wm.pointer = (x, y)
        if self.wm.operations.is_active():
            self.wm.operations.motion(x, y)
            return
        m = self.wm.monitor_manager.rect_to_monitor(x, y, 1, 1)
        if self._motion_monitor is not None and m is not self._motion_monitor:
            self.focus_manager.select_monitor(m)
        self._motion_monitor = m

    def button_press(self, window: Optional[Hashable]):
        """A button was pressed on a window, selecting its monitor and client."""
        m = self.wm.monitor_manager.window_to_monitor(window)
        if m is not self.wm.selmon:
            self.focus_manager.select_monitor(m)
        c = self.wm.window_to_client(window) if window is not None else None
        if c is not None:
            self.focus_manager.focus(c)

    def button_release(self):
        self.wm.operations.release()

    def focus_in(self, window: Optional[Hashable]):
        """Someone else moved input focus; give it back to the selection."""
        sel = self.wm.selmon.sel
        if sel is not None and window != sel.window:
            self.focus_manager.focus(sel)

    # Outputs

    def screen_change(self, root: Area, screens: List[Area]) -> bool:
        """The root window or the output layout changed.

        Returns:
            True if monitors were updated
        """
        wm = self.wm
        resized = (wm.screen.width, wm.screen.height) != (root.width, root.height)
        if wm.monitor_manager.update_geometry(screens, root) or resized:
            self.focus_manager.focus(None)
            wm.arrange()
            return True
        return False
