"""
Workspace Controller

The command layer of deckwm. Every user command works on the selected monitor,
mutates the model and finishes with an arrange pass. Commands that cannot
apply (no selection, a mask without valid bits, a request that would break a
model invariant) leave the state untouched and return False.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Optional, Union

from .config import parse_clientbar_mode
from .layouts import Layout, clamp_marked_width
from .protocol import ClientBarMode

if TYPE_CHECKING:
    from .manager import WindowManager
    from .objects import Client, Monitor

log = logging.getLogger(__name__)


class WorkspaceController:
    """Executes workspace commands.

    This component subscribes to the ``cmd.*`` topics so that key bindings and
    the textual command interface can drive it through the event bus. Each
    command is also a plain method.
    """

    def __init__(self, wm: "WindowManager"):
        """Initialize workspace controller.

        Args:
            wm: The window manager to operate on
        """
        self.wm = wm
        self.config = wm.config
        self.tagset = wm.tagset
        self._setup_subscriptions()

    def _setup_subscriptions(self):
        """Subscribe to command events."""
        from pubsub import pub
        from . import topics

        # Tag commands
        pub.subscribe(self.view_tag, topics.CMD_VIEW_TAG)
        pub.subscribe(self.toggle_tag_view, topics.CMD_TOGGLE_TAG_VIEW)
        pub.subscribe(self.tag_client, topics.CMD_TAG_CLIENT)
        pub.subscribe(self.toggle_tag, topics.CMD_TOGGLE_TAG)
        pub.subscribe(self.cycle_view, topics.CMD_CYCLE_VIEW)
        pub.subscribe(self.shift_tag, topics.CMD_SHIFT_TAG)

        # Focus commands
        pub.subscribe(self.cycle_focus, topics.CMD_CYCLE_FOCUS)
        pub.subscribe(self.cycle_stackarea_selection, topics.CMD_CYCLE_STACKAREA)
        pub.subscribe(self.focus_client, topics.CMD_FOCUS_CLIENT)
        pub.subscribe(self.cycle_focus_monitor, topics.CMD_FOCUS_MONITOR)

        # Client commands
        pub.subscribe(self.push_client_left, topics.CMD_PUSH_LEFT)
        pub.subscribe(self.push_client_right, topics.CMD_PUSH_RIGHT)
        pub.subscribe(self.toggle_mark, topics.CMD_TOGGLE_MARK)
        pub.subscribe(self.toggle_floating, topics.CMD_TOGGLE_FLOATING)
        pub.subscribe(self.toggle_fullscreen, topics.CMD_TOGGLE_FULLSCREEN)
        pub.subscribe(self.toggle_hidden, topics.CMD_TOGGLE_HIDDEN)
        pub.subscribe(self.hide_window, topics.CMD_HIDE_WINDOW)
        pub.subscribe(self._on_send_to_monitor, topics.CMD_SEND_TO_MONITOR)
        pub.subscribe(self.kill_client, topics.CMD_KILL_CLIENT)

        # Layout commands
        pub.subscribe(self.set_layout, topics.CMD_SET_LAYOUT)
        pub.subscribe(self.adjust_marked_width, topics.CMD_ADJUST_MARKED_WIDTH)
        pub.subscribe(self.set_marked_width, topics.CMD_SET_MARKED_WIDTH)

        # Bar commands
        pub.subscribe(self.toggle_tagbar, topics.CMD_TOGGLE_TAGBAR)
        pub.subscribe(self.set_clientbar_mode, topics.CMD_SET_CLIENTBAR_MODE)

        pub.subscribe(self.quit, topics.CMD_QUIT)

    @property
    def selmon(self) -> "Monitor":
        return self.wm.selmon

    @property
    def focus_manager(self):
        return self.wm.focus_manager

    def _reject(self, command: str, reason: str) -> bool:
        log.debug("%s rejected: %s", command, reason)
        return False

    # Views

    def view_tag(self, mask: int) -> bool:
        """View a set of tags.

        Viewing the current tags again (with ``view_tag_toggles``) or passing
        an empty mask returns to the previously viewed tags.

        Args:
            mask: Tag mask to view

        Returns:
            True if the view changed
        """
        m = self.selmon
        pt = m.pertag
        mask = self.tagset.clip(mask)

        if mask and mask != m.current_tags:
            m.selected_tags ^= 1
            pt.prevtag = pt.curtag
            m.tagset[m.selected_tags] = mask
            pt.curtag = 0 if self.tagset.is_all(mask) else self.tagset.lowest_index(mask) + 1
        elif not mask or self.config.view_tag_toggles:
            m.selected_tags ^= 1
            pt.prevtag, pt.curtag = pt.curtag, pt.prevtag
        else:
            return self._reject("view_tag", f"{mask:#x} is already viewed")

        log.debug("View tags %#x on monitor %d", m.current_tags, m.num)
        self._apply_view(m)
        return True

    def toggle_tag_view(self, mask: int) -> bool:
        """Add tags to or remove them from the current view."""
        m = self.selmon
        pt = m.pertag
        new_tags = m.current_tags ^ self.tagset.clip(mask)
        if not new_tags:
            return self._reject("toggle_tag_view", "view would be empty")

        if self.tagset.is_all(new_tags):
            pt.prevtag = pt.curtag
            pt.curtag = 0
        elif pt.curtag == 0 or not self.tagset.contains(new_tags, pt.curtag - 1):
            pt.prevtag = pt.curtag
            pt.curtag = self.tagset.lowest_index(new_tags) + 1
        m.tagset[m.selected_tags] = new_tags

        log.debug("Toggled view to %#x on monitor %d", new_tags, m.num)
        self._apply_view(m)
        return True

    def _apply_view(self, m: "Monitor"):
        from pubsub import pub
        from . import topics

        m.restore_view()
        if m.show_tagbar != m.pertag.show_tagbars[m.pertag.curtag]:
            self.toggle_tagbar()
        pub.sendMessage(topics.TAGS_VIEWED, monitor=m, tags=m.current_tags)
        self.focus_manager.focus(None)
        self.wm.arrange(m)

    def cycle_view(self, delta: int) -> bool:
        """View the occupied tag ``delta`` steps away from the current one."""
        m = self.selmon
        start = self.tagset.lowest_index(m.current_tags) or 0
        index = self.tagset.cycle(start, delta, m.occupied_tags())
        if index is None:
            return self._reject("cycle_view", "no occupied tags")
        if self.tagset.bit(index) == m.current_tags:
            return self._reject("cycle_view", "no other occupied tag")
        return self.view_tag(self.tagset.bit(index))

    # Client tags

    def tag_client(self, mask: int) -> bool:
        """Replace the selected client's tags."""
        m = self.selmon
        mask = self.tagset.clip(mask)
        if m.sel is None or not mask:
            return self._reject("tag_client", "no selection or empty mask")
        m.sel.tags = mask
        self.focus_manager.focus(None)
        self.wm.arrange(m)
        return True

    def toggle_tag(self, mask: int) -> bool:
        """Toggle tags on the selected client; it always keeps at least one."""
        m = self.selmon
        if m.sel is None:
            return self._reject("toggle_tag", "no selection")
        new_tags = m.sel.tags ^ self.tagset.clip(mask)
        if not new_tags:
            return self._reject("toggle_tag", "client would lose its last tag")
        m.sel.tags = new_tags
        self.focus_manager.focus(None)
        self.wm.arrange(m)
        return True

    def shift_tag(self, delta: int) -> bool:
        """Retag the selected client to the occupied tag ``delta`` steps away."""
        m = self.selmon
        if m.sel is None:
            return self._reject("shift_tag", "no selection")
        start = self.tagset.lowest_index(m.current_tags) or 0
        index = self.tagset.cycle(start, delta, m.occupied_tags())
        if index is None:
            return self._reject("shift_tag", "no occupied tags")
        return self.tag_client(self.tagset.bit(index))

    # Focus

    def cycle_focus(self, direction: int) -> bool:
        return self.focus_manager.cycle(direction)

    def cycle_stackarea_selection(self, direction: int) -> bool:
        return self.focus_manager.cycle_stackarea(direction)

    def cycle_focus_monitor(self, direction: int) -> bool:
        return self.focus_manager.cycle_monitor(direction)

    def _resolve(self, index: Optional[int], client: Optional["Client"]) -> Optional["Client"]:
        """Client given directly, by position among visible clients, or the selection."""
        if client is not None:
            return client
        if index is None:
            return self.selmon.sel
        visible = self.selmon.visible_clients()
        if 0 <= index < len(visible):
            return visible[index]
        return None

    def focus_client(self, index: Optional[int] = None, client: Optional["Client"] = None) -> bool:
        """Focus a client, restoring it first if it is minimized.

        Args:
            index: Position of the client among the visible clients
            client: The client itself, takes precedence over index
        """
        m = self.selmon
        c = self._resolve(index, client)
        if c is None:
            return self._reject("focus_client", f"no visible client at {index}")
        if c.minimized:
            c.minimized = False
            self.wm.arrange(m)
        self.focus_manager.focus(c)
        self.wm.restack(m)
        return True

    def toggle_hidden(self, index: Optional[int] = None, client: Optional["Client"] = None) -> bool:
        """Minimize a client, or restore it if it already is."""
        c = self._resolve(index, client)
        if c is None:
            return self._reject("toggle_hidden", f"no visible client at {index}")
        if c.minimized:
            return self.focus_client(client=c)

        c.minimized = True
        if c is c.monitor.sel:
            c.monitor.sel = None
            self.focus_manager.unfocus(c, True)
        log.debug("Minimized %s", c)
        self.wm.arrange(c.monitor)
        return True

    def hide_window(self) -> bool:
        """Minimize the selected client."""
        m = self.selmon
        c = m.sel
        if c is None:
            return self._reject("hide_window", "no selection")
        c.minimized = True
        m.sel = None
        self.focus_manager.unfocus(c, True)
        self.wm.arrange(m)
        return True

    # Client order and state

    def _partition(self, c: "Client"):
        """Non-floating clients sharing ``c``'s marked state, in list order."""
        return [
            p for p in self.selmon.clients if not p.is_floating and p.marked == c.marked
        ]

    def push_client_left(self) -> bool:
        """Swap the selection with the previous tiled client, wrapping to the end."""
        m = self.selmon
        sel = m.sel
        if sel is None or sel.is_floating:
            return self._reject("push_client_left", "no tiled selection")

        peers = self._partition(sel)
        i = peers.index(sel)
        before = [p for p in peers[:i] if p.is_visible]
        others = [p for p in peers if p is not sel]
        if before:
            m.move_before(sel, before[-1])
        elif others:
            m.move_after(sel, others[-1])

        self.focus_manager.focus(sel)
        self.wm.arrange(m)
        return True

    def push_client_right(self) -> bool:
        """Swap the selection with the next tiled client, wrapping to the front."""
        m = self.selmon
        sel = m.sel
        if sel is None or sel.is_floating:
            return self._reject("push_client_right", "no tiled selection")

        peers = self._partition(sel)
        i = peers.index(sel)
        after = [p for p in peers[i + 1:] if p.is_visible]
        if after:
            m.move_after(sel, after[0])
        else:
            m.reattach(sel)

        self.focus_manager.focus(sel)
        self.wm.arrange(m)
        return True

    def pop(self, c: "Client"):
        """Re-sort a client into its list position and focus it."""
        c.monitor.reattach(c)
        self.focus_manager.focus(c)
        self.wm.arrange(c.monitor)

    def toggle_mark(self) -> bool:
        """Mark or unmark the selected client."""
        m = self.selmon
        if not m.layout.arranges:
            return self._reject("toggle_mark", "layout does not arrange")
        if m.sel is None or m.sel.is_floating:
            return self._reject("toggle_mark", "no tiled selection")
        m.sel.marked = not m.sel.marked
        log.debug("%s %s", "Marked" if m.sel.marked else "Unmarked", m.sel)
        self.pop(m.sel)
        return True

    def toggle_floating(self) -> bool:
        """Toggle floating for the selected client. Fixed-size clients always float."""
        m = self.selmon
        c = m.sel
        if c is None or c.is_fullscreen:
            return self._reject("toggle_floating", "no selection or fullscreen")

        c.is_floating = not c.is_floating or c.is_fixed
        if c.is_floating:
            c.bw = self.config.float_border_width
            self.wm.resize(c, c.x, c.y, c.w, c.h, False)
        else:
            c.bw = self.config.border_width
        m.reattach(c)
        self.wm.arrange(m)
        return True

    def set_fullscreen(self, c: "Client", fullscreen: bool) -> bool:
        """Enter or leave fullscreen. Repeating the current state does nothing.

        Entering remembers floating state, border width and geometry, then
        covers the whole monitor. Leaving restores all three.
        """
        if fullscreen == c.is_fullscreen:
            return False

        display = self.wm.display
        m = c.monitor
        display.set_fullscreen(c.window, fullscreen)
        if fullscreen:
            c.is_fullscreen = True
            c.was_floating = c.is_floating
            c.old_bw = c.bw
            c.saved_geometry = (c.x, c.y, c.w, c.h)
            c.bw = 0
            c.is_floating = True
            m.reattach(c)
            area = m.mon_area
            self.wm.resize_client(c, area.x, area.y, area.width, area.height)
            display.raise_window(c.window)
            self.wm.arrange(m)
        else:
            c.is_fullscreen = False
            c.is_floating = c.was_floating
            c.bw = c.old_bw
            m.reattach(c)
            x, y, w, h = c.saved_geometry
            self.wm.resize_client(c, x, y, w, h)
            self.wm.arrange(m)
        return True

    def toggle_fullscreen(self) -> bool:
        c = self.selmon.sel
        if c is None:
            return self._reject("toggle_fullscreen", "no selection")
        return self.set_fullscreen(c, not c.is_fullscreen)

    # Monitors

    def send_client_to_monitor(self, c: "Client", m: "Monitor") -> bool:
        """Move a client to another monitor, tagging it with that monitor's view."""
        if c.monitor is m:
            return False
        source = c.monitor
        self.focus_manager.unfocus(c, True)
        source.detach(c)
        source.stack_detach(c)
        c.monitor = m
        c.tags = m.current_tags
        m.attach(c)
        m.stack_attach(c)
        log.debug("Sent %s from monitor %d to %d", c, source.num, m.num)
        self.focus_manager.focus(None)
        self.wm.arrange()
        return True

    def send_to_monitor(self, target: Union[int, "Monitor"]) -> bool:
        """Send the selection to a monitor or to the next/previous one.

        Args:
            target: A Monitor, or a direction (> 0 next, otherwise previous)
        """
        from .objects import Monitor

        if self.selmon.sel is None or len(self.wm.monitors) < 2:
            return self._reject("send_to_monitor", "no selection or single monitor")
        if not isinstance(target, Monitor):
            target = self.wm.monitor_manager.direction_to_monitor(target)
        return self.send_client_to_monitor(self.selmon.sel, target)

    def _on_send_to_monitor(self, direction: int):
        """Handle CMD_SEND_TO_MONITOR command."""
        self.send_to_monitor(direction)

    # Layouts

    def set_layout(self, layout: Union[None, str, Layout] = None) -> bool:
        """Switch layouts.

        Without an argument, or with a layout other than the active one, the
        other layout slot becomes active. A given layout is stored into the
        active slot. The choice is remembered for the current view.

        Args:
            layout: Layout instance or configured layout name, None to toggle
        """
        from pubsub import pub
        from . import topics

        if isinstance(layout, str):
            found = self.config.find_layout(layout)
            if found is None:
                return self._reject("set_layout", f"unknown layout {layout!r}")
            layout = found

        m = self.selmon
        pt = m.pertag
        if layout is None or layout is not m.layout:
            pt.selected_layouts[pt.curtag] ^= 1
            m.selected_layout = pt.selected_layouts[pt.curtag]
        if layout is not None:
            pt.layouts[pt.curtag][m.selected_layout] = layout
        m.layouts[m.selected_layout] = pt.layouts[pt.curtag][m.selected_layout]
        m.layout_symbol = m.layout.symbol
        log.debug("Layout %s on monitor %d", m.layout.name, m.num)

        # The first pass may change which clients are onscreen; the second
        # pass makes the label and stacking reflect that.
        self.wm.arrange(m)
        self.wm.draw_bar(m)
        self.wm.arrange(m)
        pub.sendMessage(topics.LAYOUT_CHANGED, monitor=m, layout=m.layout)
        return True

    def _store_marked_width(self, m: "Monitor", value: float):
        m.marked_width = m.pertag.marked_widths[m.pertag.curtag] = clamp_marked_width(value)
        self.wm.arrange(m)

    def adjust_marked_width(self, delta: float) -> bool:
        """Grow or shrink the marked area; the result is clamped to [0.1, 0.9]."""
        m = self.selmon
        if not m.layout.arranges:
            return self._reject("adjust_marked_width", "layout does not arrange")
        self._store_marked_width(m, m.marked_width + delta)
        return True

    def set_marked_width(self, value: float) -> bool:
        m = self.selmon
        if not m.layout.arranges:
            return self._reject("set_marked_width", "layout does not arrange")
        self._store_marked_width(m, value)
        return True

    # Bars

    def toggle_tagbar(self) -> bool:
        m = self.selmon
        m.show_tagbar = m.pertag.show_tagbars[m.pertag.curtag] = not m.show_tagbar
        self.wm.monitor_manager.update_bar_positions(m)
        self.wm.arrange(m)
        return True

    def set_clientbar_mode(self, mode: Union[None, int, str, ClientBarMode] = None) -> bool:
        """Set the client bar mode, or cycle through the modes without one."""
        m = self.selmon
        modes = len(ClientBarMode)
        if mode is None or (isinstance(mode, int) and mode < 0):
            m.clientbar_mode = ClientBarMode((m.clientbar_mode + 1) % modes)
        elif isinstance(mode, int):
            m.clientbar_mode = ClientBarMode(mode % modes)
        else:
            try:
                m.clientbar_mode = parse_clientbar_mode(mode)
            except ValueError as e:
                return self._reject("set_clientbar_mode", str(e))
        self.wm.arrange(m)
        return True

    # Session

    def kill_client(self) -> bool:
        c = self.selmon.sel
        if c is None:
            return self._reject("kill_client", "no selection")
        self.wm.display.close(c.window)
        return True

    def quit(self):
        log.info("Quit requested")
        self.wm.running = False
