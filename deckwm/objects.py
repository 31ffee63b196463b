"""
Window Management Objects

Client and Monitor bookkeeping. A monitor owns its client list (layout order)
and keeps a second, recency-ordered focus stack over the same clients. The
stack stores window handles and resolves them through the monitor, so the two
orderings never share list nodes.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Hashable, Iterator, List, Optional, Tuple

from .layouts import Layout, LayoutKind
from .protocol import Area, ClientBarMode, WindowGeometry
from .sizehints import SizeHints

if TYPE_CHECKING:
    from .config import WMConfig


class Client:
    """A managed top-level window."""

    def __init__(self, window: Hashable, monitor: Optional["Monitor"] = None, name: str = ""):
        self.window = window
        self.monitor = monitor
        self.name = name
        self.wm_class = ""
        self.instance = ""

        # Geometry (inner size) and the previous geometry
        self.x = self.y = 0
        self.w = self.h = 1
        self.bw = 0
        self.old_x = self.old_y = 0
        self.old_w = self.old_h = 1
        self.old_bw = 0
        # Geometry to return to when leaving fullscreen
        self.saved_geometry: Optional[Tuple[int, int, int, int]] = None

        self.hints = SizeHints()
        self.tags = 0

        self.is_floating = False
        self.was_floating = False
        self.is_fullscreen = False
        self.is_urgent = False
        self.never_focus = False
        self.marked = False
        self.minimized = False
        self.onscreen = True

    @property
    def is_fixed(self) -> bool:
        return self.hints.is_fixed

    @property
    def width(self) -> int:
        """Outer width, borders included."""
        return self.w + 2 * self.bw

    @property
    def height(self) -> int:
        """Outer height, borders included."""
        return self.h + 2 * self.bw

    @property
    def is_visible(self) -> bool:
        """Whether the client's tags intersect its monitor's current view."""
        return self.monitor is not None and bool(self.tags & self.monitor.current_tags)

    @property
    def is_tiled(self) -> bool:
        """Eligible for layout placement."""
        return self.is_visible and not self.is_floating and not self.minimized

    def geometry(self) -> WindowGeometry:
        return WindowGeometry(self.x, self.y, self.w, self.h, self.bw)

    def set_geometry(self, x: int, y: int, w: int, h: int):
        """Store a new geometry, remembering the previous one."""
        self.old_x, self.x = self.x, x
        self.old_y, self.y = self.y, y
        self.old_w, self.w = self.w, w
        self.old_h, self.h = self.h, h

    def __repr__(self) -> str:
        return f"<Client {self.window!r} {self.name!r} tags={self.tags:#x}>"


@dataclass
class Pertag:
    """Per-view memory. Index 0 is the all-tags view, index i is tag i - 1."""

    curtag: int = 1
    prevtag: int = 1
    marked_widths: List[float] = field(default_factory=list)
    selected_layouts: List[int] = field(default_factory=list)
    layouts: List[List[Layout]] = field(default_factory=list)
    show_tagbars: List[bool] = field(default_factory=list)

    @classmethod
    def create(cls, config: "WMConfig") -> "Pertag":
        views = len(config.tags) + 1
        return cls(
            marked_widths=[config.marked_width] * views,
            selected_layouts=[0] * views,
            layouts=[
                [config.default_layout(i), config.alternate_layout()] for i in range(views)
            ],
            show_tagbars=[config.show_tagbar] * views,
        )


class Monitor:
    """One output region with its clients, focus stack and view state."""

    def __init__(self, num: int, config: "WMConfig"):
        self.num = num
        self.mon_area = Area()
        self.win_area = Area()

        self.clients: List[Client] = []
        self.stack: List[Hashable] = []
        self._by_window: Dict[Hashable, Client] = {}
        self.sel: Optional[Client] = None

        self.tagset = [1, 1]
        self.selected_tags = 0

        self.pertag = Pertag.create(config)
        self.marked_width = config.marked_width
        self.num_marked = 0
        self.selected_layout = 0
        self.layouts: List[Layout] = list(self.pertag.layouts[self.pertag.curtag])
        self.layout_symbol = self.layouts[0].symbol

        self.show_tagbar = config.show_tagbar
        self.tags_on_top = config.tags_on_top
        self.clientbar_mode = config.clientbar_mode
        self.show_clientbar = False
        self.tagbar_pos = 0
        self.clientbar_pos = 0

    @property
    def current_tags(self) -> int:
        return self.tagset[self.selected_tags]

    @property
    def layout(self) -> Layout:
        return self.layouts[self.selected_layout]

    def restore_view(self):
        """Load the per-view state of the current tag index."""
        tag = self.pertag.curtag
        self.marked_width = self.pertag.marked_widths[tag]
        self.selected_layout = self.pertag.selected_layouts[tag]
        self.layouts[self.selected_layout] = self.pertag.layouts[tag][self.selected_layout]
        self.layouts[self.selected_layout ^ 1] = self.pertag.layouts[tag][self.selected_layout ^ 1]

    # Client list

    def attach(self, c: Client):
        """Insert a client: floating first, then marked, then the rest."""
        self._by_window[c.window] = c
        if c.is_floating:
            self.clients.insert(0, c)
            return
        for i, pos in enumerate(self.clients):
            if pos.is_floating:
                continue
            if c.marked or not pos.marked:
                self.clients.insert(i, c)
                return
        self.clients.append(c)

    def detach(self, c: Client):
        self.clients.remove(c)
        self._forget(c)

    def reattach(self, c: Client):
        """Move a client to the position its flags call for."""
        self.clients.remove(c)
        self.attach(c)

    def move_before(self, c: Client, ref: Client):
        self.clients.remove(c)
        self.clients.insert(self.clients.index(ref), c)

    def move_after(self, c: Client, ref: Client):
        self.clients.remove(c)
        self.clients.insert(self.clients.index(ref) + 1, c)

    # Focus stack

    def stack_attach(self, c: Client):
        self._by_window[c.window] = c
        self.stack.insert(0, c.window)

    def stack_detach(self, c: Client):
        """Remove a client from the stack, reselecting if it was selected."""
        self.stack.remove(c.window)
        self._forget(c)
        if c is self.sel:
            self.sel = next(
                (t for t in self.stack_clients() if t.is_visible and not t.minimized),
                None,
            )

    def stack_clients(self) -> Iterator[Client]:
        """Clients in focus-recency order, most recent first."""
        for window in self.stack:
            yield self._by_window[window]

    def _forget(self, c: Client):
        if c not in self.clients and c.window not in self.stack:
            self._by_window.pop(c.window, None)

    def client_for(self, window: Hashable) -> Optional[Client]:
        return self._by_window.get(window)

    # Queries

    def visible_clients(self) -> List[Client]:
        return [c for c in self.clients if c.is_visible]

    def tiled_clients(self) -> List[Client]:
        return [c for c in self.clients if c.is_tiled]

    def occupied_tags(self) -> int:
        occ = 0
        for c in self.clients:
            occ |= c.tags
        return occ

    def urgent_tags(self) -> int:
        urg = 0
        for c in self.clients:
            if c.is_urgent:
                urg |= c.tags
        return urg

    def compute_onscreen(self):
        """Recompute which clients are rendered and the marked count."""
        kind = self.layout.kind
        sel = self.sel
        self.num_marked = sum(1 for c in self.clients if c.is_tiled and c.marked)

        for c in self.clients:
            shown = c.is_visible and not c.minimized
            if kind == LayoutKind.MONOCLE:
                shown = shown and (c.is_floating or c is sel)
            elif kind == LayoutKind.DECK:
                shown = shown and (c.is_floating or c.marked or c is sel)
            c.onscreen = shown

        needs_top = False
        if kind == LayoutKind.MONOCLE:
            needs_top = sel is None or sel.is_floating
        elif kind == LayoutKind.DECK:
            needs_top = sel is None or sel.marked or sel.is_floating
        if needs_top:
            for c in self.stack_clients():
                if not c.onscreen and not c.minimized and c.is_visible:
                    c.onscreen = True
                    break

    def update_bar_positions(self, bar_height: int, clientbar_height: int):
        """Derive the work area from the monitor area and the bars."""
        area = self.win_area
        area.x = self.mon_area.x
        area.width = self.mon_area.width
        area.y = self.mon_area.y
        area.height = self.mon_area.height

        if self.show_tagbar:
            area.height -= bar_height
            self.tagbar_pos = area.y if self.tags_on_top else area.y + area.height
            if self.tags_on_top:
                area.y += bar_height
        else:
            self.tagbar_pos = -bar_height

        visible = self.visible_clients()
        hidden = sum(1 for c in visible if c.minimized)
        kind = self.layout.kind
        self.show_clientbar = self.clientbar_mode == ClientBarMode.ALWAYS or (
            self.clientbar_mode == ClientBarMode.AUTO
            and (
                hidden > 0
                or (len(visible) > 1 and kind == LayoutKind.MONOCLE)
                or (len(visible) > 1 + self.num_marked and kind == LayoutKind.DECK)
            )
        )
        if self.show_clientbar:
            area.height -= clientbar_height
            self.clientbar_pos = area.y + area.height if self.tags_on_top else area.y
            if not self.tags_on_top:
                area.y += clientbar_height
        else:
            self.clientbar_pos = -clientbar_height

    def check_invariants(self):
        """Raise AssertionError on the first broken model invariant."""
        listed = [c.window for c in self.clients]
        assert len(set(listed)) == len(listed), f"duplicate client in list of {self}"
        assert len(set(self.stack)) == len(self.stack), f"duplicate client in stack of {self}"
        assert set(listed) == set(self.stack), f"list and stack differ on {self}"
        for c in self.clients:
            assert c.monitor is self, f"{c} listed on {self} but points at {c.monitor}"
            assert c.tags != 0, f"{c} has no tags"
        if self.sel is not None:
            assert self.sel in self.clients, f"selection {self.sel} not managed by {self}"
            assert self.sel.is_visible, f"selection {self.sel} is not visible"

        seen_tiled = seen_unmarked = False
        for c in self.clients:
            if c.is_floating:
                assert not seen_tiled, f"floating {c} after tiled clients"
                continue
            seen_tiled = True
            if c.marked:
                assert not seen_unmarked, f"marked {c} after unmarked clients"
            else:
                seen_unmarked = True

    def __repr__(self) -> str:
        return f"<Monitor {self.num} {self.mon_area}>"
