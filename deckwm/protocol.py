"""
Adapter Protocol Types

Value types exchanged between the window management core and the
display-server adapter. The core never talks to the display server directly;
it receives these types in notifications and hands them back in
placement, visibility and focus instructions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, IntEnum, auto
from typing import Any, Hashable, List, Optional


class WMState(IntEnum):
    """ICCCM WM_STATE values."""

    WITHDRAWN = 0
    NORMAL = 1
    ICONIC = 3


class BorderScheme(Enum):
    """Border decoration requested for a window."""

    NORMAL = auto()
    SELECTED = auto()


class ClientBarMode(IntEnum):
    """Display modes of the client bar."""

    NEVER = 0
    AUTO = 1
    ALWAYS = 2


class FullscreenAction(IntEnum):
    """_NET_WM_STATE client message actions."""

    REMOVE = 0
    ADD = 1
    TOGGLE = 2


class WindowType(Enum):
    """Window type reported by the adapter."""

    NORMAL = auto()
    DIALOG = auto()


class Property(Enum):
    """Window properties the core reacts to."""

    TITLE = auto()
    NORMAL_HINTS = auto()
    WM_HINTS = auto()
    TRANSIENT_FOR = auto()
    WINDOW_TYPE = auto()


@dataclass
class Area:
    """Area with position and dimensions."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def intersection(self, x: int, y: int, w: int, h: int) -> int:
        """Return the overlapping surface between this area and a rectangle."""
        dx = max(0, min(x + w, self.right) - max(x, self.x))
        dy = max(0, min(y + h, self.bottom) - max(y, self.y))
        return dx * dy


@dataclass
class WindowGeometry:
    """Placement instruction for a single window."""

    x: int
    y: int
    width: int
    height: int
    border_width: int = 0


@dataclass
class WindowAttributes:
    """Attributes of a window at the time it is first reported."""

    x: int = 0
    y: int = 0
    width: int = 1
    height: int = 1
    border_width: int = 0
    override_redirect: bool = False
    name: str = ""
    wm_class: str = ""
    instance: str = ""
    transient_for: Optional[Hashable] = None
    window_type: WindowType = WindowType.NORMAL
    fullscreen: bool = False
    size_hints: Optional["SizeHintsInfo"] = None
    urgent: bool = False
    accepts_input: Optional[bool] = None
    viewable: bool = True


@dataclass
class WMHintsInfo:
    """The parts of WM_HINTS the core uses.

    accepts_input is None when the input hint is absent.
    """

    urgent: bool = False
    accepts_input: Optional[bool] = None


@dataclass
class SizeHintsInfo:
    """Raw WM_NORMAL_HINTS as reported by the adapter.

    A field set to None means the corresponding flag was absent.
    """

    base_width: Optional[int] = None
    base_height: Optional[int] = None
    min_width: Optional[int] = None
    min_height: Optional[int] = None
    max_width: Optional[int] = None
    max_height: Optional[int] = None
    width_inc: Optional[int] = None
    height_inc: Optional[int] = None
    min_aspect: Optional[tuple] = None  # (x, y)
    max_aspect: Optional[tuple] = None  # (x, y)


@dataclass
class ConfigureChanges:
    """Fields of a configure request; None means not requested."""

    x: Optional[int] = None
    y: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    border_width: Optional[int] = None


@dataclass
class ClientTab:
    """One entry of the client bar."""

    window: Any
    name: str
    selected: bool = False
    urgent: bool = False
    minimized: bool = False
    onscreen: bool = False
    marked: bool = False


@dataclass
class BarState:
    """Snapshot of everything a status bar needs for one monitor."""

    monitor: int
    layout_symbol: str
    selected_tags: int
    occupied_tags: int
    urgent_tags: int
    shown_tags: List[int] = field(default_factory=list)
    title: str = ""
    show_tagbar: bool = True
    show_clientbar: bool = False
    tagbar_pos: int = 0
    clientbar_pos: int = 0
    tabs: List[ClientTab] = field(default_factory=list)
    status: str = ""
