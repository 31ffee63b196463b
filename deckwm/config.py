"""
Window Manager Configuration

Static, load-time settings: tags, rules, layouts and numeric knobs.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

from .layouts import DeckLayout, FloatingLayout, Layout, MonocleLayout, TileLayout
from .protocol import ClientBarMode
from .rules import Rule
from .tags import TagSet


def default_tags() -> List[str]:
    return ["terminal", "1", "2", "3", "4", "5", "6", "7", "8"]


def default_rules() -> List[Rule]:
    return [
        Rule(wm_class="Gimp", is_floating=True),
        Rule(wm_class="Chromium", tags=1 << 1),
        Rule(wm_class="Geany", tags=1 << 1),
        Rule(wm_class="MPlayer", tags=1 << 1, is_floating=True),
        Rule(wm_class="URxvt", tags=1 << 0),
    ]


def parse_clientbar_mode(mode) -> ClientBarMode:
    """
    Parse a client bar mode.

    Accepts a ClientBarMode, its integer value or its name ("never", "auto",
    "always").
    """
    if isinstance(mode, ClientBarMode):
        return mode
    if isinstance(mode, str):
        try:
            return ClientBarMode[mode.upper()]
        except KeyError:
            raise ValueError(f"Invalid client bar mode: {mode}. Use never, auto or always")
    try:
        return ClientBarMode(mode)
    except ValueError:
        raise ValueError(f"Invalid client bar mode: {mode!r}")


@dataclass
class WMConfig:
    """Window manager configuration."""

    # Tagging
    tags: List[str] = field(default_factory=default_tags)
    rules: List[Rule] = field(default_factory=default_rules)

    # Layouts (first is the default); None means all built-in layouts
    layouts: Optional[List[Layout]] = None
    # Layout index per view: index 0 is the all-tags view, i is tags[i - 1]
    def_layouts: Optional[List[int]] = None

    # Default width of the marked area [0.05..0.95]
    marked_width: float = 0.55

    # Borders
    border_width: int = 0
    float_border_width: int = 1

    # Snap region in pixels for interactive moves
    snap: int = 32

    # Bars
    bar_height: int = 16
    clientbar_height: int = 16
    show_tagbar: bool = True
    tags_on_top: bool = True
    clientbar_mode: ClientBarMode = ClientBarMode.AUTO

    # Behaviour toggles
    follow_new_windows: bool = True
    view_tag_toggles: bool = True
    hide_inactive_tags: bool = True
    resize_hints: bool = False
    hide_buried_windows: bool = True

    status_text: str = "deckwm"

    def __post_init__(self):
        """Validate settings and fill in defaults."""
        self.tagset = TagSet(self.tags)

        if self.layouts is not None and not self.layouts:
            raise ValueError("The layout table needs at least one layout")
        if self.def_layouts is None:
            self.def_layouts = [0] * (len(self.tags) + 1)
        elif len(self.def_layouts) != len(self.tags) + 1:
            raise ValueError(
                f"def_layouts needs {len(self.tags) + 1} entries, got {len(self.def_layouts)}"
            )

        if not 0.05 <= self.marked_width <= 0.95:
            raise ValueError(f"marked_width must lie in [0.05, 0.95], got {self.marked_width}")
        if self.border_width < 0 or self.float_border_width < 0:
            raise ValueError("Border widths cannot be negative")
        if self.snap < 0:
            raise ValueError("snap cannot be negative")

        self.clientbar_mode = parse_clientbar_mode(self.clientbar_mode)

    def get_layouts(self) -> List[Layout]:
        """Get configured layouts or default layouts."""
        if self.layouts is None:
            self.layouts = [
                DeckLayout("D  "),
                MonocleLayout("[M]"),
                TileLayout("[]="),
                FloatingLayout("><>"),
            ]
        return self.layouts

    def default_layout(self, view: int) -> Layout:
        """Layout a view starts with."""
        layouts = self.get_layouts()
        return layouts[self.def_layouts[view] % len(layouts)]

    def alternate_layout(self) -> Layout:
        """Layout of the second slot each view starts with."""
        layouts = self.get_layouts()
        return layouts[1 % len(layouts)]

    def find_layout(self, name: str) -> Optional[Layout]:
        """Look up a configured layout by name or symbol."""
        for layout in self.get_layouts():
            if layout.name == name or layout.symbol.strip() == name:
                return layout
        return None
