"""
deckwm

The arrangement and workspace core of a tiling window manager: tags, marked
clients, deck/tile/monocle/floating layouts, per-tag view memory and focus
handling. Talking to a display server is left to an adapter implementing
``deckwm.display.Display``.

This package provides:
- Client and monitor model with a layout-ordered client list and focus stack
- Layout algorithms (deck, tile, monocle, floating)
- ICCCM size-hint resolution
- Workspace commands reachable as methods and as pypubsub command topics
- Adapter notification handling (manage, configure, properties, outputs)

Example usage:
    from deckwm import WindowManager, WMConfig, WindowAttributes

    wm = WindowManager(WMConfig(marked_width=0.6))
    wm.events.manage(1, WindowAttributes(name="xterm", wm_class="XTerm"))
    wm.controller.toggle_mark()

Or run the headless driver:
    python -m deckwm < script
"""

__version__ = "0.1.0"

from .protocol import (
    Area,
    BarState,
    BorderScheme,
    ClientBarMode,
    ClientTab,
    ConfigureChanges,
    FullscreenAction,
    Property,
    SizeHintsInfo,
    WindowAttributes,
    WindowGeometry,
    WindowType,
    WMHintsInfo,
    WMState,
)

from .tags import TagSet

from .sizehints import SizeHints

from .objects import Client, Monitor, Pertag

from .layouts import (
    Layout,
    LayoutGeometry,
    LayoutKind,
    LayoutResult,
    TileLayout,
    DeckLayout,
    MonocleLayout,
    FloatingLayout,
)

from .rules import Rule, RuleMatcher

from .config import WMConfig

from .display import Display, RecordingDisplay

from .manager import WindowManager

from .commands import CommandError, parse_command, run_command

from . import topics

__all__ = [
    # Version
    "__version__",
    # Protocol types
    "Area",
    "BarState",
    "BorderScheme",
    "ClientBarMode",
    "ClientTab",
    "ConfigureChanges",
    "FullscreenAction",
    "Property",
    "SizeHintsInfo",
    "WindowAttributes",
    "WindowGeometry",
    "WindowType",
    "WMHintsInfo",
    "WMState",
    # Model
    "TagSet",
    "SizeHints",
    "Client",
    "Monitor",
    "Pertag",
    # Layouts
    "Layout",
    "LayoutGeometry",
    "LayoutKind",
    "LayoutResult",
    "TileLayout",
    "DeckLayout",
    "MonocleLayout",
    "FloatingLayout",
    # Rules and configuration
    "Rule",
    "RuleMatcher",
    "WMConfig",
    # Display adapter
    "Display",
    "RecordingDisplay",
    # Window Manager
    "WindowManager",
    # Commands
    "CommandError",
    "parse_command",
    "run_command",
    # Event topics
    "topics",
]
