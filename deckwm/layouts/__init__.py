"""
Layout System

Provides window layout algorithms.
"""

from .layout_base import (
    Layout,
    LayoutGeometry,
    LayoutKind,
    LayoutResult,
    clamp_marked_width,
)
from .layout_tiling import TileLayout
from .layout_deck import DeckLayout
from .layout_monocle import MonocleLayout
from .layout_floating import FloatingLayout

__all__ = [
    # Base classes
    "Layout",
    "LayoutGeometry",
    "LayoutKind",
    "LayoutResult",
    "clamp_marked_width",
    # Layout implementations
    "TileLayout",
    "DeckLayout",
    "MonocleLayout",
    "FloatingLayout",
]
