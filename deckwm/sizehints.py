"""
Size Hints

ICCCM WM_NORMAL_HINTS handling: stores a client's constraints and resolves a
requested geometry to the nearest admissible one.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

from .protocol import Area, SizeHintsInfo

if TYPE_CHECKING:
    from .objects import Client


@dataclass
class SizeHints:
    """Resolved size constraints of a client. Zero means unconstrained."""

    base_width: int = 0
    base_height: int = 0
    inc_width: int = 0
    inc_height: int = 0
    min_width: int = 0
    min_height: int = 0
    max_width: int = 0
    max_height: int = 0
    min_aspect: float = 0.0
    max_aspect: float = 0.0

    @classmethod
    def from_info(cls, info: Optional[SizeHintsInfo]) -> "SizeHints":
        """Build constraints from raw hints, base and min falling back to each other."""
        hints = cls()
        if info is None:
            return hints

        if info.base_width is not None:
            hints.base_width = info.base_width
            hints.base_height = info.base_height or 0
        elif info.min_width is not None:
            hints.base_width = info.min_width
            hints.base_height = info.min_height or 0

        if info.width_inc is not None:
            hints.inc_width = info.width_inc
            hints.inc_height = info.height_inc or 0

        if info.max_width is not None:
            hints.max_width = info.max_width
            hints.max_height = info.max_height or 0

        if info.min_width is not None:
            hints.min_width = info.min_width
            hints.min_height = info.min_height or 0
        elif info.base_width is not None:
            hints.min_width = info.base_width
            hints.min_height = info.base_height or 0

        if info.min_aspect and info.max_aspect:
            min_x, min_y = info.min_aspect
            max_x, max_y = info.max_aspect
            if min_x and max_y:
                hints.min_aspect = min_y / min_x
                hints.max_aspect = max_x / max_y

        return hints

    @property
    def is_fixed(self) -> bool:
        """Whether min and max size coincide on both axes."""
        return bool(
            self.max_width
            and self.min_width
            and self.max_height
            and self.min_height
            and self.max_width == self.min_width
            and self.max_height == self.min_height
        )

    def constrain(self, w: int, h: int) -> Tuple[int, int]:
        """Apply base size, aspect, increments and min/max to a size."""
        base_is_min = (
            self.base_width == self.min_width and self.base_height == self.min_height
        )
        if not base_is_min:
            # see last two sentences in ICCCM 4.1.2.3
            w -= self.base_width
            h -= self.base_height

        if self.min_aspect > 0 and self.max_aspect > 0 and w > 0 and h > 0:
            if self.max_aspect < w / h:
                w = int(h * self.max_aspect + 0.5)
            elif self.min_aspect < h / w:
                h = int(w * self.min_aspect + 0.5)

        if base_is_min:
            w -= self.base_width
            h -= self.base_height

        if self.inc_width:
            w -= w % self.inc_width
        if self.inc_height:
            h -= h % self.inc_height

        w = max(w + self.base_width, self.min_width)
        h = max(h + self.base_height, self.min_height)
        if self.max_width:
            w = min(w, self.max_width)
        if self.max_height:
            h = min(h, self.max_height)
        return w, h


def resolve(
    client: "Client",
    x: int,
    y: int,
    w: int,
    h: int,
    interact: bool,
    *,
    screen: Area,
    bar_height: int = 0,
    respect_hints: bool = False,
) -> Tuple[int, int, int, int, bool]:
    """
    Resolve a requested geometry against a client's constraints.

    Args:
        client: The client being placed
        x, y, w, h: Requested position and inner size
        interact: True while the user drags the window
        screen: Virtual screen area, used to keep dragged windows reachable
        bar_height: Minimum width/height of any window
        respect_hints: Apply size hints to tiled clients too

    Returns:
        Tuple (x, y, w, h, changed) where changed tells whether the result
        differs from the client's current geometry
    """
    monitor = client.monitor
    bw2 = 2 * client.bw

    w = max(1, w)
    h = max(1, h)

    if interact:
        if x > screen.right:
            x = screen.right - client.width
        if y > screen.bottom:
            y = screen.bottom - client.height
        if x + w + bw2 < screen.x:
            x = screen.x
        if y + h + bw2 < screen.y:
            y = screen.y
    else:
        area = monitor.win_area
        if x >= area.right:
            x = area.right - client.width
        if y >= area.bottom:
            y = area.bottom - client.height
        if x + w + bw2 <= area.x:
            x = area.x
        if y + h + bw2 <= area.y:
            y = area.y

    h = max(h, bar_height)
    w = max(w, bar_height)

    if respect_hints or client.is_floating or not monitor.layout.arranges:
        w, h = client.hints.constrain(w, h)

    changed = x != client.x or y != client.y or w != client.w or h != client.h
    return x, y, w, h, changed
