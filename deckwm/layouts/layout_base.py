"""
Window Layout Base Classes

Provides the Layout interface and shared layout infrastructure.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Optional, TYPE_CHECKING

from ..protocol import Area

if TYPE_CHECKING:
    from ..objects import Client

MIN_MARKED_WIDTH = 0.1
MAX_MARKED_WIDTH = 0.9


def clamp_marked_width(value: float) -> float:
    """Clamp a marked-area fraction into its admissible range."""
    return min(MAX_MARKED_WIDTH, max(MIN_MARKED_WIDTH, value))


@dataclass
class LayoutGeometry:
    """Calculated cell for a client, border included."""

    x: int
    y: int
    width: int
    height: int


@dataclass
class LayoutResult:
    """Outcome of one arrangement: a cell per client and the label to show."""

    symbol: str
    geometries: Dict["Client", LayoutGeometry] = field(default_factory=dict)


class LayoutKind(Enum):
    """Closed set of arrangement algorithms."""

    TILE = auto()
    DECK = auto()
    MONOCLE = auto()
    FLOATING = auto()


class Layout(ABC):
    """Abstract base class for window layouts."""

    kind: LayoutKind

    def __init__(self, symbol: str):
        self.symbol = symbol

    @property
    @abstractmethod
    def name(self) -> str:
        """Layout name for commands and logs."""
        pass

    @property
    def arranges(self) -> bool:
        """False for layouts that leave client geometry alone."""
        return True

    @abstractmethod
    def calculate(
        self,
        clients: List["Client"],
        area: Area,
        num_marked: int = 0,
        marked_width: float = 0.55,
        visible_count: Optional[int] = None,
    ) -> LayoutResult:
        """
        Calculate client cells.

        Args:
            clients: Visible, tiled clients in client-list order
            area: Work area of the monitor
            num_marked: Number of marked clients among ``clients``
            marked_width: Fraction of the width given to the marked area
            visible_count: Number of tag-visible clients on the monitor

        Returns:
            LayoutResult mapping clients to cells plus the layout label
        """
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.symbol!r}>"


def stack_column(
    clients: List["Client"], x: int, y: int, width: int, height: int
) -> Dict["Client", LayoutGeometry]:
    """Stack clients top to bottom in a column.

    Each client gets the remaining height divided by the number of clients
    still to place, so the last one absorbs the rounding remainder.
    """
    result = {}
    used = 0
    for i, client in enumerate(clients):
        h = (height - used) // (len(clients) - i)
        result[client] = LayoutGeometry(x, y + used, width, h)
        used += h
    return result


def marked_area_width(n: int, num_marked: int, area: Area, marked_width: float) -> int:
    """Width of the marked column for ``n`` tiled clients."""
    if n > num_marked:
        if not num_marked:
            return 0
        return int(area.width * clamp_marked_width(marked_width))
    return area.width
