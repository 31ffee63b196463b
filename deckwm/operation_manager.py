"""
Operation Manager

Handles interactive move and resize operations for clients. The adapter
reports the button press that starts an operation, every pointer motion while
it runs and the button release that ends it. A release is the only way to end
an operation; there is no cancel.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .manager import WindowManager
    from .objects import Client

log = logging.getLogger(__name__)


class OpType(Enum):
    """Type of interactive operation."""

    NONE = auto()
    MOVE = auto()
    RESIZE = auto()


@dataclass
class Operation:
    """Represents an active interactive operation."""

    type: OpType
    client: "Client"
    start_x: int
    start_y: int
    origin_x: int
    origin_y: int


def snap_position(nx: int, ny: int, c: "Client", area, snap: int):
    """Pull a window position onto nearby work-area edges."""
    if abs(area.x - nx) < snap:
        nx = area.x
    elif abs(area.right - (nx + c.width)) < snap:
        nx = area.right - c.width
    if abs(area.y - ny) < snap:
        ny = area.y
    elif abs(area.bottom - (ny + c.height)) < snap:
        ny = area.bottom - c.height
    return nx, ny


class OperationManager:
    """Manages interactive move and resize operations."""

    def __init__(self, wm: "WindowManager"):
        """Initialize operation manager.

        Args:
            wm: The window manager whose selected client is operated on
        """
        self.wm = wm
        self.current: Optional[Operation] = None

    def is_active(self) -> bool:
        """Check if an operation is currently active."""
        return self.current is not None

    def get_operation_type(self) -> OpType:
        """Get the current operation type."""
        return self.current.type if self.current else OpType.NONE

    def _start(self, op_type: OpType, pointer_x: int, pointer_y: int) -> bool:
        from pubsub import pub
        from . import topics

        c = self.wm.selmon.sel
        if self.current is not None:
            log.debug("%s rejected: operation already active", op_type.name)
            return False
        if c is None or c.is_fullscreen:
            log.debug("%s rejected: no selection or fullscreen", op_type.name)
            return False

        self.wm.restack(self.wm.selmon)
        self.current = Operation(
            type=op_type,
            client=c,
            start_x=pointer_x,
            start_y=pointer_y,
            origin_x=c.x,
            origin_y=c.y,
        )
        pub.sendMessage(topics.OPERATION_STARTED, client=c, kind=op_type.name.lower())
        return True

    def start_move(self, pointer_x: int, pointer_y: int) -> bool:
        """Start moving the selected client.

        Args:
            pointer_x: Root pointer x at the button press
            pointer_y: Root pointer y at the button press

        Returns:
            True if operation started, False if rejected
        """
        return self._start(OpType.MOVE, pointer_x, pointer_y)

    def start_resize(self) -> bool:
        """Start resizing the selected client from its bottom-right corner.

        The adapter is expected to warp the pointer to that corner; motion
        coordinates are read as the new corner position.

        Returns:
            True if operation started, False if rejected
        """
        c = self.wm.selmon.sel
        if c is None:
            return self._start(OpType.RESIZE, 0, 0)
        return self._start(
            OpType.RESIZE, c.x + c.w + c.bw - 1, c.y + c.h + c.bw - 1
        )

    def motion(self, x: int, y: int):
        """Handle pointer motion during the operation.

        Args:
            x: Root pointer x
            y: Root pointer y
        """
        if not self.current:
            return
        if self.current.type == OpType.MOVE:
            self._move(x, y)
        else:
            self._resize(x, y)

    def _tiled_drag_exceeds_snap(self, c: "Client", dx: int, dy: int) -> bool:
        m = self.wm.selmon
        snap = self.wm.config.snap
        return (
            not c.is_floating
            and m.layout.arranges
            and (abs(dx) > snap or abs(dy) > snap)
        )

    def _move(self, x: int, y: int):
        op = self.current
        c = op.client
        m = self.wm.selmon
        area = m.win_area

        nx = op.origin_x + (x - op.start_x)
        ny = op.origin_y + (y - op.start_y)
        if area.x <= nx <= area.right and area.y <= ny <= area.bottom:
            nx, ny = snap_position(nx, ny, c, area, self.wm.config.snap)
            if self._tiled_drag_exceeds_snap(c, nx - c.x, ny - c.y):
                self.wm.controller.toggle_floating()

        if not m.layout.arranges or c.is_floating:
            self.wm.resize(c, nx, ny, c.w, c.h, True)

    def _resize(self, x: int, y: int):
        op = self.current
        c = op.client
        m = self.wm.selmon
        area = m.win_area

        nw = max(x - op.origin_x - 2 * c.bw + 1, 1)
        nh = max(y - op.origin_y - 2 * c.bw + 1, 1)
        own = c.monitor.win_area
        if area.x <= own.x + nw <= area.right and area.y <= own.y + nh <= area.bottom:
            if self._tiled_drag_exceeds_snap(c, nw - c.w, nh - c.h):
                self.wm.controller.toggle_floating()

        if not m.layout.arranges or c.is_floating:
            self.wm.resize(c, c.x, c.y, nw, nh, True)

    def release(self):
        """End the operation, moving the client to the monitor it now overlaps most."""
        from pubsub import pub
        from . import topics

        if not self.current:
            return
        c = self.current.client
        self.current = None

        m = self.wm.monitor_manager.rect_to_monitor(c.x, c.y, c.w, c.h)
        if m is not self.wm.selmon:
            self.wm.controller.send_client_to_monitor(c, m)
            self.wm.focus_manager.select_monitor(m)
        pub.sendMessage(topics.OPERATION_ENDED, client=c)
