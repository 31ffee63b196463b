"""
Headless driver for deckwm.

Reads one command per line from stdin and drives a WindowManager over a
RecordingDisplay, printing each monitor's bar label and client placement
after every line.

Besides the regular commands (``view 2``, ``layout tile``, ``mark`` ...) the
driver understands:

    open NAME [CLASS]      manage a new window
    close NAME             unmanage it
    screens WxH+X+Y ...    replace the output layout

Usage:
    python -m deckwm [--verbose] [--size WxH] [--check] < script
"""

import argparse
import logging
import re
import sys
from typing import List, Optional, TextIO

from .commands import run_command
from .config import WMConfig
from .display import RecordingDisplay
from .manager import WindowManager
from .protocol import Area, WindowAttributes

log = logging.getLogger(__name__)

GEOMETRY_RE = re.compile(r"^(\d+)x(\d+)(?:\+(-?\d+)\+(-?\d+))?$")


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity level.

    Args:
        verbose: Enable verbose (DEBUG) logging
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s [%(name)s] %(message)s",
    )


def parse_geometry(text: str) -> Area:
    """Parse ``WxH`` or ``WxH+X+Y``."""
    match = GEOMETRY_RE.match(text)
    if not match:
        raise argparse.ArgumentTypeError(f"Invalid geometry: {text}")
    w, h, x, y = match.groups()
    return Area(int(x or 0), int(y or 0), int(w), int(h))


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="deckwm",
        description="Run the deckwm core headless, reading commands from stdin",
    )
    parser.add_argument(
        "--size",
        type=parse_geometry,
        default=Area(0, 0, 1920, 1080),
        metavar="WxH",
        help="Size of the virtual screen (default: 1920x1080)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Verify model invariants after every command",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


class Driver:
    """Feeds script lines to a WindowManager."""

    def __init__(self, wm: WindowManager, out: TextIO, check: bool = False):
        self.wm = wm
        self.out = out
        self.check = check
        self.windows = {}
        self._next_window = 1

    def handle(self, line: str) -> bool:
        """Run one script line.

        Returns:
            False if the line could not be executed
        """
        parts = line.split()
        if not parts or parts[0].startswith("#"):
            return True

        name = parts[0]
        if name == "open":
            ok = self._open(parts[1:])
        elif name == "close":
            ok = len(parts) == 2 and self.wm.events.unmanage(self.windows.pop(parts[1], None))
        elif name == "screens":
            screens = [parse_geometry(p) for p in parts[1:]]
            self.wm.events.screen_change(self.wm.screen, screens)
            ok = True
        else:
            ok = run_command(line, self.wm.tagset)

        if self.check:
            self.wm.check_invariants()
        self.report()
        return ok

    def _open(self, args: List[str]) -> bool:
        if not args:
            return False
        window = self._next_window
        self._next_window += 1
        attrs = WindowAttributes(
            x=0,
            y=0,
            width=640,
            height=480,
            name=args[0],
            wm_class=args[1] if len(args) > 1 else args[0],
            instance=args[0],
        )
        if self.wm.events.manage(window, attrs) is None:
            return False
        self.windows[args[0]] = window
        return True

    def report(self):
        for m in self.wm.monitors:
            sel = m.sel.name if m.sel else "-"
            print(
                f"monitor {m.num} tags={m.current_tags:#x} [{m.layout_symbol.strip()}] sel={sel}",
                file=self.out,
            )
            for c in m.visible_clients():
                flags = "".join(
                    flag
                    for flag, on in (
                        ("M", c.marked),
                        ("F", c.is_floating),
                        ("H", c.minimized),
                        ("*", c.onscreen),
                    )
                    if on
                )
                print(f"  {c.name:<16} {c.x},{c.y} {c.w}x{c.h} {flags}", file=self.out)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = create_parser().parse_args(argv)
    setup_logging(args.verbose)

    wm = WindowManager(WMConfig(), RecordingDisplay(), root=args.size)
    driver = Driver(wm, sys.stdout, check=args.check)
    failures = 0
    for line in sys.stdin:
        if not driver.handle(line.strip()):
            failures += 1
        if not wm.running:
            break
    wm.events.shutdown()
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
