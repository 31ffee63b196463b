"""
Tag Set

Tags are named workspaces addressed through an integer bitmask. A client may
carry several tag bits and a monitor views every client whose tags intersect
its current tagset.
"""

from __future__ import annotations
from typing import Iterator, List, Optional, Sequence

MAX_TAGS = 31


class TagSet:
    """Fixed vocabulary of up to 31 tag names and bit helpers over it."""

    def __init__(self, names: Sequence[str]):
        if not names:
            raise ValueError("At least one tag is required")
        if len(names) > MAX_TAGS:
            raise ValueError(f"At most {MAX_TAGS} tags fit into a tag mask, got {len(names)}")
        self.names: List[str] = list(names)

    def __len__(self) -> int:
        return len(self.names)

    @property
    def mask(self) -> int:
        """Mask with every valid tag bit set."""
        return (1 << len(self.names)) - 1

    def clip(self, mask: int) -> int:
        """Drop bits outside the configured tags."""
        return mask & self.mask

    def is_all(self, mask: int) -> bool:
        return self.clip(mask) == self.mask

    def bit(self, index: int) -> int:
        return 1 << index

    def contains(self, mask: int, index: int) -> bool:
        return bool(mask & (1 << index))

    def bits(self, mask: int) -> Iterator[int]:
        """Yield the indices of set tag bits, lowest first."""
        for i in range(len(self.names)):
            if mask & (1 << i):
                yield i

    def lowest_index(self, mask: int) -> Optional[int]:
        """Index of the lowest set bit, or None for an empty mask."""
        return next(self.bits(mask), None)

    def cycle(self, start: int, delta: int, occupied: int) -> Optional[int]:
        """Walk cyclically from ``start`` in steps of ``delta`` until an occupied tag.

        Returns None if no occupied tag lies on the walk.
        """
        if not self.clip(occupied):
            return None
        n = len(self.names)
        index = start
        for _ in range(n):
            index = (index + delta) % n
            if occupied & (1 << index):
                return index
        return None

    def name(self, index: int) -> str:
        return self.names[index]
