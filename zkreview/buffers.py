"""
zkreview.buffers
================

Fixed-capacity ordered container used by every stage of the pipeline.

A `BoundedBuffer` owns exactly ``capacity`` slots allocated up front and an
explicit ``length``. It never grows: appending to a full buffer is a silent
no-op, which is the pipeline's truncation policy. Reads past ``length`` return
zero, so a buffer can always be fed to a hash as a fixed-width, zero-padded
vector.

    >>> b = BoundedBuffer.from_bytes(b"alice@co.io", 8)
    >>> b.to_bytes(), len(b), b.capacity
    (b'alice@co', 8, 8)
    >>> b.padded()[:3], b.get(100)
    ([97, 108, 105], 0)
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional


class BoundedBuffer:
    """Fixed-size slots + explicit length + saturating append."""

    __slots__ = ("_slots", "_length", "_max_value")

    def __init__(self, capacity: int, *, max_value: Optional[int] = 0xFF) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._slots: List[int] = [0] * int(capacity)
        self._length = 0
        self._max_value = max_value

    # --- Constructors -----------------------------------------------------

    @classmethod
    def from_bytes(cls, data: bytes, capacity: int) -> "BoundedBuffer":
        """Fill a fresh byte buffer from `data`, dropping whatever does not fit."""
        buf = cls(capacity)
        buf.extend(data)
        return buf

    @classmethod
    def from_values(
        cls, values: Iterable[int], capacity: int, *, max_value: Optional[int] = None
    ) -> "BoundedBuffer":
        buf = cls(capacity, max_value=max_value)
        buf.extend(values)
        return buf

    # --- Mutation ---------------------------------------------------------

    def append(self, value: int) -> None:
        """Store `value` at position ``length`` if there is room; otherwise do nothing."""
        v = int(value)
        if v < 0 or (self._max_value is not None and v > self._max_value):
            raise ValueError(f"element {v} outside 0..{self._max_value}")
        if self._length < len(self._slots):
            self._slots[self._length] = v
            self._length += 1

    def extend(self, values: Iterable[int]) -> None:
        for v in values:
            self.append(v)

    # --- Access -----------------------------------------------------------

    @property
    def capacity(self) -> int:
        return len(self._slots)

    def get(self, i: int) -> int:
        """Element at `i` for ``0 <= i < length``; 0 everywhere else."""
        if 0 <= i < self._length:
            return self._slots[i]
        return 0

    def padded(self) -> List[int]:
        """All ``capacity`` slots, zero past ``length``."""
        return [self.get(i) for i in range(self.capacity)]

    def to_bytes(self) -> bytes:
        return bytes(self._slots[: self._length])

    def copy(self) -> "BoundedBuffer":
        other = BoundedBuffer(self.capacity, max_value=self._max_value)
        other.extend(self)
        return other

    # --- Protocols --------------------------------------------------------

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[int]:
        return iter(self._slots[: self._length])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoundedBuffer):
            return NotImplemented
        return (
            self.capacity == other.capacity
            and len(self) == len(other)
            and self.padded() == other.padded()
        )

    __hash__ = None  # type: ignore[assignment]

    # Content stays out of repr: buffers routinely hold addresses.
    def __repr__(self) -> str:
        return f"BoundedBuffer(capacity={self.capacity}, length={self._length})"


__all__ = ["BoundedBuffer"]
