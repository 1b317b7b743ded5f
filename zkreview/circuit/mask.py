"""
Selective disclosure over an address buffer.

`build_reveal_mask` marks which positions may be shown: everything from the
first separator up to the address's real length. It runs its own pass rather
than reusing the extracted domain, and it covers the whole address capacity,
so it can reveal bytes that the (shorter) domain buffer dropped.

Known leak: the mask reveals where the separator sits, which discloses the
length of the local part even though its bytes are hidden.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from zkreview.buffers import BoundedBuffer
from zkreview.config import DEFAULT_CONFIG, CircuitConfig

RevealMask = Tuple[bool, ...]


def build_reveal_mask(address: BoundedBuffer, *, config: CircuitConfig = DEFAULT_CONFIG) -> RevealMask:
    """One flag per address slot; padding past the real length is never revealed."""
    length = len(address)
    found = False
    mask: List[bool] = []
    for i in range(address.capacity):
        live = i < length
        found = found or (live and address.get(i) == config.separator)
        mask.append(found and live)
    return tuple(mask)


def apply_mask(
    buffer: BoundedBuffer, mask: Sequence[bool], *, placeholder: int = DEFAULT_CONFIG.placeholder
) -> BoundedBuffer:
    """
    Copy `buffer`, replacing every hidden live position with `placeholder`.

    Capacity and length are preserved; slots past the length stay zero.
    """
    if len(mask) != buffer.capacity:
        raise ValueError(f"mask has {len(mask)} entries for a buffer of capacity {buffer.capacity}")
    out = BoundedBuffer(buffer.capacity)
    length = len(buffer)
    for i in range(buffer.capacity):
        if i < length:
            out.append(buffer.get(i) if mask[i] else placeholder)
    return out


def reveal_count(mask: Sequence[bool]) -> int:
    return sum(1 for m in mask if m)


__all__ = ["RevealMask", "build_reveal_mask", "apply_mask", "reveal_count"]
