"""
Domain extraction: the suffix of an address starting at the first separator.

The scan always walks the full declared capacity of the address buffer. Real
content is gated by ``i < len(address)`` rather than by stopping early, so the
number of steps never depends on how long the address actually is.
"""

from __future__ import annotations

from zkreview.buffers import BoundedBuffer
from zkreview.config import DEFAULT_CONFIG, CircuitConfig


def extract_domain(address: BoundedBuffer, *, config: CircuitConfig = DEFAULT_CONFIG) -> BoundedBuffer:
    """
    Return ``@domain`` (separator included) as a buffer of capacity
    ``max_domain_bytes``. No separator gives an empty buffer; bytes past the
    domain capacity are dropped silently. Later separators are ordinary content.
    """
    domain = BoundedBuffer(config.max_domain_bytes)
    length = len(address)
    found = False
    for i in range(address.capacity):
        live = i < length
        byte = address.get(i)
        found = found or (live and byte == config.separator)
        if found and live:
            domain.append(byte)
    return domain


__all__ = ["extract_domain"]
