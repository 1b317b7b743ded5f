"""
zkreview.dkim.locator
=====================

Default header-field locator: turns two caller-supplied spans into the raw
email address bytes, refusing any span that does not describe a complete
address inside the named header field.

Spans are ``(offset, length)`` pairs, both absolute offsets into the header:

    header_span   -> the whole field line, e.g. ``from:John <john@co.io>``
    address_span  -> the address inside it,  e.g. ``john@co.io``

Checks (any failure raises `FieldLocationInvalid`):
- the header span lies inside the header, starts at a line start, begins
  with ``<field_name>:`` (case-insensitive) and holds no CR/LF;
- the address span lies inside the header span after the colon, is
  non-empty and at most ``max_email_bytes`` long;
- every address byte is printable ASCII other than the address delimiters;
- the bytes just outside the address span are *not* address bytes, so a span
  cannot select a fragment of a longer address (and thereby a different
  domain).

This is not an email parser: it validates a location, it does not search.
"""

from __future__ import annotations

import logging
from typing import Tuple

from zkreview.buffers import BoundedBuffer
from zkreview.config import DEFAULT_CONFIG, CircuitConfig
from zkreview.errors import FieldLocationInvalid

log = logging.getLogger(__name__)

Span = Tuple[int, int]

# Printable ASCII minus space and the delimiters that surround an address.
_DELIMITERS = frozenset(b' <>",;:()[]\\')
_ADDRESS_BYTES = frozenset(b for b in range(0x21, 0x7F) if b not in _DELIMITERS)


def _is_address_byte(b: int) -> bool:
    return b in _ADDRESS_BYTES


def _check_span(span: Span, what: str) -> Tuple[int, int]:
    try:
        offset, length = (int(v) for v in span)
    except (TypeError, ValueError) as e:
        raise FieldLocationInvalid(f"{what} must be an (offset, length) pair") from e
    if offset < 0 or length <= 0:
        raise FieldLocationInvalid(f"{what} must have offset >= 0 and length > 0")
    return offset, length


def locate_field(
    header: BoundedBuffer,
    header_span: Span,
    address_span: Span,
    field_name: str,
    *,
    config: CircuitConfig = DEFAULT_CONFIG,
) -> BoundedBuffer:
    """Return the address selected by `address_span` as an email-capacity buffer."""
    raw = header.to_bytes()
    h_off, h_len = _check_span(header_span, "header span")
    a_off, a_len = _check_span(address_span, "address span")

    if h_off + h_len > len(raw):
        raise FieldLocationInvalid("header span runs past the end of the header")
    if h_off > 0 and raw[h_off - 1] != 0x0A:
        raise FieldLocationInvalid("header span does not start at a line start")

    line = raw[h_off : h_off + h_len]
    prefix = field_name.lower().encode("ascii") + b":"
    if line[: len(prefix)].lower() != prefix:
        log.debug("header span does not name field %r", field_name)
        raise FieldLocationInvalid(f"header span is not a '{field_name}' field")
    if b"\r" in line or b"\n" in line:
        raise FieldLocationInvalid("header span crosses a line break")

    value_start = h_off + len(prefix)
    if a_off < value_start or a_off + a_len > h_off + h_len:
        raise FieldLocationInvalid("address span is not inside the field value")
    if a_len > config.max_email_bytes:
        raise FieldLocationInvalid(
            f"address span length {a_len} exceeds {config.max_email_bytes}"
        )

    address = raw[a_off : a_off + a_len]
    if not all(_is_address_byte(b) for b in address):
        raise FieldLocationInvalid("address span holds non-address bytes")
    before = raw[a_off - 1] if a_off > 0 else None
    after = raw[a_off + a_len] if a_off + a_len < len(raw) else None
    if (before is not None and _is_address_byte(before)) or (
        after is not None and _is_address_byte(after)
    ):
        raise FieldLocationInvalid("address span selects part of a longer token")

    return BoundedBuffer.from_bytes(address, config.max_email_bytes)


__all__ = ["Span", "locate_field"]
