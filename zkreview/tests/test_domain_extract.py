"""
Domain extraction: suffix from the first '@', separator included.
"""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from zkreview.buffers import BoundedBuffer
from zkreview.circuit.domain import extract_domain
from zkreview.config import DEFAULT_CONFIG

EMAIL_CAP = DEFAULT_CONFIG.max_email_bytes
DOMAIN_CAP = DEFAULT_CONFIG.max_domain_bytes


def _addr(s: bytes) -> BoundedBuffer:
    return BoundedBuffer.from_bytes(s, EMAIL_CAP)


def test_simple_address():
    d = extract_domain(_addr(b"alice@co.io"))
    assert d.to_bytes() == b"@co.io"
    assert d.capacity == DOMAIN_CAP


def test_no_separator_gives_empty_domain():
    d = extract_domain(_addr(b"alice.co.io"))
    assert len(d) == 0
    assert d.padded() == [0] * DOMAIN_CAP


def test_empty_address():
    assert len(extract_domain(_addr(b""))) == 0


def test_later_separators_are_content():
    assert extract_domain(_addr(b"a@b@c.io")).to_bytes() == b"@b@c.io"


def test_leading_separator():
    assert extract_domain(_addr(b"@co.io")).to_bytes() == b"@co.io"


def test_domain_truncates_at_capacity():
    long_domain = b"@" + b"x" * 50 + b".com"
    d = extract_domain(_addr(b"bob" + long_domain))
    assert len(d) == DOMAIN_CAP
    assert d.to_bytes() == long_domain[:DOMAIN_CAP]


def test_padding_past_length_is_ignored():
    # Zero padding in the address buffer never reads as content.
    addr = _addr(b"alice")
    assert len(extract_domain(addr)) == 0


_no_at = st.binary(max_size=EMAIL_CAP).map(lambda b: b.replace(b"@", b""))


@given(_no_at)
def test_property_no_separator_means_empty(raw):
    assert len(extract_domain(_addr(raw))) == 0


@given(st.binary(max_size=EMAIL_CAP))
def test_property_suffix_from_first_separator(raw):
    d = extract_domain(_addr(raw)).to_bytes()
    if b"@" in raw:
        assert d == raw[raw.index(b"@") :][:DOMAIN_CAP]
    else:
        assert d == b""


@given(st.binary(max_size=EMAIL_CAP))
def test_property_deterministic(raw):
    assert extract_domain(_addr(raw)) == extract_domain(_addr(raw))
