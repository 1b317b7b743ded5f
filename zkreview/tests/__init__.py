"""
zkreview.tests helpers

Lightweight utilities shared by zkreview/* tests.

Exports:
- build_header(address, ...) -> (header_bytes, header_span, address_span)
- sign_header(private_key, header, config) -> signature limbs
- env_flag(name, default=False) -> bool
- configure_test_logging() -> None

Environment toggles:
- ZKREVIEW_TEST_LOG=1     -> enable INFO logging for zkreview.*
"""

from __future__ import annotations

import logging
import os
from typing import List, Optional, Tuple

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from zkreview.config import DEFAULT_CONFIG, CircuitConfig
from zkreview.hashing.limbs import bytes_to_int, int_to_limbs


# --- Header fixtures ----------------------------------------------------------


def build_header(
    address: str,
    *,
    display: Optional[str] = "John Doe",
    field: str = "from",
    subject: str = "Your review request",
) -> Tuple[bytes, Tuple[int, int], Tuple[int, int]]:
    """
    Build a small relaxed-canonical header block with the address in `field`.

    Returns the header bytes and the (offset, length) spans of the field line
    and of the address inside it.
    """
    value = f"{display} <{address}>" if display else address
    field_line = f"{field}:{value}".encode("ascii")
    header = (
        b"to:reviews@example.org\r\n"
        + field_line
        + b"\r\n"
        + f"subject:{subject}\r\n".encode("ascii")
        + b"date:Sat, 17 Oct 2026 09:00:00 +0000\r\n"
    )
    h_off = header.index(field_line)
    a_off = header.index(address.encode("ascii"), h_off)
    return header, (h_off, len(field_line)), (a_off, len(address))


def sign_header(
    private_key: rsa.RSAPrivateKey, header: bytes, config: CircuitConfig = DEFAULT_CONFIG
) -> List[int]:
    """rsa-sha256 over `header`, returned as little-endian limbs."""
    sig = private_key.sign(header, padding.PKCS1v15(), hashes.SHA256())
    return int_to_limbs(bytes_to_int(sig), limb_bits=config.limb_bits, limb_count=config.limb_count)


# --- Env & logging -------------------------------------------------------------


def env_flag(name: str, default: bool = False) -> bool:
    """
    Read an environment flag in a truthy/falsey way: "1", "true", "yes" -> True.
    """
    v = os.getenv(name)
    if v is None:
        return default
    return str(v).strip().lower() in {"1", "true", "yes", "on"}


def configure_test_logging(level: int | None = None) -> None:
    """
    Configure basic logging for zkreview.* loggers when ZKREVIEW_TEST_LOG is set.
    """
    if level is None:
        level = logging.INFO
    if env_flag("ZKREVIEW_TEST_LOG", False):
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        logging.getLogger("zkreview").setLevel(level)


configure_test_logging()

__all__ = [
    "build_header",
    "sign_header",
    "env_flag",
    "configure_test_logging",
]
