"""
zkreview — anonymous, employer-verified workplace reviews.

Derives, from a DKIM-signed email header, the values a review needs to be
published without its author:

    domain commitment   groups reviews by employer domain
    nullifier           lets a registry spot a second review from the same email
    key commitment      names the DKIM key the header was checked against

plus a masked copy of the address that shows only ``@domain``.

Packages:
    zkreview.buffers      fixed-capacity buffers
    zkreview.circuit      domain extraction, reveal mask, commitments
    zkreview.hashing      Poseidon over BN254 and limb encoding
    zkreview.dkim         signature verification, field location, keys
    zkreview.integration  the submission assembler and its records
"""

from __future__ import annotations

__version__ = "0.1.0"

from zkreview.config import DEFAULT_CONFIG, CircuitConfig, load_config
from zkreview.errors import (
    CapacityViolation,
    ConfigError,
    ErrorKind,
    FieldLocationInvalid,
    ReviewError,
    SignatureInvalid,
)

__all__ = [
    "__version__",
    "CircuitConfig",
    "DEFAULT_CONFIG",
    "load_config",
    "ErrorKind",
    "ReviewError",
    "SignatureInvalid",
    "FieldLocationInvalid",
    "CapacityViolation",
    "ConfigError",
]
