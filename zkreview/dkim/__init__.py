"""
zkreview.dkim
=============

Default implementations of the two external checks the assembler relies on:
DKIM ``rsa-sha256`` signature verification and header-field location, plus
the signing-key descriptor they share.
"""

from __future__ import annotations

from .keys import SigningKey, commit_signing_key, parse_dkim_tags, reduction_parameter
from .locator import Span, locate_field
from .rsa import verify_signature

__all__ = [
    "SigningKey",
    "commit_signing_key",
    "parse_dkim_tags",
    "reduction_parameter",
    "Span",
    "locate_field",
    "verify_signature",
]
