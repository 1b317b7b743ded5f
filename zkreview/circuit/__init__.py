"""
zkreview.circuit
================

The privacy transforms applied to a verified address. Every function here is
total: it terminates in a number of steps fixed by buffer capacities and
never raises because of the content it is given.
"""

from __future__ import annotations

from .commitment import commit_domain, derive_nullifier, domain_field_elements
from .domain import extract_domain
from .mask import RevealMask, apply_mask, build_reveal_mask, reveal_count

__all__ = [
    "extract_domain",
    "RevealMask",
    "build_reveal_mask",
    "apply_mask",
    "reveal_count",
    "domain_field_elements",
    "commit_domain",
    "derive_nullifier",
]
