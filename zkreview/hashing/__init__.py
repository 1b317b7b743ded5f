"""
zkreview.hashing
================

Field-friendly hashing (Poseidon over BN254 Fr) and the limb encoding used to
feed RSA-sized integers into it.
"""

from __future__ import annotations

from .limbs import int_to_limbs, limbs_in_range, limbs_to_int
from .poseidon import (
    FIELD_MODULUS,
    PoseidonParams,
    get_params,
    load_params_json,
    poseidon_hash,
    poseidon_hash_fixed,
    poseidon_large,
    register_params,
)

__all__ = [
    "FIELD_MODULUS",
    "PoseidonParams",
    "get_params",
    "load_params_json",
    "register_params",
    "poseidon_hash",
    "poseidon_hash_fixed",
    "poseidon_large",
    "int_to_limbs",
    "limbs_to_int",
    "limbs_in_range",
]
