"""
Big-integer <-> limb vector conversions.

RSA values (2048-bit moduli and signatures) do not fit in one BN254 field
element, so they travel as ``k`` little-endian limbs of ``n`` bits each
(limb 0 holds the least significant bits).
"""

from __future__ import annotations

from typing import List, Sequence


def int_to_limbs(x: int, *, limb_bits: int, limb_count: int) -> List[int]:
    """Split a non-negative int into exactly `limb_count` limbs; raises if it does not fit."""
    if x < 0:
        raise ValueError("cannot split a negative integer into limbs")
    if x.bit_length() > limb_bits * limb_count:
        raise ValueError(
            f"{x.bit_length()}-bit value does not fit in {limb_count} x {limb_bits}-bit limbs"
        )
    mask = (1 << limb_bits) - 1
    return [(x >> (limb_bits * i)) & mask for i in range(limb_count)]


def limbs_to_int(limbs: Sequence[int], *, limb_bits: int) -> int:
    acc = 0
    for i, limb in enumerate(limbs):
        acc |= int(limb) << (limb_bits * i)
    return acc


def limbs_in_range(limbs: Sequence[int], *, limb_bits: int) -> bool:
    bound = 1 << limb_bits
    return all(isinstance(v, int) and 0 <= v < bound for v in limbs)


def bytes_to_int(b: bytes) -> int:
    return int.from_bytes(b, "big")


def int_to_bytes(x: int, length: int) -> bytes:
    return x.to_bytes(length, "big")


__all__ = ["int_to_limbs", "limbs_to_int", "limbs_in_range", "bytes_to_int", "int_to_bytes"]
