"""
zkreview.hashing.poseidon
=========================

Poseidon hash over the BN254 (altbn128) scalar field Fr: the one-way hash
behind domain commitments, nullifiers and signing-key commitments.

Parameters are kept external so commitments match *exactly* the circuit that
will check them. Register the circuit's parameter set at startup, either
programmatically or from a JSON file holding the MDS matrix and round
constants; a deterministic placeholder set named ``bn254_t3`` is registered at
import so the pipeline runs out of the box.

Public API
----------
- PoseidonParams(t, R_F, R_P, alpha, mds, rc)
- register_params(name, params)
- load_params_json(path, name=None)
- get_params(name="bn254_t3")
- poseidon_permute(state, params)
- poseidon_hash(inputs, *, params_name="bn254_t3")         # sponge (capacity=1)
- poseidon_hash_fixed(inputs, *, width, params_name=...)   # fixed-width vectors
- poseidon_large(limbs, *, limb_bits, params_name=...)     # pairs limbs first

JSON schema
-----------
{
  "field": "bn254:fr",
  "alpha": 5,
  "t": 3,
  "R_F": 8,
  "R_P": 57,
  "mds": [[...t ints...], ...],
  "rc":  [[...t ints...], ... R_F+R_P rows ...]
}

Integers may be decimal strings, 0x-hex strings, or JSON numbers (mod Fr).

Notes
-----
- The sponge has a capacity of one word (rate t-1). Inputs are absorbed in
  chunks of ``t-1`` with a permutation after each chunk, then one final
  permutation; ``state[0]`` is the output.
- The number of permutations depends only on the input *count*, never on the
  input values.
"""

from __future__ import annotations

import hashlib
import json
import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Union

from py_ecc.bn128 import curve_order

# ---------------------------
# Field arithmetic (mod Fr)
# ---------------------------

FIELD_MODULUS: int = int(curve_order)
_MOD = FIELD_MODULUS


def _fadd(a: int, b: int) -> int:
    return (a + b) % _MOD


def _fmul(a: int, b: int) -> int:
    return (a * b) % _MOD


def _fexp(a: int, e: int) -> int:
    return pow(a % _MOD, e, _MOD)


def _fpow_alpha(x: int, alpha: int) -> int:
    if alpha == 5:
        x2 = _fmul(x, x)
        x4 = _fmul(x2, x2)
        return _fmul(x, x4)
    return _fexp(x, alpha)


# ---------------------------
# Parameters & registry
# ---------------------------


@dataclass(frozen=True)
class PoseidonParams:
    t: int  # state width
    R_F: int  # number of full rounds
    R_P: int  # number of partial rounds
    alpha: int  # S-box exponent (odd >= 3, commonly 5)
    mds: List[List[int]]  # MDS matrix, shape t x t
    rc: List[List[int]]  # round constants, shape (R_F + R_P) x t

    def validate(self) -> None:
        if self.t < 2:
            raise ValueError("t must be >= 2")
        if self.R_F % 2 != 0:
            raise ValueError("R_F must be even (split half-before/after partial rounds)")
        if self.alpha < 3 or self.alpha % 2 == 0:
            raise ValueError("alpha must be an odd integer >= 3")
        if len(self.mds) != self.t or any(len(row) != self.t for row in self.mds):
            raise ValueError("mds must be t x t")
        expected_rounds = self.R_F + self.R_P
        if len(self.rc) != expected_rounds or any(len(row) != self.t for row in self.rc):
            raise ValueError(f"rc must be (R_F+R_P) x t = {expected_rounds} x {self.t}")


_PARAMS_REGISTRY: Dict[str, PoseidonParams] = {}


def register_params(name: str, params: PoseidonParams) -> None:
    """
    Register a Poseidon parameter set under `name`.

    Call this at process startup with the exact params your circuit uses.
    """
    if not name or not isinstance(name, str):
        raise ValueError("name must be a non-empty string")
    params.validate()
    _PARAMS_REGISTRY[name] = params


def get_params(name: str = "bn254_t3") -> PoseidonParams:
    if name not in _PARAMS_REGISTRY:
        raise KeyError(
            f"Poseidon params '{name}' are not registered. "
            "Load them with load_params_json(...) or register_params(...)."
        )
    return _PARAMS_REGISTRY[name]


def _to_int(x: Union[int, str]) -> int:
    if isinstance(x, int):
        return x % _MOD
    s = str(x).strip().lower()
    if s.startswith("0x"):
        return int(s, 16) % _MOD
    return int(s) % _MOD


def load_params_json(path: str, name: Optional[str] = None) -> PoseidonParams:
    """
    Load a Poseidon params JSON file and register it.

    If `name` is None, the filename without extension is used.
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    params = PoseidonParams(
        t=int(raw["t"]),
        R_F=int(raw["R_F"]),
        R_P=int(raw["R_P"]),
        alpha=int(raw.get("alpha", 5)),
        mds=[[_to_int(v) for v in row] for row in raw["mds"]],
        rc=[[_to_int(v) for v in row] for row in raw["rc"]],
    )
    register_params(name or os.path.splitext(os.path.basename(path))[0], params)
    return params


# ---------------------------
# Permutation
# ---------------------------


def _apply_mds(state: List[int], mds: List[List[int]]) -> List[int]:
    t = len(state)
    out = [0] * t
    for i in range(t):
        acc = 0
        row = mds[i]
        for j in range(t):
            acc = _fadd(acc, _fmul(row[j], state[j]))
        out[i] = acc
    return out


def _round(x: List[int], rc_row: List[int], params: PoseidonParams, full: bool) -> List[int]:
    x = [_fadd(v, c) for v, c in zip(x, rc_row)]
    if full:
        x = [_fpow_alpha(v, params.alpha) for v in x]
    else:
        x[0] = _fpow_alpha(x[0], params.alpha)
    return _apply_mds(x, params.mds)


def poseidon_permute(state: Sequence[int], params: PoseidonParams) -> List[int]:
    """
    Round schedule: R_F/2 full rounds, R_P partial rounds (S-box on the first
    element only), R_F/2 full rounds. Returns a new list.
    """
    if len(state) != params.t:
        raise ValueError(f"state length {len(state)} != t={params.t}")

    x = [int(v) % _MOD for v in state]
    half = params.R_F // 2
    r = 0
    for _ in range(half):
        x = _round(x, params.rc[r], params, full=True)
        r += 1
    for _ in range(params.R_P):
        x = _round(x, params.rc[r], params, full=False)
        r += 1
    for _ in range(half):
        x = _round(x, params.rc[r], params, full=True)
        r += 1
    return x


# ---------------------------
# Sponge / Hash interface
# ---------------------------


def poseidon_hash(inputs: Sequence[int], *, params_name: str = "bn254_t3") -> int:
    """Poseidon sponge with capacity=1 (rate=t-1), returning the first state element."""
    params = get_params(params_name)
    rate = params.t - 1

    state = [0] * params.t
    n = len(inputs)
    for start in range(0, n, rate):
        for i, v in enumerate(inputs[start : start + rate]):
            state[i] = _fadd(state[i], int(v) % _MOD)
        state = poseidon_permute(state, params)

    # final permutation before squeeze
    state = poseidon_permute(state, params)
    return int(state[0])


def poseidon_hash_fixed(
    inputs: Sequence[int], *, width: int, params_name: str = "bn254_t3"
) -> int:
    """
    Hash a vector that must be exactly `width` elements long.

    Commitments are defined over fixed-size vectors; accepting a shorter or
    longer one would silently change what is being committed to.
    """
    if len(inputs) != width:
        raise ValueError(f"expected {width} inputs, got {len(inputs)}")
    return poseidon_hash(inputs, params_name=params_name)


def poseidon_large(
    limbs: Sequence[int], *, limb_bits: int, params_name: str = "bn254_t3"
) -> int:
    """
    Hash a big integer given as little-endian limbs by first packing each
    consecutive pair into one element ``lo + hi << limb_bits`` (an odd trailing
    limb is packed alone), halving the number of inputs.
    """
    if 2 * limb_bits >= FIELD_MODULUS.bit_length():
        raise ValueError(f"limb_bits={limb_bits} too wide to pack two limbs into Fr")
    packed: List[int] = []
    for i in range(0, len(limbs), 2):
        lo = int(limbs[i])
        hi = int(limbs[i + 1]) if i + 1 < len(limbs) else 0
        packed.append(lo + (hi << limb_bits))
    return poseidon_hash(packed, params_name=params_name)


# ---------------------------
# Built-in placeholder parameters (NOT real circuit params)
# ---------------------------
# Lets the pipeline run without external files. Replace in real deployments
# with `load_params_json("path/to/circuit_params.json", name="bn254_t3")`.


def _derive_placeholder_params(name: str = "bn254_t3") -> None:
    t = 3
    R_F = 8
    R_P = 57
    alpha = 5

    # Vandermonde-like MDS over Fr with small distinct bases.
    bases = [2, 3, 5]
    mds = [[_fexp(bases[j], i + 1) for j in range(t)] for i in range(t)]

    rc: List[List[int]] = []
    for r in range(R_F + R_P):
        row = []
        for i in range(t):
            h = hashlib.sha3_256(f"poseidon/placeholder/bn254/t={t}/r={r}/i={i}".encode()).digest()
            row.append(int.from_bytes(h, "big") % _MOD)
        rc.append(row)

    register_params(name, PoseidonParams(t=t, R_F=R_F, R_P=R_P, alpha=alpha, mds=mds, rc=rc))


_derive_placeholder_params("bn254_t3")


__all__ = [
    "FIELD_MODULUS",
    "PoseidonParams",
    "register_params",
    "get_params",
    "load_params_json",
    "poseidon_permute",
    "poseidon_hash",
    "poseidon_hash_fixed",
    "poseidon_large",
]
