from __future__ import annotations

import json

import pytest

from zkreview.hashing.poseidon import (
    FIELD_MODULUS,
    PoseidonParams,
    get_params,
    load_params_json,
    poseidon_hash,
    poseidon_hash_fixed,
    poseidon_large,
    poseidon_permute,
    register_params,
)


def test_modulus_is_bn254_fr():
    assert FIELD_MODULUS == 21888242871839275222246405745257275088548364400416034343698204186575808495617


def test_hash_deterministic_and_sensitive():
    h = poseidon_hash([1, 2])
    assert h == poseidon_hash([1, 2])
    assert h != poseidon_hash([1, 3])
    assert h != poseidon_hash([2, 1])
    assert 0 <= h < FIELD_MODULUS


def test_trailing_zero_adds_a_chunk():
    # [1, 2] and [1, 2, 0] absorb different numbers of chunks (rate=2).
    assert poseidon_hash([1, 2]) != poseidon_hash([1, 2, 0])


def test_inputs_reduced_mod_field():
    assert poseidon_hash([5]) == poseidon_hash([5 + FIELD_MODULUS])


def test_fixed_width_guard():
    assert poseidon_hash_fixed([1, 2, 3], width=3) == poseidon_hash([1, 2, 3])
    with pytest.raises(ValueError):
        poseidon_hash_fixed([1, 2], width=3)


def test_permute_checks_width():
    with pytest.raises(ValueError):
        poseidon_permute([1, 2], get_params())


def test_poseidon_large_packs_pairs():
    bits = 121
    limbs = [3, 5, 7]
    expected = poseidon_hash([3 + (5 << bits), 7])
    assert poseidon_large(limbs, limb_bits=bits) == expected


def test_poseidon_large_rejects_wide_limbs():
    with pytest.raises(ValueError):
        poseidon_large([1, 2], limb_bits=127)


def test_unknown_params():
    with pytest.raises(KeyError):
        get_params("does-not-exist")
    with pytest.raises(KeyError):
        poseidon_hash([1], params_name="does-not-exist")


def test_params_validation():
    p = get_params()
    with pytest.raises(ValueError):
        PoseidonParams(t=p.t, R_F=7, R_P=p.R_P, alpha=5, mds=p.mds, rc=p.rc).validate()
    with pytest.raises(ValueError):
        PoseidonParams(t=p.t, R_F=p.R_F, R_P=p.R_P, alpha=4, mds=p.mds, rc=p.rc).validate()
    with pytest.raises(ValueError):
        PoseidonParams(t=p.t, R_F=p.R_F, R_P=p.R_P, alpha=5, mds=p.mds[:2], rc=p.rc).validate()
    with pytest.raises(ValueError):
        register_params("", p)


def test_load_params_json_roundtrip(tmp_path):
    p = get_params()
    raw = {
        "field": "bn254:fr",
        "alpha": p.alpha,
        "t": p.t,
        "R_F": p.R_F,
        "R_P": p.R_P,
        "mds": [[str(v) for v in row] for row in p.mds],
        "rc": [[hex(v) for v in row] for row in p.rc],
    }
    path = tmp_path / "review_t3.json"
    path.write_text(json.dumps(raw), encoding="utf-8")

    loaded = load_params_json(str(path))
    assert loaded == p
    assert get_params("review_t3") == p
    assert poseidon_hash([1, 2], params_name="review_t3") == poseidon_hash([1, 2])
