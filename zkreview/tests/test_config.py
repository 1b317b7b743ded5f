from __future__ import annotations

import json

import pytest

from zkreview.config import DEFAULT_CONFIG, CircuitConfig, load_config
from zkreview.errors import ConfigError


def test_defaults_match_circuit():
    c = DEFAULT_CONFIG
    assert (c.max_header_bytes, c.max_email_bytes, c.max_domain_bytes, c.max_review_bytes) == (
        1024,
        64,
        32,
        1024,
    )
    assert (c.limb_bits, c.limb_count) == (121, 17)
    assert c.separator == ord("@")
    assert c.modulus_bits == 2057


def test_dict_roundtrip():
    assert CircuitConfig.from_mapping(DEFAULT_CONFIG.to_dict()) == DEFAULT_CONFIG


def test_from_mapping_coerces_and_rejects_unknown():
    c = CircuitConfig.from_mapping({"placeholder": "0x2a", "max_domain_bytes": "16"})
    assert c.placeholder == 0x2A
    assert c.max_domain_bytes == 16
    with pytest.raises(ConfigError):
        CircuitConfig.from_mapping({"max_email": 64})
    with pytest.raises(ConfigError):
        CircuitConfig.from_mapping({"limb_bits": "many"})


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_email_bytes": 0},
        {"max_domain_bytes": 128},
        {"limb_bits": 127},
        {"separator": 300},
        {"placeholder": -1},
        {"field_name": "from:"},
        {"hash_params": ""},
    ],
)
def test_invalid_values(kwargs):
    with pytest.raises(ConfigError):
        CircuitConfig(**kwargs)


def test_load_json(tmp_path):
    p = tmp_path / "cfg.json"
    p.write_text(json.dumps({"placeholder": 42}), encoding="utf-8")
    assert load_config(p).placeholder == 42


def test_load_yaml(tmp_path):
    p = tmp_path / "cfg.yaml"
    p.write_text("max_review_bytes: 512\nfield_name: sender\n", encoding="utf-8")
    c = load_config(p)
    assert c.max_review_bytes == 512
    assert c.field_name == "sender"
    assert c.max_email_bytes == DEFAULT_CONFIG.max_email_bytes


def test_load_missing_or_none_falls_back(tmp_path):
    assert load_config(None) is DEFAULT_CONFIG
    assert load_config(tmp_path / "absent.yaml") is DEFAULT_CONFIG


def test_load_rejects_non_mapping(tmp_path):
    p = tmp_path / "cfg.yaml"
    p.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(p)
