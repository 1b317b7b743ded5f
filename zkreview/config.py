"""
zkreview.config
===============

Fixed circuit parameters for the review pipeline.

Every size in the pipeline is a *capacity*, not a length: buffers are
allocated at these sizes and scanned in full regardless of how much real
content they hold. The values mirror the circuit the commitments are meant to
be checked against, so changing any of them changes every derived scalar.

Typical usage
-------------
    from zkreview.config import DEFAULT_CONFIG, load_config

    cfg = load_config("review_circuit.yaml")   # or DEFAULT_CONFIG
    result = process(request, config=cfg)

The config is an immutable value threaded through calls; there is no
process-wide mutable setting.

You may override defaults with a JSON/YAML file holding any subset of the
fields in `CircuitConfig.to_dict()` (see `load_config`).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from zkreview.errors import ConfigError

# BN254 Fr is a 254-bit field; two packed limbs must stay below it.
_FIELD_BITS = 254


@dataclass(frozen=True)
class CircuitConfig:
    """
    Fields:
      max_header_bytes: capacity of the signed header buffer.
      max_email_bytes:  capacity of the email address buffer (and reveal mask).
      max_domain_bytes: capacity of the extracted domain buffer.
      max_review_bytes: capacity of the review text buffer.
      limb_bits:        bit width of one RSA limb.
      limb_count:       number of limbs in a signature / modulus.
      separator:        byte that starts the domain (``@``).
      placeholder:      byte written over hidden positions by ``apply_mask``.
      field_name:       header field carrying the address.
      hash_params:      registered Poseidon parameter set name.
    """

    max_header_bytes: int = 1024
    max_email_bytes: int = 64
    max_domain_bytes: int = 32
    max_review_bytes: int = 1024
    limb_bits: int = 121
    limb_count: int = 17
    separator: int = 0x40
    placeholder: int = 0x00
    field_name: str = "from"
    hash_params: str = "bn254_t3"

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        for name in ("max_header_bytes", "max_email_bytes", "max_domain_bytes", "max_review_bytes"):
            if int(getattr(self, name)) <= 0:
                raise ConfigError(f"{name} must be positive")
        if self.max_domain_bytes > self.max_email_bytes:
            raise ConfigError("max_domain_bytes must not exceed max_email_bytes")
        if self.limb_bits <= 0 or self.limb_count <= 0:
            raise ConfigError("limb_bits and limb_count must be positive")
        if 2 * self.limb_bits >= _FIELD_BITS:
            raise ConfigError(
                f"limb_bits={self.limb_bits} too wide: two limbs must pack below {_FIELD_BITS} bits"
            )
        for name in ("separator", "placeholder"):
            v = getattr(self, name)
            if not 0 <= int(v) <= 0xFF:
                raise ConfigError(f"{name} must be a byte value, got {v!r}")
        if not self.field_name or ":" in self.field_name:
            raise ConfigError("field_name must be a non-empty header name without ':'")
        if not self.hash_params:
            raise ConfigError("hash_params must name a registered parameter set")

    @property
    def modulus_bits(self) -> int:
        """Largest RSA modulus (in bits) the limb layout can carry."""
        return self.limb_bits * self.limb_count

    # ---- helpers ----

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a plain dict for JSON/YAML."""
        return asdict(self)

    @staticmethod
    def from_mapping(m: Mapping[str, Any]) -> "CircuitConfig":
        """Create a config from a JSON/YAML-like mapping; unknown keys are rejected."""
        known = {f.name: f for f in fields(CircuitConfig)}
        unknown = sorted(set(m) - set(known))
        if unknown:
            raise ConfigError(f"unknown config keys: {', '.join(unknown)}")
        kwargs: Dict[str, Any] = {}
        for k, v in m.items():
            if known[k].type in ("str", str):
                kwargs[k] = str(v)
            else:
                try:
                    kwargs[k] = int(v, 0) if isinstance(v, str) else int(v)
                except (TypeError, ValueError) as e:
                    raise ConfigError(f"{k} must be an integer, got {v!r}") from e
        return CircuitConfig(**kwargs)


# Default singleton
DEFAULT_CONFIG = CircuitConfig()


def load_config(
    path: Optional[Union[str, Path]] = None, *, fallback: CircuitConfig = DEFAULT_CONFIG
) -> CircuitConfig:
    """
    Load a CircuitConfig from a JSON or YAML file. If `path` is None or missing,
    returns the provided `fallback` (DEFAULT_CONFIG).
    """
    if path is None:
        return fallback
    p = Path(path)
    if not p.exists():
        return fallback

    text = p.read_text(encoding="utf-8")
    if text.lstrip().startswith("{"):
        import json

        data = json.loads(text)
    else:
        import yaml

        data = yaml.safe_load(text) or {}

    if not isinstance(data, Mapping):
        raise ConfigError(f"{p}: top-level config must be a mapping")
    return CircuitConfig.from_mapping(data)


__all__ = ["CircuitConfig", "DEFAULT_CONFIG", "load_config"]
