"""
zkreview.dkim.keys
==================

The DKIM signing key as the pipeline sees it: an RSA modulus split into
fixed-width limbs, its public exponent, and the fixed-width reduction
parameter ``floor(2^(2*n*k) / modulus)`` that the circuit uses for modular
reduction.

Keys can be built from raw numbers, a PEM ``SubjectPublicKeyInfo``, or the
``p=`` tag of a DKIM DNS TXT record. Key distribution and revocation are not
handled here; whoever constructs the key vouches for it.

`commit_signing_key` is the hash-over-structured-key primitive: limbs are
packed pairwise and hashed with Poseidon, giving a public scalar that names
the key without revealing which email was used.
"""

from __future__ import annotations

import base64
import re
from typing import Dict, Tuple

import msgspec
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.serialization import load_der_public_key, load_pem_public_key

from zkreview.config import DEFAULT_CONFIG, CircuitConfig
from zkreview.hashing.limbs import int_to_limbs, limbs_to_int
from zkreview.hashing.poseidon import poseidon_large

DEFAULT_EXPONENT = 65537


def reduction_parameter(modulus: int, *, config: CircuitConfig = DEFAULT_CONFIG) -> int:
    if modulus <= 0:
        raise ValueError("modulus must be positive")
    return (1 << (2 * config.limb_bits * config.limb_count)) // modulus


class SigningKey(msgspec.Struct, frozen=True):
    """
    Fields:
        modulus: little-endian limbs of the RSA modulus.
        exponent: public exponent (65537 for every DKIM key seen in practice).
        reduction: Barrett reduction parameter matching `modulus`.
        selector / domain: optional DKIM provenance, informational only.
    """

    modulus: Tuple[int, ...]
    exponent: int = DEFAULT_EXPONENT
    reduction: int = 0
    selector: str = ""
    domain: str = ""

    # --- Constructors -----------------------------------------------------

    @staticmethod
    def from_public_numbers(
        n: int,
        e: int = DEFAULT_EXPONENT,
        *,
        config: CircuitConfig = DEFAULT_CONFIG,
        selector: str = "",
        domain: str = "",
    ) -> "SigningKey":
        limbs = int_to_limbs(n, limb_bits=config.limb_bits, limb_count=config.limb_count)
        return SigningKey(
            modulus=tuple(limbs),
            exponent=e,
            reduction=reduction_parameter(n, config=config),
            selector=selector,
            domain=domain,
        )

    @staticmethod
    def from_rsa_key(
        key: rsa.RSAPublicKey, *, config: CircuitConfig = DEFAULT_CONFIG, **meta: str
    ) -> "SigningKey":
        nums = key.public_numbers()
        return SigningKey.from_public_numbers(nums.n, nums.e, config=config, **meta)

    @staticmethod
    def from_pem(pem: bytes, *, config: CircuitConfig = DEFAULT_CONFIG, **meta: str) -> "SigningKey":
        key = load_pem_public_key(pem)
        if not isinstance(key, rsa.RSAPublicKey):
            raise ValueError("PEM does not hold an RSA public key")
        return SigningKey.from_rsa_key(key, config=config, **meta)

    @staticmethod
    def from_dkim_record(
        record: str, *, config: CircuitConfig = DEFAULT_CONFIG, selector: str = "", domain: str = ""
    ) -> "SigningKey":
        """Parse a DKIM TXT record such as ``v=DKIM1; k=rsa; p=MIIBIjAN...``."""
        tags = parse_dkim_tags(record)
        if tags.get("k", "rsa").lower() != "rsa":
            raise ValueError(f"unsupported DKIM key type k={tags['k']!r}")
        p = tags.get("p", "")
        if not p:
            raise ValueError("DKIM record has an empty or missing p= tag (revoked key?)")
        key = load_der_public_key(base64.b64decode(p))
        if not isinstance(key, rsa.RSAPublicKey):
            raise ValueError("DKIM p= tag does not hold an RSA public key")
        return SigningKey.from_rsa_key(key, config=config, selector=selector, domain=domain)

    # --- Views ------------------------------------------------------------

    def modulus_int(self, *, config: CircuitConfig = DEFAULT_CONFIG) -> int:
        return limbs_to_int(self.modulus, limb_bits=config.limb_bits)

    def public_key(self, *, config: CircuitConfig = DEFAULT_CONFIG) -> rsa.RSAPublicKey:
        return rsa.RSAPublicNumbers(self.exponent, self.modulus_int(config=config)).public_key()

    def reduction_matches(self, *, config: CircuitConfig = DEFAULT_CONFIG) -> bool:
        n = self.modulus_int(config=config)
        return n > 0 and self.reduction == reduction_parameter(n, config=config)

    def to_dict(self) -> Dict[str, object]:
        """Field elements as decimal strings, the snarkjs input convention."""
        return {
            "modulus": [str(v) for v in self.modulus],
            "exponent": self.exponent,
            "reduction": str(self.reduction),
            "selector": self.selector,
            "domain": self.domain,
        }


_TAG_RE = re.compile(r"\s*([A-Za-z][A-Za-z0-9_]*)\s*=\s*(.*?)\s*$", re.S)


def parse_dkim_tags(record: str) -> Dict[str, str]:
    """Split a ``tag=value; tag=value`` list; whitespace inside values is dropped."""
    tags: Dict[str, str] = {}
    for part in record.split(";"):
        if not part.strip():
            continue
        m = _TAG_RE.match(part)
        if not m:
            raise ValueError(f"malformed DKIM tag: {part.strip()!r}")
        tags[m.group(1).lower()] = re.sub(r"\s+", "", m.group(2))
    return tags


def commit_signing_key(key: SigningKey, *, config: CircuitConfig = DEFAULT_CONFIG) -> int:
    return poseidon_large(key.modulus, limb_bits=config.limb_bits, params_name=config.hash_params)


__all__ = [
    "DEFAULT_EXPONENT",
    "SigningKey",
    "reduction_parameter",
    "parse_dkim_tags",
    "commit_signing_key",
]
