"""
zkreview.dkim.rsa
=================

Default signature verifier: RSASSA-PKCS1-v1_5 with SHA-256 over the live
bytes of the (canonicalized, DKIM-signed) header, the check a DKIM
``rsa-sha256`` signature needs.

The signature arrives as the same fixed-width limb vector that feeds the
nullifier, so what is verified and what is hashed are the same value.

Contract
--------
    verify_signature(header, key, signature, *, config) -> None

Returns on success, raises `SignatureInvalid` otherwise. Any replacement
verifier handed to the assembler must follow the same contract.
"""

from __future__ import annotations

import logging
from typing import Sequence

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding

from zkreview.buffers import BoundedBuffer
from zkreview.config import DEFAULT_CONFIG, CircuitConfig
from zkreview.dkim.keys import SigningKey
from zkreview.errors import SignatureInvalid
from zkreview.hashing.limbs import int_to_bytes, limbs_in_range, limbs_to_int

log = logging.getLogger(__name__)


def verify_signature(
    header: BoundedBuffer,
    key: SigningKey,
    signature: Sequence[int],
    *,
    config: CircuitConfig = DEFAULT_CONFIG,
) -> None:
    if len(signature) != config.limb_count or not limbs_in_range(signature, limb_bits=config.limb_bits):
        raise SignatureInvalid("signature is not a well-formed limb vector")
    if len(key.modulus) != config.limb_count or not limbs_in_range(key.modulus, limb_bits=config.limb_bits):
        raise SignatureInvalid("signing key is not a well-formed limb vector")
    if not key.reduction_matches(config=config):
        raise SignatureInvalid("signing key reduction parameter does not match its modulus")

    n = key.modulus_int(config=config)
    s = limbs_to_int(signature, limb_bits=config.limb_bits)
    if s >= n:
        raise SignatureInvalid("signature is not reduced modulo the key")

    try:
        public_key = key.public_key(config=config)
    except ValueError as e:
        raise SignatureInvalid(f"unusable RSA public key: {e}") from e

    k = (n.bit_length() + 7) // 8
    try:
        public_key.verify(int_to_bytes(s, k), header.to_bytes(), padding.PKCS1v15(), hashes.SHA256())
    except InvalidSignature as e:
        log.debug("rsa-sha256 header signature rejected (header_len=%d)", len(header))
        raise SignatureInvalid("header signature does not verify under the signing key") from e


__all__ = ["verify_signature"]
