"""
zkreview.integration.assembler
==============================

Submission assembler: one linear pass from a signed header to the public
output triple and the private review record.

Steps (all-or-nothing):

    0. capacity precheck          -> CapacityViolation
    1. verify header signature    -> SignatureInvalid
    2. locate the address field   -> FieldLocationInvalid
    3. extract domain, commit it
    4. build reveal mask, apply it to the address
    5. derive nullifier from the signature
    6. commit the signing key
    7. return PublicOutputs + ReviewSubmission

Failures come back as ``AssemblyResult.failure(error)`` with no outputs;
nothing derived before the failure escapes. `process_or_raise` is the
exception-raising variant for callers that prefer it.

The verifier, locator and key-commitment collaborators are injectable so a
deployment can swap in its own (e.g. a native RSA backend) without touching
the derivation steps.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence, Tuple

from zkreview.buffers import BoundedBuffer
from zkreview.circuit.commitment import commit_domain, derive_nullifier
from zkreview.circuit.domain import extract_domain
from zkreview.circuit.mask import apply_mask, build_reveal_mask
from zkreview.config import DEFAULT_CONFIG, CircuitConfig
from zkreview.dkim.keys import SigningKey, commit_signing_key
from zkreview.dkim.locator import locate_field
from zkreview.dkim.rsa import verify_signature
from zkreview.errors import CapacityViolation, FieldLocationInvalid, ReviewError
from zkreview.hashing.limbs import limbs_in_range
from zkreview.integration.types import (
    AssemblyResult,
    PublicOutputs,
    ReviewSubmission,
    SubmissionRequest,
)

log = logging.getLogger(__name__)

Verifier = Callable[..., None]
Locator = Callable[..., BoundedBuffer]
KeyCommitter = Callable[..., int]


def check_request(request: SubmissionRequest, *, config: CircuitConfig = DEFAULT_CONFIG) -> None:
    """
    Reject inputs whose sizes the fixed-capacity types cannot represent.

    Raises:
        CapacityViolation
        FieldLocationInvalid: a span is not a pair of integers.
    """
    if len(request.header) > config.max_header_bytes:
        raise CapacityViolation(
            f"header is {len(request.header)} bytes, max {config.max_header_bytes}",
            data={"field": "header", "max": config.max_header_bytes},
        )
    if len(request.review_text) > config.max_review_bytes:
        raise CapacityViolation(
            f"review text is {len(request.review_text)} bytes, max {config.max_review_bytes}",
            data={"field": "review_text", "max": config.max_review_bytes},
        )
    _check_limbs(request.signature, "signature", config)
    _check_limbs(request.signing_key.modulus, "signing_key", config)
    for name, span in (("header_span", request.header_span), ("address_span", request.address_span)):
        try:
            offset, length = (int(v) for v in span)
        except (TypeError, ValueError) as e:
            raise FieldLocationInvalid(f"{name} must be an (offset, length) pair of ints") from e
        if offset < 0 or length < 0:
            raise CapacityViolation(f"{name} must be a non-negative (offset, length) pair")
        if offset + length > config.max_header_bytes:
            raise CapacityViolation(f"{name} reaches past the header capacity")


def _check_limbs(limbs: Sequence[int], what: str, config: CircuitConfig) -> None:
    if len(limbs) != config.limb_count:
        raise CapacityViolation(
            f"{what} has {len(limbs)} limbs, expected {config.limb_count}",
            data={"field": what, "expected": config.limb_count},
        )
    if not limbs_in_range(limbs, limb_bits=config.limb_bits):
        raise CapacityViolation(
            f"{what} limbs must be ints in [0, 2^{config.limb_bits})",
            data={"field": what, "limb_bits": config.limb_bits},
        )


def _derive(
    address: BoundedBuffer,
    key: SigningKey,
    signature: Sequence[int],
    review_text: bytes,
    *,
    config: CircuitConfig,
    key_committer: KeyCommitter,
) -> Tuple[PublicOutputs, ReviewSubmission]:
    domain = extract_domain(address, config=config)
    domain_commitment = commit_domain(domain, config=config)

    mask = build_reveal_mask(address, config=config)
    masked_email = apply_mask(address, mask, placeholder=config.placeholder)

    nullifier = derive_nullifier(signature, config=config)
    pubkey_commitment = key_committer(key, config=config)

    outputs = PublicOutputs(
        domain_commitment=domain_commitment,
        nullifier=nullifier,
        pubkey_commitment=pubkey_commitment,
    )
    submission = ReviewSubmission(
        review_text=BoundedBuffer.from_bytes(review_text, config.max_review_bytes),
        domain_commitment=domain_commitment,
        masked_email=masked_email,
        nullifier=nullifier,
    )
    return outputs, submission


def process(
    request: SubmissionRequest,
    *,
    config: CircuitConfig = DEFAULT_CONFIG,
    verifier: Verifier = verify_signature,
    locator: Locator = locate_field,
    key_committer: KeyCommitter = commit_signing_key,
) -> AssemblyResult:
    """
    Run the full pipeline for one review.

    Returns:
        AssemblyResult with `outputs` and `submission` on success, or with the
        `ReviewError` that stopped it.
    """
    try:
        check_request(request, config=config)
        header = BoundedBuffer.from_bytes(request.header, config.max_header_bytes)
        verifier(header, request.signing_key, request.signature, config=config)
        address = locator(
            header, request.header_span, request.address_span, config.field_name, config=config
        )
    except ReviewError as e:
        log.info("review submission rejected: %s", e.code.value)
        return AssemblyResult.failure(e)

    outputs, submission = _derive(
        address,
        request.signing_key,
        request.signature,
        request.review_text,
        config=config,
        key_committer=key_committer,
    )
    log.info("review submission assembled")
    return AssemblyResult.success(outputs, submission)


def process_or_raise(
    request: SubmissionRequest,
    *,
    config: CircuitConfig = DEFAULT_CONFIG,
    verifier: Optional[Verifier] = None,
    locator: Optional[Locator] = None,
    key_committer: Optional[KeyCommitter] = None,
) -> Tuple[PublicOutputs, ReviewSubmission]:
    """Same as `process` but raises the `ReviewError` on failure."""
    return process(
        request,
        config=config,
        verifier=verifier or verify_signature,
        locator=locator or locate_field,
        key_committer=key_committer or commit_signing_key,
    ).unwrap()


__all__ = ["check_request", "process", "process_or_raise"]
