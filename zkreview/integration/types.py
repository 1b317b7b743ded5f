"""
zkreview.integration.types
==========================

Typed records crossing the assembler boundary, using **msgspec** structs.

- `SubmissionRequest`: everything a caller supplies for one review.
- `PublicOutputs`: the ordered triple meant for disclosure
  (domain commitment, nullifier, signing-key commitment).
- `ReviewSubmission`: the auxiliary record carried alongside (review text,
  domain commitment, masked address, nullifier). Not itself disclosed.
- `AssemblyResult`: success (outputs + submission) or failure (error) of one
  invocation; never both.

Conventions
-----------
- Field elements are Python ints in-memory and decimal strings on the wire,
  matching snarkjs ``public.json``.
- Canonical JSON uses sorted keys and compact separators so hashes of the
  serialized records are stable across Python versions.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import msgspec

from zkreview.buffers import BoundedBuffer
from zkreview.dkim.keys import SigningKey
from zkreview.errors import ReviewError

__all__ = [
    "SubmissionRequest",
    "PublicOutputs",
    "ReviewSubmission",
    "AssemblyResult",
    "canonical_json_bytes",
    "buffer_to_dict",
]


# -----------------------------------------------------------------------------
# Records
# -----------------------------------------------------------------------------


class SubmissionRequest(msgspec.Struct, frozen=True):
    """
    Fields:
        header: canonicalized, DKIM-signed header bytes.
        signing_key: the DKIM public key as limbs (see `SigningKey`).
        signature: signature limbs, little-endian.
        header_span: (offset, length) of the ``from:`` line inside `header`.
        address_span: (offset, length) of the address inside `header`.
        review_text: the review body as bytes.
    """

    header: bytes
    signing_key: SigningKey
    signature: Tuple[int, ...]
    header_span: Tuple[int, int]
    address_span: Tuple[int, int]
    review_text: bytes = b""


class PublicOutputs(msgspec.Struct, frozen=True):
    domain_commitment: int
    nullifier: int
    pubkey_commitment: int

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.domain_commitment, self.nullifier, self.pubkey_commitment)

    def public_signals(self) -> List[str]:
        """Ordered decimal strings, the shape a verifier's public input list takes."""
        return [str(v) for v in self.as_tuple()]

    def to_dict(self) -> Dict[str, str]:
        return {
            "domain_commitment": str(self.domain_commitment),
            "nullifier": str(self.nullifier),
            "pubkey_commitment": str(self.pubkey_commitment),
        }


class ReviewSubmission(msgspec.Struct, frozen=True):
    """
    Built once per invocation from fresh buffers owned by this record; callers
    must not append to `review_text` or `masked_email` afterwards.
    """

    review_text: BoundedBuffer
    domain_commitment: int
    masked_email: BoundedBuffer
    nullifier: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "review_text": buffer_to_dict(self.review_text),
            "domain_commitment": str(self.domain_commitment),
            "masked_email": buffer_to_dict(self.masked_email),
            "nullifier": str(self.nullifier),
        }


@dataclass(slots=True, frozen=True)
class AssemblyResult:
    """Outcome of one assembler invocation."""

    ok: bool
    outputs: Optional[PublicOutputs] = None
    submission: Optional[ReviewSubmission] = None
    error: Optional[ReviewError] = None

    def __bool__(self) -> bool:
        return self.ok

    @staticmethod
    def success(outputs: PublicOutputs, submission: ReviewSubmission) -> "AssemblyResult":
        return AssemblyResult(ok=True, outputs=outputs, submission=submission)

    @staticmethod
    def failure(error: ReviewError) -> "AssemblyResult":
        return AssemblyResult(ok=False, error=error)

    def unwrap(self) -> Tuple[PublicOutputs, ReviewSubmission]:
        """Return (outputs, submission) or raise the carried error."""
        if not self.ok:
            assert self.error is not None
            raise self.error
        assert self.outputs is not None and self.submission is not None
        return self.outputs, self.submission


# -----------------------------------------------------------------------------
# Serialization helpers
# -----------------------------------------------------------------------------


def buffer_to_dict(buf: BoundedBuffer) -> Dict[str, Any]:
    """Capacity + length + hex of the live bytes."""
    return {"capacity": buf.capacity, "length": len(buf), "data": buf.to_bytes().hex()}


def canonical_json_bytes(obj: Any) -> bytes:
    """Deterministic JSON bytes: sorted keys, compact separators, UTF-8."""
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
