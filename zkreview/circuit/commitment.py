"""
Deterministic scalars derived from the verified email.

- `commit_domain`: Poseidon over the domain buffer's full capacity, zero
  padded. Same bytes and same length give the same commitment, which is what
  lets reviews be grouped by employer without the domain text.
- `derive_nullifier`: Poseidon over the full signature limb vector. The same
  signed email always yields the same nullifier; keeping a set of spent
  nullifiers is someone else's job.

Both are pure functions of their inputs and the registered hash parameters.
"""

from __future__ import annotations

from typing import List, Sequence

from zkreview.buffers import BoundedBuffer
from zkreview.config import DEFAULT_CONFIG, CircuitConfig
from zkreview.hashing.poseidon import poseidon_hash_fixed


def domain_field_elements(domain: BoundedBuffer, *, config: CircuitConfig = DEFAULT_CONFIG) -> List[int]:
    """One field element per domain slot: the byte while live, 0 for padding."""
    return [domain.get(i) for i in range(config.max_domain_bytes)]


def commit_domain(domain: BoundedBuffer, *, config: CircuitConfig = DEFAULT_CONFIG) -> int:
    return poseidon_hash_fixed(
        domain_field_elements(domain, config=config),
        width=config.max_domain_bytes,
        params_name=config.hash_params,
    )


def derive_nullifier(signature: Sequence[int], *, config: CircuitConfig = DEFAULT_CONFIG) -> int:
    return poseidon_hash_fixed(
        [int(v) for v in signature],
        width=config.limb_count,
        params_name=config.hash_params,
    )


__all__ = ["domain_field_elements", "commit_domain", "derive_nullifier"]
