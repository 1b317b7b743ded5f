from __future__ import annotations

import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

from zkreview.config import DEFAULT_CONFIG
from zkreview.dkim.keys import SigningKey
from zkreview.integration.types import SubmissionRequest
from zkreview.tests import build_header, sign_header


@pytest.fixture(scope="session")
def private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def other_private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def signing_key(private_key) -> SigningKey:
    return SigningKey.from_rsa_key(private_key.public_key(), selector="s1", domain="company.com")


@pytest.fixture
def make_request(private_key, signing_key):
    """Factory for a correctly signed request for `address`."""

    def _make(
        address: str = "john.doe@company.com",
        review: bytes = b"Great team, slow promotions.",
        **header_kwargs,
    ) -> SubmissionRequest:
        header, h_span, a_span = build_header(address, **header_kwargs)
        return SubmissionRequest(
            header=header,
            signing_key=signing_key,
            signature=tuple(sign_header(private_key, header, DEFAULT_CONFIG)),
            header_span=h_span,
            address_span=a_span,
            review_text=review,
        )

    return _make
