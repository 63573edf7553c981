"""Generate sample tokens with illustrative claims for testing."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

from .codec import TokenCodec
from .errors import MissingKeyError
from .registry import Algorithm, create
from .signers import HMACSigner

__all__ = ["DEFAULT_TEST_SECRET", "GeneratedToken", "sample_claims", "generate_test_token"]

DEFAULT_TEST_SECRET = "your-super-secret-key-123!@#$%^&*()"

TOKEN_LIFETIME_SECONDS = 24 * 60 * 60


@dataclass(frozen=True)
class GeneratedToken:
    token: str
    algorithm: str
    key_hint: str = ""  # built-in test secret, only when it was used

    def __repr__(self) -> str:
        return f"GeneratedToken(algorithm={self.algorithm!r}, token={self.token[:16]!r}...)"


def sample_claims(now: int | None = None) -> dict[str, Any]:
    """Return a realistic-looking claim set issued at *now* (epoch seconds)."""
    issued_at = int(time.time()) if now is None else int(now)
    return {
        "iss": "test-issuer",
        "sub": "test-user-123",
        "aud": "test-audience",
        "iat": issued_at,
        "exp": issued_at + TOKEN_LIFETIME_SECONDS,
        "name": "Test User",
        "email": "test@example.com",
        "roles": ["user", "admin"],
        "permissions": [
            "read:users",
            "write:users",
            "delete:users",
        ],
        "metadata": {
            "department": "Engineering",
            "location": "HQ",
            "employee_id": "EMP123",
        },
    }


def generate_test_token(
    algorithm: Algorithm | str,
    key: bytes | str | None = None,
    now: int | None = None,
) -> GeneratedToken:
    """Sign ``sample_claims()`` with *algorithm*.

    HMAC algorithms fall back to ``DEFAULT_TEST_SECRET`` when no *key* is
    given. RS256 needs a PEM private key.

    Raises:
        UnsupportedAlgorithmError: Unknown *algorithm*.
        MissingKeyError: RS256 without a private key.
        SigningError: The key could not be used for signing.
    """
    signer = create(algorithm)
    key_hint = ""

    if isinstance(signer, HMACSigner):
        if not key:
            key = key_hint = DEFAULT_TEST_SECRET
    elif not key:
        raise MissingKeyError(
            f"a PEM private key is required to generate {signer.name} tokens"
        )

    token = TokenCodec(signer).encode(sample_claims(now), key)
    return GeneratedToken(token=token, algorithm=signer.name, key_hint=key_hint)
