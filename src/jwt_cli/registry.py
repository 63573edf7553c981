"""
Algorithm registry: maps an algorithm name to its Signer.

Lookup is exact and case-sensitive. User input should go through
``normalize()`` once, at the CLI boundary, before calling ``create()``.
"""

from __future__ import annotations

from enum import Enum

from jwt.algorithms import HMACAlgorithm, RSAAlgorithm

from .errors import UnsupportedAlgorithmError
from .signers import HMACSigner, RSASigner, Signer

__all__ = ["Algorithm", "create", "normalize", "supported_algorithms"]


class Algorithm(str, Enum):
    """Supported JWT signing algorithms."""

    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"
    RS256 = "RS256"

    def __str__(self) -> str:
        return self.value


_SIGNERS: dict[Algorithm, Signer] = {
    Algorithm.HS256: HMACSigner("HS256", HMACAlgorithm.SHA256),
    Algorithm.HS384: HMACSigner("HS384", HMACAlgorithm.SHA384),
    Algorithm.HS512: HMACSigner("HS512", HMACAlgorithm.SHA512),
    Algorithm.RS256: RSASigner("RS256", RSAAlgorithm.SHA256),
}


def supported_algorithms() -> list[str]:
    return [alg.value for alg in Algorithm]


def normalize(name: str) -> str:
    """Canonicalise user-supplied input (``" hs256 "`` -> ``"HS256"``)."""
    return name.strip().upper()


def create(name: Algorithm | str) -> Signer:
    """Return the Signer for *name*.

    Raises:
        UnsupportedAlgorithmError: If *name* is not exactly one of the
            supported algorithm names.
    """
    try:
        algorithm = Algorithm(name)
    except ValueError:
        raise UnsupportedAlgorithmError(f"unsupported algorithm: {name}") from None
    return _SIGNERS[algorithm]
