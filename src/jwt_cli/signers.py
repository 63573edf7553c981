"""
Signer/Verifier implementations for the supported JWT algorithms.

Each signer computes and checks a base64url signature over the JWT signing
input. The cryptographic primitives come from PyJWT's ``jwt.algorithms``;
PEM parsing uses ``cryptography`` directly so that a bad key degrades to the
documented sentinels instead of raising:

  - ``sign()`` returns ``""`` when no signature can be produced
  - ``verify()`` returns ``False`` for any failure, never raises

Signer instances hold no mutable state and can be shared freely.
"""

from __future__ import annotations

import hmac

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from jwt.algorithms import HMACAlgorithm, RSAAlgorithm

from .b64url import b64url_decode, b64url_encode, force_bytes

__all__ = ["Signer", "HMACSigner", "RSASigner"]


class Signer:
    """Common interface: ``name``, ``sign()`` and ``verify()``."""

    #: What the verifier needs, used in user-facing messages.
    key_kind: str = "key"

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        """Canonical algorithm name, e.g. ``"HS256"``."""
        return self._name

    def sign(self, data: bytes, key: bytes | str) -> str:
        """Return the unpadded base64url signature of *data* under *key*.

        Returns ``""`` when no signature can be produced (empty or unusable
        key). Subclasses must implement this.
        """
        raise NotImplementedError

    def verify(self, data: bytes, signature: str, key: bytes | str) -> bool:
        """Return True if *signature* is valid for *data* under *key*.

        Any failure gives False instead of raising. Subclasses must implement this.
        """
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r})"


# ---------------------------------------------------------------------------
# HMAC (HS256 / HS384 / HS512)
# ---------------------------------------------------------------------------

class HMACSigner(Signer):
    """HMAC with a shared secret."""

    key_kind = "secret key"

    def __init__(self, name: str, hash_alg) -> None:
        super().__init__(name)
        self._algorithm = HMACAlgorithm(hash_alg)

    def sign(self, data: bytes, key: bytes | str) -> str:
        """Return the base64url MAC of *data*, or ``""`` for an empty key."""
        if not key:
            return ""
        return b64url_encode(self._algorithm.sign(force_bytes(data), force_bytes(key)))

    def verify(self, data: bytes, signature: str, key: bytes | str) -> bool:
        """Recompute the MAC and compare it in constant time."""
        expected = self.sign(data, key)
        if not expected:
            return False
        return hmac.compare_digest(expected.encode("ascii"), force_bytes(signature))


# ---------------------------------------------------------------------------
# RSA (RS256)
# ---------------------------------------------------------------------------

def _load_private_key(key: bytes | str) -> rsa.RSAPrivateKey | None:
    """Parse a PEM RSA private key, or return None if it is not one."""
    if not key:
        return None
    try:
        loaded = serialization.load_pem_private_key(force_bytes(key), password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm):
        return None
    return loaded if isinstance(loaded, rsa.RSAPrivateKey) else None


def _load_public_key(key: bytes | str) -> rsa.RSAPublicKey | None:
    """Parse a PEM RSA public key (PKCS#1 or SubjectPublicKeyInfo)."""
    if not key:
        return None
    try:
        loaded = serialization.load_pem_public_key(force_bytes(key))
    except (ValueError, TypeError, UnsupportedAlgorithm):
        return None
    return loaded if isinstance(loaded, rsa.RSAPublicKey) else None


class RSASigner(Signer):
    """RSASSA-PKCS1-v1_5 over SHA-256.

    Signing takes a PEM private key; verification takes a PEM public key.
    """

    key_kind = "public key"

    def __init__(self, name: str = "RS256", hash_alg=RSAAlgorithm.SHA256) -> None:
        super().__init__(name)
        self._algorithm = RSAAlgorithm(hash_alg)

    def sign(self, data: bytes, key: bytes | str) -> str:
        private_key = _load_private_key(key)
        if private_key is None:
            return ""
        return b64url_encode(self._algorithm.sign(force_bytes(data), private_key))

    def verify(self, data: bytes, signature: str, key: bytes | str) -> bool:
        public_key = _load_public_key(key)
        if public_key is None:
            return False
        try:
            raw_signature = b64url_decode(signature)
        except ValueError:
            return False
        return self._algorithm.verify(force_bytes(data), public_key, raw_signature)
