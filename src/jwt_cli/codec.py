"""
Core JWT codec: decode (parse, check, optionally verify) and encode (build, sign).

The codec is bound to a single Signer at construction time. The header ``alg``
of every decoded token must match that signer's name exactly; the token can
never pick its own algorithm.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping

from .b64url import b64url_decode, b64url_encode, force_bytes
from .errors import (
    EmptyTokenError,
    InvalidSignatureError,
    MalformedTokenError,
    MissingKeyError,
    SigningError,
    UnsupportedAlgorithmError,
)
from .signers import Signer

__all__ = ["DecodedToken", "TokenCodec", "render", "split_token"]

SIGNATURE_VALID_LINE = "Signature: Valid"


@dataclass(frozen=True)
class DecodedToken:
    """The parsed parts of a token, before rendering."""

    header: dict[str, Any]
    payload: dict[str, Any]
    signing_input: bytes
    signature: str


def _reject_constant(name: str) -> None:
    raise ValueError(f"non-standard JSON constant: {name}")


def _parse_object(raw: bytes) -> dict[str, Any] | None:
    """Parse *raw* as a JSON object, or return None."""
    try:
        value = json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return None
    return value if isinstance(value, dict) else None


def _dump_compact(value: Mapping[str, Any]) -> bytes:
    return json.dumps(value, separators=(",", ":"), sort_keys=True).encode("utf-8")


def _dump_pretty(value: Mapping[str, Any], part: str) -> str:
    # The indenting encoder is pure Python and recurses per nesting level.
    try:
        return json.dumps(value, indent=2, sort_keys=True, ensure_ascii=False)
    except RecursionError:
        raise MalformedTokenError(f"invalid JWT format: {part} is nested too deeply") from None


def split_token(token: str) -> list[str]:
    """Split *token* into its three raw segments.

    Raises:
        EmptyTokenError: If the token is empty.
        MalformedTokenError: If there are not exactly three non-empty,
            base64url-encoded segments.
    """
    if token == "":
        raise EmptyTokenError("empty token provided")

    parts = token.split(".")
    if len(parts) != 3:
        raise MalformedTokenError(
            f"invalid JWT format: expected 3 parts, got {len(parts)}"
        )

    for index, part in enumerate(parts, 1):
        if part == "":
            raise MalformedTokenError(f"invalid JWT format: part {index} is empty")
        try:
            b64url_decode(part)
        except ValueError:
            raise MalformedTokenError(
                f"invalid JWT format: part {index} is not valid base64"
            ) from None

    return parts


def render(header: Mapping[str, Any], payload: Mapping[str, Any]) -> str:
    """Render header and payload as labelled, 2-space indented JSON blocks.

    Raises:
        MalformedTokenError: If either part is nested too deeply to render.
    """
    header_text = _dump_pretty(header, "header")
    payload_text = _dump_pretty(payload, "payload")
    return f"Header:\n{header_text}\n\nPayload:\n{payload_text}\n"


class TokenCodec:
    """Decode and encode compact JWTs with one bound Signer."""

    def __init__(self, signer: Signer) -> None:
        self._signer = signer

    @property
    def signer(self) -> Signer:
        return self._signer

    @property
    def algorithm(self) -> str:
        return self._signer.name

    # ------------------------------------------------------------------
    # Decode
    # ------------------------------------------------------------------

    def parse(self, token: str) -> DecodedToken:
        """Split and parse *token* without verifying its signature.

        Raises:
            EmptyTokenError, MalformedTokenError, UnsupportedAlgorithmError
        """
        header_b64, payload_b64, signature = split_token(token)

        header = _parse_object(b64url_decode(header_b64))
        if header is None:
            raise MalformedTokenError("invalid JWT format: header is not valid JSON")

        alg = header.get("alg")
        if not isinstance(alg, str) or alg != self._signer.name:
            raise UnsupportedAlgorithmError(f"unsupported algorithm: {alg}")

        payload = _parse_object(b64url_decode(payload_b64))
        if payload is None:
            raise MalformedTokenError("invalid JWT format: payload is not valid JSON")

        return DecodedToken(
            header=header,
            payload=payload,
            signing_input=f"{header_b64}.{payload_b64}".encode("ascii"),
            signature=signature,
        )

    def decode(
        self,
        token: str,
        validate: bool = False,
        key: bytes | str | None = None,
    ) -> str:
        """Decode *token* and return the human-readable rendering.

        When *validate* is true the signature is checked with *key* (the
        shared secret for HMAC, the PEM public key for RSA) and
        ``Signature: Valid`` is appended on success.

        Raises:
            EmptyTokenError: The token is empty.
            MalformedTokenError: Wrong segment count, bad segment, bad JSON.
            UnsupportedAlgorithmError: Header ``alg`` missing or mismatched.
            MissingKeyError: Validation requested without key material.
            InvalidSignatureError: Validation failed.
        """
        decoded = self.parse(token)
        output = render(decoded.header, decoded.payload)

        if validate:
            if not key:
                raise MissingKeyError(f"{self._signer.key_kind} is required for validation")
            if not self._signer.verify(decoded.signing_input, decoded.signature, key):
                raise InvalidSignatureError("invalid signature")
            output += "\n" + SIGNATURE_VALID_LINE

        return output

    # ------------------------------------------------------------------
    # Encode
    # ------------------------------------------------------------------

    def encode(
        self,
        claims: Mapping[str, Any],
        key: bytes | str | None,
        algorithm: str | None = None,
    ) -> str:
        """Build and sign a compact JWT carrying *claims*.

        Raises:
            UnsupportedAlgorithmError: *algorithm* differs from the bound signer.
            MissingKeyError: *key* is empty.
            SigningError: The signer could not use *key*.
        """
        name = self._signer.name
        if algorithm is not None and str(algorithm) != name:
            raise UnsupportedAlgorithmError(
                f"unsupported algorithm: {algorithm} (codec is bound to {name})"
            )
        if not key:
            raise MissingKeyError(f"a signing key is required for {name}")

        header_b64 = b64url_encode(_dump_compact({"alg": name, "typ": "JWT"}))
        payload_b64 = b64url_encode(_dump_compact(claims))
        signing_input = f"{header_b64}.{payload_b64}"

        signature = self._signer.sign(signing_input.encode("ascii"), force_bytes(key))
        if not signature:
            raise SigningError(f"could not sign token with the supplied {name} key")

        return f"{signing_input}.{signature}"
