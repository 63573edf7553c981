"""
Error taxonomy for JWT decoding, validation and signing.

Every failure in the core is raised as one of these classes with a
human-readable message that names the offending detail (segment index,
declared algorithm, ...). Nothing here is logged or retried; the CLI decides
what to print and which exit code to use.
"""

from __future__ import annotations

__all__ = [
    "JWTToolError",
    "EmptyTokenError",
    "MalformedTokenError",
    "UnsupportedAlgorithmError",
    "MissingKeyError",
    "InvalidSignatureError",
    "SigningError",
]


class JWTToolError(Exception):
    """Base class for all jwt-cli errors."""


class EmptyTokenError(JWTToolError):
    """Raised when the token string is empty."""


class MalformedTokenError(JWTToolError):
    """Raised when a token is not a well-formed three-part JWT."""


class UnsupportedAlgorithmError(JWTToolError):
    """Raised for an unknown algorithm name or a header ``alg`` mismatch."""


class MissingKeyError(JWTToolError):
    """Raised when key material is needed but none was supplied."""


class InvalidSignatureError(JWTToolError):
    """Raised when signature verification was performed and failed."""


class SigningError(JWTToolError):
    """Raised when a token cannot be signed with the supplied key."""
