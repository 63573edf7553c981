"""Decode, validate and generate JSON Web Tokens from the command line."""

__version__ = "1.0.0"

__all__ = [
    "b64url",
    "cli",
    "codec",
    "config",
    "errors",
    "generator",
    "logging_setup",
    "registry",
    "signers",
]
