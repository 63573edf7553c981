"""Test configuration helpers and shared fixtures."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest


def _ensure_src_on_path() -> None:
    """Add ``src/`` to ``sys.path`` when the package is not installed."""

    src = Path(__file__).resolve().parents[1] / "src"
    src_str = str(src)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)


_ensure_src_on_path()

from cryptography.hazmat.primitives import serialization  # noqa: E402
from cryptography.hazmat.primitives.asymmetric import rsa  # noqa: E402

from jwt_cli import config as config_module  # noqa: E402

# The canonical jwt.io example token (HS256, secret "your-256-bit-secret").
SAMPLE_HEADER = "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"
SAMPLE_PAYLOAD = "eyJzdWIiOiIxMjM0NTY3ODkwIiwibmFtZSI6IkpvaG4gRG9lIiwiaWF0IjoxNTE2MjM5MDIyfQ"
SAMPLE_SIGNATURE = "SflKxwRJSMeKKF2QT4fwpMeJf36POk6yJV_adQssw5c"
SAMPLE_TOKEN = f"{SAMPLE_HEADER}.{SAMPLE_PAYLOAD}.{SAMPLE_SIGNATURE}"
SAMPLE_SECRET = "your-256-bit-secret"

SAMPLE_RENDERING = (
    "Header:\n"
    "{\n"
    '  "alg": "HS256",\n'
    '  "typ": "JWT"\n'
    "}\n"
    "\n"
    "Payload:\n"
    "{\n"
    '  "iat": 1516239022,\n'
    '  "name": "John Doe",\n'
    '  "sub": "1234567890"\n'
    "}\n"
)


@pytest.fixture(scope="session")
def rsa_private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_private_pem(rsa_private_key) -> bytes:
    """PKCS#1 ("RSA PRIVATE KEY") PEM."""
    return rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )


@pytest.fixture(scope="session")
def rsa_public_pem(rsa_private_key) -> bytes:
    """PKCS#1 ("RSA PUBLIC KEY") PEM."""
    return rsa_private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.PKCS1,
    )


@pytest.fixture(scope="session")
def other_rsa_public_pem() -> bytes:
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.PKCS1,
    )


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep real keys and a local config/config.yaml out of every test."""
    for name in ("JWT_SECRET_KEY", "JWT_PUBLIC_KEY", "JWT_PRIVATE_KEY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(
        config_module, "DEFAULT_CONFIG_PATH", str(tmp_path / "missing" / "config.yaml")
    )


@pytest.fixture(autouse=True)
def restore_root_logging():
    """setup_logging() installs its own root handlers; drop them afterwards."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
