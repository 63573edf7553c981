"""
Configuration loading and typed models.

Supports:
  - optional YAML config file (config/config.yaml)
  - environment variable overrides for key material
    (JWT_SECRET_KEY, JWT_PUBLIC_KEY, JWT_PRIVATE_KEY)

The loaded AppConfig is immutable and carries the tool version, so nothing
in the package depends on module-level mutable state.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

import yaml

from .errors import MissingKeyError
from .registry import Algorithm, normalize, supported_algorithms

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "PROJECT_ROOT",
    "ENV_SECRET_KEY",
    "ENV_PUBLIC_KEY",
    "ENV_PRIVATE_KEY",
    "ConfigError",
    "KeyConfig",
    "AppConfig",
    "load_config",
]

logger = logging.getLogger(__name__)

# Project root directory (two levels up from the package directory)
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

DEFAULT_CONFIG_PATH = os.path.join(PROJECT_ROOT, "config", "config.yaml")

# Environment variable names
ENV_SECRET_KEY = "JWT_SECRET_KEY"
ENV_PUBLIC_KEY = "JWT_PUBLIC_KEY"
ENV_PRIVATE_KEY = "JWT_PRIVATE_KEY"

DEFAULT_ALGORITHM = Algorithm.HS256.value


class ConfigError(Exception):
    """Raised when the configuration file or a key file is missing or invalid."""


# ---------------------------------------------------------------------------
# Typed configuration models
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class KeyConfig:
    secret_key: str = ""
    public_key: str = ""
    private_key: str = ""

    def __repr__(self) -> str:
        """Redact key material in repr to prevent accidental logging."""
        def _state(value: str) -> str:
            return "'***redacted***'" if value else "''"

        return (
            f"KeyConfig(secret_key={_state(self.secret_key)}, "
            f"public_key={_state(self.public_key)}, "
            f"private_key={_state(self.private_key)})"
        )


@dataclass(frozen=True)
class AppConfig:
    version: str
    algorithm: str = DEFAULT_ALGORITHM
    keys: KeyConfig = field(default_factory=KeyConfig)
    log_dir: str = ""

    def verification_key(self, algorithm: str) -> str:
        """Return the key used to validate *algorithm* tokens.

        Raises:
            MissingKeyError: If the key is not configured.
        """
        if algorithm == Algorithm.RS256:
            if not self.keys.public_key:
                raise MissingKeyError(
                    f"{ENV_PUBLIC_KEY} environment variable is required for RS256 validation"
                )
            return self.keys.public_key

        if not self.keys.secret_key:
            raise MissingKeyError(
                f"{ENV_SECRET_KEY} environment variable is required for validation"
            )
        return self.keys.secret_key

    def signing_key(self, algorithm: str) -> str:
        """Return the configured signing key for *algorithm* (may be empty)."""
        if algorithm == Algorithm.RS256:
            return self.keys.private_key
        return self.keys.secret_key


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def _resolve(path: str) -> str:
    """Resolve a potentially relative path against the project root."""
    if os.path.isabs(path):
        return path
    return os.path.join(PROJECT_ROOT, path)


def _read_key_file(path: str, label: str) -> str:
    full_path = _resolve(path)
    try:
        with open(full_path, encoding="utf-8") as fh:
            return fh.read()
    except OSError as exc:
        raise ConfigError(f"Cannot read {label} file {full_path}: {exc}") from exc


def _read_yaml(config_path: str | None) -> tuple[dict, str]:
    """Return the raw YAML mapping and the path it came from ("" if none)."""
    explicit = config_path is not None
    path = Path(config_path if explicit else DEFAULT_CONFIG_PATH)

    if not path.exists():
        if explicit:
            raise ConfigError(
                f"Config file not found: {config_path}\n"
                "Copy config/config.yaml.example to config/config.yaml and fill in your values."
            )
        return {}, ""

    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(
            f"Invalid config file format: expected YAML mapping, got {type(raw).__name__}"
        )
    return raw, str(path)


def load_config(
    config_path: str | None,
    version: str,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """Build the AppConfig from YAML and the environment.

    Environment variables take precedence over YAML values for key material:
      - JWT_SECRET_KEY   -> keys.secret_key
      - JWT_PUBLIC_KEY   -> keys.public_key_file
      - JWT_PRIVATE_KEY  -> keys.private_key_file

    A missing default config file is fine (env-only usage); a missing
    explicitly requested one is not.

    Raises:
        ConfigError: If the config or a referenced key file is missing or invalid.
    """
    env = os.environ if environ is None else environ
    raw, source = _read_yaml(config_path)

    # --- Defaults ---
    defaults = raw.get("defaults", {}) or {}
    algorithm = normalize(str(defaults.get("algorithm", DEFAULT_ALGORITHM) or DEFAULT_ALGORITHM))
    if algorithm not in supported_algorithms():
        raise ConfigError(
            f"Invalid defaults.algorithm: {algorithm!r}. "
            f"Supported: {', '.join(supported_algorithms())}"
        )

    # --- Keys (env var > YAML) ---
    keys_section = raw.get("keys", {}) or {}

    secret_key = env.get(ENV_SECRET_KEY) or str(keys_section.get("secret_key", "") or "")

    public_key = env.get(ENV_PUBLIC_KEY, "")
    if not public_key and keys_section.get("public_key_file"):
        public_key = _read_key_file(keys_section["public_key_file"], "public key")

    private_key = env.get(ENV_PRIVATE_KEY, "")
    if not private_key and keys_section.get("private_key_file"):
        private_key = _read_key_file(keys_section["private_key_file"], "private key")

    # --- Logging ---
    log_section = raw.get("logging", {}) or {}
    log_dir = str(log_section.get("log_dir", "") or "")
    if log_dir:
        log_dir = _resolve(log_dir)

    config = AppConfig(
        version=version,
        algorithm=algorithm,
        keys=KeyConfig(secret_key=secret_key, public_key=public_key, private_key=private_key),
        log_dir=log_dir,
    )

    logger.debug(
        "Config loaded from %s (secret key from %s)",
        source or "environment only",
        "env" if env.get(ENV_SECRET_KEY) else ("file" if secret_key else "nowhere"),
    )
    return config
