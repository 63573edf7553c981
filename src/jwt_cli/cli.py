"""
CLI entry point for the JWT tool.

Decodes (and optionally validates) a token passed as an argument, piped via
stdin, or typed at an interactive prompt, and generates sample tokens for
testing.
"""

from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .codec import TokenCodec
from .config import (
    ENV_PRIVATE_KEY,
    ENV_PUBLIC_KEY,
    ENV_SECRET_KEY,
    AppConfig,
    ConfigError,
    load_config,
)
from .errors import JWTToolError, UnsupportedAlgorithmError
from .generator import generate_test_token
from .logging_setup import setup_logging
from .registry import Algorithm, create, normalize, supported_algorithms

__all__ = ["main"]

logger = logging.getLogger(__name__)

PROG = "jwt-cli"

EPILOG = f"""\
Commands:
  decode <token>    Decode a JWT token
  generate          Generate a test JWT token with realistic claims

Examples:
  %(prog)s decode eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...
  %(prog)s --validate decode eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...
  %(prog)s --algorithm HS384 decode eyJhbGciOiJIUzM4NCIsInR5cCI6IkpXVCJ9...
  echo '<token>' | %(prog)s decode --stdin
  %(prog)s --generate
  %(prog)s generate --algorithm HS512

Environment Variables:
  {ENV_SECRET_KEY}    Secret key for HS256/HS384/HS512 validation and generation
  {ENV_PUBLIC_KEY}    PEM public key for RS256 validation
  {ENV_PRIVATE_KEY}   PEM private key for RS256 generation
"""


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Decode, validate and generate JSON Web Tokens.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "command",
        nargs="?",
        choices=["decode", "generate"],
        default=None,
        help="Command to run",
    )
    parser.add_argument(
        "token",
        nargs="?",
        default=None,
        help="JWT token string (prompts interactively if omitted)",
    )
    parser.add_argument(
        "--algorithm", "-a",
        default=None,
        help=f"Signing algorithm ({', '.join(supported_algorithms())}; "
             "case-insensitive, default: from config or HS256)",
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        default=False,
        help="Validate the token signature (needs a key, see Environment Variables)",
    )
    parser.add_argument(
        "--generate",
        action="store_true",
        default=False,
        help="Generate a test JWT token (same as the 'generate' command)",
    )
    parser.add_argument(
        "--stdin",
        action="store_true",
        default=False,
        help="Read the token from stdin (for piping)",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to YAML config file (default: config/config.yaml if present)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        default=False,
        help="Enable verbose (debug) logging",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        default=False,
        help="Display version information",
    )
    return parser


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _resolve_token(args: argparse.Namespace) -> str:
    if args.stdin:
        return sys.stdin.read().strip()
    if args.token is not None:
        return args.token.strip()

    # Interactive mode
    print("JWT Token Decoder")
    print("=================")
    try:
        return input("Please enter your JWT token: ").strip()
    except (EOFError, KeyboardInterrupt):
        print()
        sys.exit(130)


def _select_algorithm(args: argparse.Namespace, cfg: AppConfig) -> str:
    algorithm = normalize(args.algorithm) if args.algorithm else cfg.algorithm
    try:
        create(algorithm)
    except UnsupportedAlgorithmError:
        raise UnsupportedAlgorithmError(
            f"invalid algorithm {algorithm}. "
            f"Supported algorithms: {', '.join(supported_algorithms())}"
        ) from None
    return algorithm


def _run_decode(args: argparse.Namespace, cfg: AppConfig, algorithm: str) -> None:
    token = _resolve_token(args)

    codec = TokenCodec(create(algorithm))

    # Structural errors win over a missing key.
    key = None
    if args.validate:
        codec.parse(token)
        key = cfg.verification_key(algorithm)

    logger.debug("Decoding token with %s (validate=%s)", algorithm, args.validate)
    output = codec.decode(token, validate=args.validate, key=key)
    print(output.rstrip("\n"))


def _run_generate(cfg: AppConfig, algorithm: str) -> None:
    generated = generate_test_token(algorithm, key=cfg.signing_key(algorithm) or None)
    logger.debug("Generated %s test token", generated.algorithm)

    print("Test JWT Token:")
    print(generated.token)
    if generated.key_hint:
        print("\nSecret Key (for decoding):")
        print(generated.key_hint)
    elif algorithm == Algorithm.RS256:
        print(f"\nSigned with {ENV_PRIVATE_KEY}; validate with the matching {ENV_PUBLIC_KEY}.")
    else:
        print(f"\nSigned with {ENV_SECRET_KEY}.")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        cfg = load_config(args.config, version=__version__)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    log_path = setup_logging(verbose=args.verbose, log_dir=cfg.log_dir)
    if log_path:
        logger.debug("Logging to %s", log_path)

    if args.version:
        print(f"{PROG} version {cfg.version}")
        return

    command = "generate" if args.generate else args.command
    if command is None:
        parser.print_help()
        sys.exit(1)

    try:
        algorithm = _select_algorithm(args, cfg)
        if command == "generate":
            _run_generate(cfg, algorithm)
        else:
            _run_decode(args, cfg, algorithm)
    except JWTToolError as exc:
        logger.debug("%s failed", command, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
