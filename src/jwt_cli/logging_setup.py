"""
Logging configuration for the jwt-cli entry point.

Provides a console handler (WARNING by default, DEBUG when verbose) and an
optional file handler (always DEBUG) when a log directory is configured.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime


def setup_logging(
    verbose: bool = False,
    log_dir: str = "",
    log_prefix: str = "jwt_cli",
) -> str:
    """Configure root logging for a CLI run.

    - Console handler: WARNING+ on stderr by default. When *verbose* is True,
      console level drops to DEBUG.
    - File handler: only when *log_dir* is set; always DEBUG level, writes to
      <log_dir>/<prefix>_<timestamp>.log

    Returns the path to the log file, or "" when no file handler was added.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers (e.g. from basicConfig)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_fmt = logging.Formatter(
        "%(levelname)-8s  %(message)s" if not verbose
        else "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )
    console_handler.setFormatter(console_fmt)
    root_logger.addHandler(console_handler)

    if not log_dir:
        return ""

    os.makedirs(log_dir, exist_ok=True)
    timestamp = datetime.now().strftime("%Y-%m-%d-%H%M%S")
    log_path = os.path.join(log_dir, f"{log_prefix}_{timestamp}.log")

    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root_logger.addHandler(file_handler)

    return log_path
