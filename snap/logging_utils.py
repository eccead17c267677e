"""Logging setup shared by the CLI and the Textual UI."""

from __future__ import annotations

import logging
import os

# Environment switches:
#   LOG_LEVEL=DEBUG / INFO / WARNING / ERROR
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

LOG_FORMAT = "%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = LOG_LEVEL, filename: str | None = None) -> None:
    """Call once at program start.

    Pass ``filename`` when a full-screen UI owns the terminal.
    """

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        filename=filename,
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
