"""Logging setup for the CLI and MCP entry points."""

import logging
import sys

from claudeai_cli import config

LOGGER_NAME = "claudeai_cli"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def get_logger(name=None):
    """Return the package logger, or a child of it."""
    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def setup_logging(level=None) -> None:
    """Send package logs to stderr at *level* (name or int)."""
    if level is None:
        level = config.LOG_LEVEL
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format=LOG_FORMAT,
        force=True,
    )
    logging.getLogger(LOGGER_NAME).setLevel(level)
