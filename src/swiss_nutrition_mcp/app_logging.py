"""Logging configuration helpers."""

import logging
import sys


def configure_logging(level: str = "INFO") -> None:
    """Configure application logging with a single stderr handler.

    Stdout carries the MCP stdio protocol, so nothing may log there.
    """
    logger = logging.getLogger("swiss_nutrition_mcp")
    logger.setLevel(level.upper())
    if logger.handlers:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
