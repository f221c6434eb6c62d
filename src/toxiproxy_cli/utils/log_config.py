"""Logging configuration for the CLI process.

The package logger is disabled on import so that library users never
see output they did not ask for.  The CLI calls
:func:`configure_logging` once per invocation to opt in.
"""

from __future__ import annotations

import sys

from loguru import logger

LOG_FORMAT: str = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
    "<level>{message}</level>"
)


def configure_logging(verbose: bool) -> None:
    """Route package logs to stderr at DEBUG when *verbose*, else drop them."""
    logger.remove()  # Remove default handler
    if not verbose:
        logger.disable("toxiproxy_cli")
        return

    logger.add(
        sys.stderr,
        format=LOG_FORMAT,
        level="DEBUG",
        backtrace=False,
        diagnose=False,
    )
    logger.enable("toxiproxy_cli")
