"""Centralized logging configuration for gridroute.

Loguru is the logging facade for every module. Library code only does
``from loguru import logger``; applications call :func:`configure_logging`
once at startup to choose verbosity.

Usage (in scripts/CLI):
    >>> from gridroute.common.logging import configure_logging
    >>> from loguru import logger
    >>> configure_logging(verbose=args.verbose)
    >>> logger.info("Routing started")

Usage (in modules):
    >>> from loguru import logger
    >>> logger.debug("Grid built with {rows} rows", rows=42)
"""

from __future__ import annotations

import sys

from loguru import logger


def configure_logging(verbose: bool = False, trace: bool = False) -> None:
    """Configure the global loguru logger.

    # <https://loguru.readthedocs.io/en/stable/>

    Args:
        verbose: If True, enable DEBUG level; if False, use INFO level.
        trace: If True, enable TRACE level, which includes per-node rasterization
            diagnostics when a query sets ``trace_rasterization``.

    Note:
        This function is idempotent; calling it again replaces the sink.
    """
    logger.remove()  # Remove default handler

    log_format = (
        "<level>{level: <7}</level>| "
        "<dim><cyan>{file}:{line}</cyan></dim> | "
        "<level>{message}</level>"
    )

    if trace:
        level = "TRACE"
    elif verbose:
        level = "DEBUG"
    else:
        level = "INFO"

    logger.add(
        sys.stderr,
        format=log_format,
        level=level,
        colorize=True,
        backtrace=verbose or trace,
        diagnose=verbose or trace,
    )

    logger.level("DEBUG", color="<dim><white>")
    logger.level("WARNING", color="<fg #ffff00><bold>")
    logger.level("ERROR", color="<fg #ff0000><bold>")
