"""Logging configuration for the dot and dot-completion commands.

Diagnostics go to stderr so they never mix with a dispatched script's stdout
or with completion candidates.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional

LOG_FORMAT = "dot: %(levelname)s: %(message)s"

# Module-level state
_handler: Optional[logging.Handler] = None


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a stderr handler to the dotkit logger.

    Calling this again replaces the previous handler instead of stacking a
    second one.

    Args:
        verbose: Log debug traces of discovery and resolution

    Returns:
        The configured 'dotkit' logger
    """
    global _handler

    logger = logging.getLogger("dotkit")
    if _handler is not None:
        logger.removeHandler(_handler)

    level = logging.DEBUG if verbose else logging.WARNING

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    _handler.setLevel(level)

    logger.addHandler(_handler)
    logger.setLevel(level)
    return logger
