# Released under MIT License.
# Copyright (c) 2026 The saferm Developers

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from .config import CFG


def is_debug_mode() -> bool:
    """Check whether saferm debug mode is enabled in the environment."""
    return os.environ.get(CFG.env_vars.debug_mode) is not None


def get_logger(name: str, show_time: bool = False) -> logging.Logger:
    """
    Return a logger with unified formatting.

    Records are written to standard error by rich's RichHandler. Debug messages
    (retries, permission repairs, skipped entries) are only shown in debug mode.
    Calling this function repeatedly for the same name does not attach
    additional handlers.
    """
    logger = logging.getLogger(name)

    level = logging.DEBUG if is_debug_mode() else logging.INFO
    logger.setLevel(level)
    logger.propagate = False

    for existing in logger.handlers:
        if isinstance(existing, RichHandler):
            existing.setLevel(level)
            return logger

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
        show_level=True,
        show_time=show_time or level == logging.DEBUG,
        log_time_format=CFG.date_formats.standard,
        tracebacks_width=None,
        tracebacks_code_width=None,
    )
    handler.setLevel(level)
    logger.addHandler(handler)

    return logger
