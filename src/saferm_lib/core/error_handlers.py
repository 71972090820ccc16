# Released under MIT License.
# Copyright (c) 2026 The saferm Developers


import sys
from typing import NoReturn

from .config import CFG
from .logger import get_logger
from .repeater import Repeater

logger = get_logger(__name__)


def handle_removal_error(
    exception: BaseException,
    metadata: Repeater,
) -> None:
    """
    Handle a path that could not be removed.

    The error is logged and the remaining paths are still processed.
    """
    logger.error(exception)

    # if removal failed for every path
    if len(metadata.items) > 1 and len(metadata.items) == len(
        metadata.encountered_errors
    ):
        logger.error("No path could be removed.")


def handle_invalid_request(
    exception: BaseException,
    _metadata: Repeater,
) -> NoReturn:
    """
    Handle invalid removal options.

    The options are shared by all paths, so nothing else is attempted.
    """
    logger.error(exception)
    sys.exit(getattr(exception, "exit_code", CFG.exit_codes.default))
