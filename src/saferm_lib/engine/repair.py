# Released under MIT License.
# Copyright (c) 2026 The saferm Developers

"""
Permission repair for entries that Windows refuses to remove.

Read-only files and some directories cannot be removed on Windows and
fail with 'EPERM'. Making the entry writable and removing it once more
usually succeeds. The repair is a one-shot side channel attempted before
the generic retry logic and does not count as a retry.
"""

import os
import stat
from pathlib import Path

from saferm_lib.core.config import CFG
from saferm_lib.core.error import error_code
from saferm_lib.core.logger import get_logger

from .classify import ErrorClass, classify

logger = get_logger(__name__)

REPAIRABLE_CODE = "EPERM"


def should_repair(error: BaseException, enabled: bool) -> bool:
    """
    Check whether a permission repair should be attempted after `error`.

    Args:
        error (BaseException): The error raised by the removal.
        enabled (bool): Whether permission repair is available on this platform.

    Returns:
        bool: True if the error is a retryable 'EPERM' and repair is enabled.
    """
    return (
        enabled
        and classify(error) is ErrorClass.RETRYABLE
        and error_code(error) == REPAIRABLE_CODE
    )


def repair_permissions(
    path: Path, original_error: OSError, mode: int | None = None
) -> None:
    """
    Change the permissions of an entry and remove it.

    The entry is removed as an empty directory or as a file according to
    its type after the permissions are changed. Symbolic links are never
    followed: their permissions are left alone and the link itself is removed.

    Args:
        path (Path): The entry to remove.
        original_error (OSError): The error that triggered the repair.
        mode (int | None): Permissions to set. Defaults to `CFG.repair.mode`.

    Raises:
        OSError: `original_error` if any step of the repair fails.
    """
    if mode is None:
        mode = CFG.repair.mode

    logger.debug(f"Changing permissions of '{path}' to {oct(mode)} and removing it.")
    try:
        st = os.lstat(path)
        if not stat.S_ISLNK(st.st_mode):
            os.chmod(path, mode)

        if stat.S_ISDIR(st.st_mode):
            os.rmdir(path)
        else:
            os.unlink(path)
    except OSError as e:
        logger.debug(f"Could not repair permissions of '{path}': {e}.")
        raise original_error from None
