# Released under MIT License.
# Copyright (c) 2026 The saferm Developers

import os
import stat
from collections.abc import Callable
from pathlib import Path

from saferm_lib.core.common import format_milliseconds
from saferm_lib.core.error import IllegalOnDirectoryError
from saferm_lib.core.logger import get_logger

from .attempt import AttemptState
from .classify import is_gone
from .request import RemovalRequest

logger = get_logger(__name__)


class BaseRemover:
    """
    Shared logic of the blocking and the non-blocking removal engines.

    Subclasses decide how filesystem operations are dispatched and how
    delays between retries are realized. Everything else (validation of the
    target, classification of errors, retry bookkeeping) lives here.

    Attributes:
        _request (RemovalRequest): The removal being performed.
    """

    def __init__(self, request: RemovalRequest):
        self._request = request

    @property
    def request(self) -> RemovalRequest:
        return self._request

    def _shouldWalk(self, st: os.stat_result) -> bool:
        """
        Decide how to remove the target of the request based on its `lstat` result.

        Returns:
            bool: True if the target is a directory to walk, False if it is
            a file, a symbolic link or another non-directory entry.

        Raises:
            IllegalOnDirectoryError: If the target is a directory and the request is not recursive.
        """
        if not stat.S_ISDIR(st.st_mode):
            return False

        if not self._request.recursive:
            raise IllegalOnDirectoryError(self._request.path)

        return True

    def _isGone(self, error: BaseException, path: Path) -> bool:
        """Check whether a failure on `path` means it is already gone and `force` applies."""
        if is_gone(error, self._request.force):
            logger.debug(f"'{path}' does not exist, skipping.")
            return True
        return False

    def _newAttemptState(self) -> AttemptState:
        return AttemptState(self._request.max_retries, self._request.backoff)

    @staticmethod
    def _primitive(directory: bool) -> Callable[[Path], None]:
        """Get the operation removing a single empty directory or a single file."""
        return os.rmdir if directory else os.unlink

    @staticmethod
    def _logRetry(path: Path, error: OSError, state: AttemptState, delay: int) -> None:
        logger.debug(
            f"Could not remove '{path}' ({state.description}): {error}. "
            f"Attempting again in {format_milliseconds(delay)}."
        )
