# Released under MIT License.
# Copyright (c) 2026 The saferm Developers

import os
import stat
from pathlib import Path

from saferm_lib.core.logger import get_logger

from .backoff import busy_wait
from .base import BaseRemover
from .repair import repair_permissions, should_repair

logger = get_logger(__name__)


class Remover(BaseRemover):
    """
    Removes a file or a directory tree on the calling thread.

    Every operation, including the waits between retries, is performed
    sequentially. Waits are busy waits.
    """

    def remove(self) -> None:
        """
        Remove the target of the request.

        Raises:
            FileNotFoundError: If the target does not exist and `force` is not set.
            IllegalOnDirectoryError: If the target is a directory and `recursive` is not set.
            OSError: If any entry could not be removed.
        """
        path = self._request.path
        logger.debug(f"Removing '{path}'.")

        try:
            st = os.lstat(path)
        except OSError as e:
            if self._isGone(e, path):
                return
            raise

        if self._shouldWalk(st):
            self.walk(path)
        else:
            self.removeEntry(path, directory=False)

    def walk(self, directory: Path) -> None:
        """
        Remove all contents of `directory` and then the directory itself.

        Children are processed in the order in which they are listed.
        The first failure aborts the walk and leaves the directory in place.
        Symbolic links are removed, never followed.
        """
        try:
            names = os.listdir(directory)
        except OSError as e:
            if self._isGone(e, directory):
                return
            raise

        for name in names:
            child = directory / name
            try:
                st = os.lstat(child)
            except OSError as e:
                if self._isGone(e, child):
                    continue
                raise

            if stat.S_ISDIR(st.st_mode):
                self.walk(child)
            else:
                self.removeEntry(child, directory=False)

        self.removeEntry(directory, directory=True)

    def removeEntry(self, path: Path, directory: bool) -> None:
        """
        Remove a single file or a single empty directory, retrying transient failures.

        Args:
            path (Path): The entry to remove.
            directory (bool): Whether the entry is a directory.

        Raises:
            OSError: The last error if the entry could not be removed.
        """
        state = self._newAttemptState()
        while True:
            try:
                self._primitive(directory)(path)
                return
            except OSError as e:
                if self._isGone(e, path):
                    return

                if should_repair(e, self._request.repair_permissions):
                    try:
                        repair_permissions(path, e)
                        return
                    except OSError:
                        # the repair raises the original error, retry as usual
                        pass

                if not state.canRetry(e):
                    raise

                delay = state.nextDelay()
                self._logRetry(path, e, state, delay)
                busy_wait(delay)
                state.advance()
