# Released under MIT License.
# Copyright (c) 2026 The saferm Developers

import asyncio
import os
import stat
from collections.abc import Callable
from concurrent.futures import Executor
from pathlib import Path
from typing import Any

from saferm_lib.core.logger import get_logger

from .base import BaseRemover
from .outcome import WalkOutcome
from .repair import repair_permissions, should_repair
from .request import RemovalRequest

logger = get_logger(__name__)


class AsyncRemover(BaseRemover):
    """
    Removes a file or a directory tree without blocking the event loop.

    Filesystem operations are dispatched to an executor. All children of
    a directory are removed concurrently and the directory itself is removed
    once every child has settled. Waits between retries are scheduled on
    the event loop.

    Attributes:
        _executor (Executor | None): Executor running the filesystem operations.
            None for the default executor of the event loop.
        _in_flight (set[asyncio.Task]): Child removals that have not finished yet.
    """

    def __init__(self, request: RemovalRequest, executor: Executor | None = None):
        super().__init__(request)
        self._executor = executor
        self._in_flight: set[asyncio.Task] = set()

    async def remove(self) -> None:
        """
        Remove the target of the request.

        Raises:
            FileNotFoundError: If the target does not exist and `force` is not set.
            IllegalOnDirectoryError: If the target is a directory and `recursive` is not set.
            OSError: The first error encountered if any entry could not be removed.
        """
        path = self._request.path
        logger.debug(f"Removing '{path}'.")

        try:
            st = await self._run(os.lstat, path)
        except OSError as e:
            if self._isGone(e, path):
                return
            raise

        if self._shouldWalk(st):
            await self.walk(path)
        else:
            await self.removeEntry(path, directory=False)

    async def walk(self, directory: Path) -> None:
        """
        Remove all contents of `directory` and then the directory itself.

        If any child fails, the first error is raised exactly once and the directory
        is left in place. Children that are still being removed at that point
        run to completion and their results are discarded.
        """
        try:
            names = await self._run(os.listdir, directory)
        except OSError as e:
            if self._isGone(e, directory):
                return
            raise

        if names:
            await self._removeChildren(directory, names)

        await self.removeEntry(directory, directory=True)

    async def removeEntry(self, path: Path, directory: bool) -> None:
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
                await self._run(self._primitive(directory), path)
                return
            except OSError as e:
                if self._isGone(e, path):
                    return

                if should_repair(e, self._request.repair_permissions):
                    try:
                        await self._run(repair_permissions, path, e)
                        return
                    except OSError:
                        # the repair raises the original error, retry as usual
                        pass

                if not state.canRetry(e):
                    raise

                delay = state.nextDelay()
                self._logRetry(path, e, state, delay)
                await asyncio.sleep(delay / 1000)
                state.advance()

    async def _removeChildren(self, directory: Path, names: list[str]) -> None:
        """
        Remove all listed children of `directory` concurrently.

        Completes when all children are removed or as soon as the first child fails.
        """
        loop = asyncio.get_running_loop()
        done = loop.create_future()
        outcome = WalkOutcome(pending=len(names))

        def settle(task: asyncio.Task) -> None:
            self._in_flight.discard(task)
            if task.cancelled():
                error: BaseException | None = asyncio.CancelledError()
            else:
                # retrieving the exception also marks it as handled
                error = task.exception()

            if not outcome.settle(error):
                if error is not None:
                    logger.debug(f"Discarding a later error in '{directory}': {error}.")
                return

            if done.done():
                return
            if error is None:
                done.set_result(None)
            elif task.cancelled():
                done.cancel()
            else:
                done.set_exception(error)

        for name in names:
            task = loop.create_task(self._removeChild(directory / name))
            self._in_flight.add(task)
            task.add_done_callback(settle)

        await done

    async def _removeChild(self, path: Path) -> None:
        """Remove a single child of a directory being walked."""
        try:
            st = await self._run(os.lstat, path)
        except OSError as e:
            if self._isGone(e, path):
                return
            raise

        if stat.S_ISDIR(st.st_mode):
            await self.walk(path)
        else:
            await self.removeEntry(path, directory=False)

    async def _run(self, func: Callable[..., Any], *args: Any) -> Any:
        """Run a blocking filesystem operation in the executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, func, *args)
