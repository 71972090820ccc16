# Released under MIT License.
# Copyright (c) 2026 The saferm Developers

"""
Public functions removing files and directory trees.

Two profiles are provided. The strict functions (`rm`, `rm_sync`,
`rm_with_callback`) behave like a plain 'rm': directories are only removed
with `recursive=True`, missing paths are errors and nothing is retried unless
requested. The safe functions (`safe_rm`, `safe_rm_sync`,
`safe_rm_with_callback`) remove trees, ignore missing paths, retry transient
failures on Windows and back off exponentially between retries.

Every profile is available as a blocking function, a coroutine, and
a function delivering the outcome to a callback.
"""

import asyncio
import os
from collections.abc import Callable, Coroutine
from typing import Any

from saferm_lib.engine.blocking import Remover
from saferm_lib.engine.nonblocking import AsyncRemover
from saferm_lib.engine.request import Profile

# Receives None on success or the error of a failed removal.
RemovalCallback = Callable[[BaseException | None], Any]

PathType = str | os.PathLike[str]


def rm_sync(
    path: PathType,
    *,
    recursive: bool | None = None,
    force: bool | None = None,
    max_retries: int | None = None,
    retry_delay: int | None = None,
) -> None:
    """
    Remove a file or a directory using the strict profile, blocking until done.

    Args:
        path (str | PathLike): Path to remove.
        recursive (bool | None): Remove directories with all their contents. Defaults to False.
        force (bool | None): Ignore missing paths. Defaults to False.
        max_retries (int | None): Retries of a leaf operation failing with
            a transient error. Defaults to 0.
        retry_delay (int | None): Delay between retries in milliseconds. Defaults to 100.

    Raises:
        FileNotFoundError: If the path does not exist and `force` is not set.
        IllegalOnDirectoryError: If the path is a directory and `recursive` is not set.
        InvalidRequestError: If `max_retries` or `retry_delay` is invalid.
        OSError: If the path could not be removed.
    """
    request = Profile.strict().buildRequest(
        path, recursive, force, max_retries, retry_delay
    )
    Remover(request).remove()


def safe_rm_sync(
    path: PathType,
    *,
    recursive: bool | None = None,
    force: bool | None = None,
    max_retries: int | None = None,
    retry_delay: int | None = None,
) -> None:
    """
    Remove a file or a directory using the safe profile, blocking until done.

    Defaults to `recursive=True`, `force=True`, `retry_delay=100` and ten
    retries on Windows (none elsewhere), backing off exponentially.
    See `rm_sync` for the meaning of the arguments and the raised errors.
    """
    request = Profile.safe().buildRequest(
        path, recursive, force, max_retries, retry_delay
    )
    Remover(request).remove()


async def rm(
    path: PathType,
    *,
    recursive: bool | None = None,
    force: bool | None = None,
    max_retries: int | None = None,
    retry_delay: int | None = None,
) -> None:
    """
    Remove a file or a directory using the strict profile without blocking the event loop.

    See `rm_sync` for the meaning of the arguments and the raised errors.
    """
    request = Profile.strict().buildRequest(
        path, recursive, force, max_retries, retry_delay
    )
    await AsyncRemover(request).remove()


async def safe_rm(
    path: PathType,
    *,
    recursive: bool | None = None,
    force: bool | None = None,
    max_retries: int | None = None,
    retry_delay: int | None = None,
) -> None:
    """
    Remove a file or a directory using the safe profile without blocking the event loop.

    See `safe_rm_sync` for the defaults and `rm_sync` for the raised errors.
    """
    request = Profile.safe().buildRequest(
        path, recursive, force, max_retries, retry_delay
    )
    await AsyncRemover(request).remove()


def rm_with_callback(
    path: PathType, callback: RemovalCallback, **options: Any
) -> asyncio.Task:
    """
    Schedule a removal using the strict profile and report its outcome to `callback`.

    Must be called from a running event loop. `callback` is called exactly once
    with None on success or with the error of the failed removal.

    Returns:
        asyncio.Task: The scheduled removal.
    """
    loop = asyncio.get_running_loop()
    return _schedule(loop, rm(path, **options), callback)


def safe_rm_with_callback(
    path: PathType, callback: RemovalCallback, **options: Any
) -> asyncio.Task:
    """
    Schedule a removal using the safe profile and report its outcome to `callback`.

    See `rm_with_callback`.
    """
    loop = asyncio.get_running_loop()
    return _schedule(loop, safe_rm(path, **options), callback)


def _schedule(
    loop: asyncio.AbstractEventLoop,
    removal: Coroutine[Any, Any, None],
    callback: RemovalCallback,
) -> asyncio.Task:
    task = loop.create_task(removal)

    def deliver(finished: asyncio.Task) -> None:
        if finished.cancelled():
            callback(asyncio.CancelledError())
        else:
            callback(finished.exception())

    task.add_done_callback(deliver)
    return task
