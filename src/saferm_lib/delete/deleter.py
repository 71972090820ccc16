# Released under MIT License.
# Copyright (c) 2026 The saferm Developers

import asyncio
from pathlib import Path

from saferm_lib.core.error import SafeRmError
from saferm_lib.core.error_handlers import handle_invalid_request, handle_removal_error
from saferm_lib.core.logger import get_logger
from saferm_lib.core.repeater import Repeater
from saferm_lib.engine.blocking import Remover
from saferm_lib.engine.nonblocking import AsyncRemover
from saferm_lib.engine.request import Profile

logger = get_logger(__name__)


class Deleter:
    """
    Removes a list of paths given on the command line.

    Every path is removed with its own request constructed from the same
    profile and options. A path that cannot be removed does not prevent
    the removal of the remaining paths.
    """

    def __init__(
        self,
        paths: list[str | Path],
        profile: Profile,
        recursive: bool | None = None,
        force: bool | None = None,
        max_retries: int | None = None,
        retry_delay: int | None = None,
        use_async: bool = False,
    ):
        """
        Initialize a Deleter.

        Args:
            paths (list[str | Path]): Paths to remove. Paths are used as given;
                an empty path is rejected, never resolved to the current directory.
            profile (Profile): Profile providing the defaults of unspecified options.
            recursive (bool | None): Whether directories may be removed.
            force (bool | None): Whether missing paths are ignored.
            max_retries (int | None): Number of retries of failing leaf operations.
            retry_delay (int | None): Base delay between retries in milliseconds.
            use_async (bool): Whether to use the non-blocking engine.
        """
        self._paths = paths
        self._profile = profile
        self._options = {
            "recursive": recursive,
            "force": force,
            "max_retries": max_retries,
            "retry_delay": retry_delay,
        }
        self._use_async = use_async

    def delete(self) -> dict[int, BaseException]:
        """
        Remove all paths.

        Returns:
            dict[int, BaseException]: Errors of the paths that could not be removed,
            keyed by the index of the path.
        """
        repeater = Repeater(self._paths, self._deletePath)
        repeater.onException(OSError, handle_removal_error)
        repeater.onException(SafeRmError, handle_invalid_request)
        repeater.run()

        removed = len(self._paths) - len(repeater.encountered_errors)
        logger.debug(
            f"Removed {removed} of {len(self._paths)} path{'s' if len(self._paths) > 1 else ''} "
            f"using the {self._profile.name} profile."
        )
        return repeater.encountered_errors

    def _deletePath(self, path: str | Path) -> None:
        """Remove a single path."""
        request = self._profile.buildRequest(path, **self._options)

        if self._use_async:
            asyncio.run(AsyncRemover(request).remove())
        else:
            Remover(request).remove()

        logger.info(f"Removed '{path}'.")
