# Released under MIT License.
# Copyright (c) 2026 The saferm Developers

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Self

from saferm_lib.core.common import is_windows_family
from saferm_lib.core.config import CFG
from saferm_lib.core.error import InvalidRequestError

from .backoff import BackoffPolicy, ExponentialBackoff, FixedBackoff


@dataclass(frozen=True)
class RemovalRequest:
    """
    Immutable description of a single removal.

    Attributes:
        path (Path): Path to the file or directory to remove.
        recursive (bool): Whether directories may be removed (with all their contents).
        force (bool): Whether a missing path (or tree member) counts as removed.
        max_retries (int): Number of retries of a leaf operation failing with a retryable error.
        retry_delay (int): Base delay between retries in milliseconds.
        backoff (BackoffPolicy | None): Policy computing the delays between retries.
            Defaults to a fixed delay of `retry_delay` milliseconds.
        repair_permissions (bool): Whether to attempt permission repair on 'EPERM'.
    """

    path: Path
    recursive: bool = False
    force: bool = False
    max_retries: int = 0
    retry_delay: int = 100
    backoff: BackoffPolicy | None = None
    repair_permissions: bool = False

    def __post_init__(self):
        # Path("") would silently become the current directory
        if not os.fspath(self.path):
            raise InvalidRequestError("Path to remove must not be empty.")
        object.__setattr__(self, "path", Path(os.fspath(self.path)))

        for name in ("max_retries", "retry_delay"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidRequestError(
                    f"Option '{name}' must be a non-negative integer, got '{value}'."
                )

        # the backoff always starts from the requested delay
        if self.backoff is None:
            object.__setattr__(self, "backoff", FixedBackoff(self.retry_delay))
        elif self.backoff.base_delay != self.retry_delay:
            object.__setattr__(
                self, "backoff", self.backoff.withBaseDelay(self.retry_delay)
            )


@dataclass(frozen=True)
class Profile:
    """
    Defaults used to construct removal requests.

    The strict profile mirrors a plain 'rm' (no recursion, no retries,
    missing paths are errors) and waits a fixed delay between retries.
    The safe profile removes trees, ignores missing paths, retries on Windows
    and backs off exponentially.
    """

    name: str
    recursive: bool
    force: bool
    max_retries: int
    retry_delay: int
    # None for fixed delays.
    backoff_factor: float | None
    repair_permissions: bool

    @classmethod
    def strict(cls, windows: bool | None = None) -> Self:
        """
        Construct the strict profile.

        Args:
            windows (bool | None): Whether to use Windows defaults.
                If None, the current platform is detected.
        """
        if windows is None:
            windows = is_windows_family()

        settings = CFG.strict
        return cls(
            name="strict",
            recursive=settings.recursive,
            force=settings.force,
            max_retries=settings.max_retries,
            retry_delay=settings.retry_delay,
            backoff_factor=None,
            repair_permissions=windows,
        )

    @classmethod
    def safe(cls, windows: bool | None = None) -> Self:
        """
        Construct the safe profile.

        Args:
            windows (bool | None): Whether to use Windows defaults.
                If None, the current platform is detected.
        """
        if windows is None:
            windows = is_windows_family()

        settings = CFG.safe
        return cls(
            name="safe",
            recursive=settings.recursive,
            force=settings.force,
            max_retries=settings.max_retries_windows
            if windows
            else settings.max_retries_posix,
            retry_delay=settings.retry_delay,
            backoff_factor=settings.backoff_factor,
            repair_permissions=windows,
        )

    def buildRequest(
        self,
        path: str | os.PathLike[str],
        recursive: bool | None = None,
        force: bool | None = None,
        max_retries: int | None = None,
        retry_delay: int | None = None,
    ) -> RemovalRequest:
        """
        Construct a removal request using the profile's defaults for unspecified options.

        Raises:
            InvalidRequestError: If `path` is empty or `max_retries` or `retry_delay`
                is not a non-negative integer.
        """
        retry_delay = self.retry_delay if retry_delay is None else retry_delay
        if self.backoff_factor is None:
            backoff = None
        else:
            backoff = ExponentialBackoff(retry_delay, self.backoff_factor)

        return RemovalRequest(
            path=path,
            recursive=self.recursive if recursive is None else recursive,
            force=self.force if force is None else force,
            max_retries=self.max_retries if max_retries is None else max_retries,
            retry_delay=retry_delay,
            backoff=backoff,
            repair_permissions=self.repair_permissions,
        )
