# Released under MIT License.
# Copyright (c) 2026 The saferm Developers

"""
Exception types and error codes used throughout saferm.

Filesystem failures are reported as the `OSError` raised by the failing
primitive, unchanged. This module only adds the errors saferm raises itself
(invalid requests, removal of a directory without the recursive flag) and
`error_code`, which turns any `OSError` into the platform error code string
that the rest of saferm reasons about.
"""

import errno

from .config import CFG

# Win32 error numbers with a more specific meaning than the `errno`
# Python assigns to them (most of them become EACCES).
_WINERROR_CODES: dict[int, str] = {
    2: "ENOENT",  # ERROR_FILE_NOT_FOUND
    3: "ENOENT",  # ERROR_PATH_NOT_FOUND
    5: "EPERM",  # ERROR_ACCESS_DENIED
    32: "EBUSY",  # ERROR_SHARING_VIOLATION
    33: "EBUSY",  # ERROR_LOCK_VIOLATION
    145: "ENOTEMPTY",  # ERROR_DIR_NOT_EMPTY
}


class SafeRmError(Exception):
    """Common exception type for all errors raised by saferm itself."""

    exit_code = CFG.exit_codes.default


class InvalidRequestError(SafeRmError, ValueError):
    """Raised when a removal request is constructed with invalid options."""

    pass


class IllegalOnDirectoryError(IsADirectoryError, SafeRmError):
    """
    Raised when a directory is targeted without the recursive flag.

    Attributes:
        code (str): Platform error code of the failure. Always 'EISDIR'.
        syscall (str): Label of the operation that failed. Always 'rm'.
        path (str): The offending path.
    """

    code = "EISDIR"
    syscall = "rm"

    def __init__(self, path):
        super().__init__(errno.EISDIR, "illegal operation on a directory", str(path))
        self.path = str(path)

    def __str__(self) -> str:
        return f"{self.code}: illegal operation on a directory, {self.syscall} '{self.path}'"


def error_code(error: BaseException) -> str | None:
    """
    Get the platform error code string of an error.

    Errors carrying an explicit string `code` attribute report it directly.
    For other `OSError`s, Windows errors are translated first and the symbolic
    name of `errno` is used otherwise.

    Args:
        error (BaseException): The error to inspect.

    Returns:
        str | None: The error code (e.g. 'EBUSY'), or None if the error has no code.
    """
    code = getattr(error, "code", None)
    if isinstance(code, str):
        return code

    if not isinstance(error, OSError):
        return None

    winerror = getattr(error, "winerror", None)
    if winerror in _WINERROR_CODES:
        return _WINERROR_CODES[winerror]

    if error.errno is None:
        return None

    return errno.errorcode.get(error.errno)
