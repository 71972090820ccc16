# Released under MIT License.
# Copyright (c) 2026 The saferm Developers

from enum import Enum

from saferm_lib.core.error import IllegalOnDirectoryError, error_code

# Codes of transient failures that are worth retrying.
RETRYABLE_CODES = frozenset({"EBUSY", "EMFILE", "ENFILE", "ENOTEMPTY", "EPERM"})

NOT_FOUND_CODE = "ENOENT"


class ErrorClass(Enum):
    """
    Classification of a filesystem error.
    """

    NOT_FOUND = 1
    ILLEGAL_ON_DIRECTORY = 2
    RETRYABLE = 3
    FATAL = 4

    def __str__(self) -> str:
        """
        Return the lowercase string representation of the enum variant.

        Returns:
            str: The name of the class in lowercase, with spaces instead of underscores.
        """
        return self.name.lower().replace("_", " ")


def classify(error: BaseException) -> ErrorClass:
    """
    Classify an error raised by a filesystem operation.

    Only errors synthesized by saferm for directories targeted without
    the recursive flag are classified as ILLEGAL_ON_DIRECTORY. An 'EISDIR'
    reported by the operating system itself is FATAL.

    Args:
        error (BaseException): The error to classify.

    Returns:
        ErrorClass: The class of the error.
    """
    if isinstance(error, IllegalOnDirectoryError):
        return ErrorClass.ILLEGAL_ON_DIRECTORY

    code = error_code(error)
    if code == NOT_FOUND_CODE:
        return ErrorClass.NOT_FOUND
    if code in RETRYABLE_CODES:
        return ErrorClass.RETRYABLE

    return ErrorClass.FATAL


def is_retryable(error: object) -> bool:
    """Check whether `error` is an exception with a retryable error code."""
    if not isinstance(error, BaseException):
        return False
    return classify(error) is ErrorClass.RETRYABLE


def is_gone(error: BaseException, force: bool) -> bool:
    """
    Check whether a failure means the entry is already gone and may be ignored.

    Missing entries are only ignored if `force` is requested.
    """
    return force and classify(error) is ErrorClass.NOT_FOUND
