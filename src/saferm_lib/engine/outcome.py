# Released under MIT License.
# Copyright (c) 2026 The saferm Developers

from dataclasses import dataclass, field


class FirstErrorLatch:
    """
    Set-once cell holding the first error of a directory walk.

    Only the first call to `latch` stores its error; all later calls are ignored.
    """

    def __init__(self):
        self._error: BaseException | None = None

    def latch(self, error: BaseException) -> bool:
        """
        Store `error` unless an error has already been stored.

        Returns:
            bool: True if `error` was stored, False if another error came first.
        """
        if self._error is not None:
            return False
        self._error = error
        return True

    @property
    def error(self) -> BaseException | None:
        """The stored error, if any."""
        return self._error

    def isSet(self) -> bool:
        return self._error is not None


@dataclass
class WalkOutcome:
    """
    Progress of the removal of the children of a single directory.

    Attributes:
        pending (int): Number of children that have not settled yet.
        first_error (FirstErrorLatch): The first error reported by any child.
    """

    pending: int
    first_error: FirstErrorLatch = field(default_factory=FirstErrorLatch)

    def settle(self, error: BaseException | None = None) -> bool:
        """
        Record the terminal result of one child.

        Args:
            error (BaseException | None): The error of the child, None on success.

        Returns:
            bool: True if this result completes the walk, i.e. it is either
            the first error or the last pending success. Every later result
            returns False.
        """
        if self.first_error.isSet():
            return False

        if error is not None:
            return self.first_error.latch(error)

        self.pending -= 1
        return self.pending == 0
