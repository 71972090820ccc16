# Released under MIT License.
# Copyright (c) 2026 The saferm Developers

"""
Delays between repeated attempts of a failed leaf operation.

Delays are always expressed in whole milliseconds.
"""

import math
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Self

# Multiplicative factor of the exponential backoff.
BACKOFF_FACTOR = 1.2


@dataclass(frozen=True)
class BackoffPolicy(ABC):
    """
    Computes the delay before the next attempt of a failed operation.

    Attributes:
        base_delay (int): The base delay in milliseconds.
    """

    base_delay: int

    @abstractmethod
    def delay(self, attempt: int) -> int:
        """
        Get the delay preceding the next try.

        Args:
            attempt (int): Index of the failed attempt (0 for the first try).

        Returns:
            int: The delay in milliseconds.
        """
        pass

    def withBaseDelay(self, base_delay: int) -> Self:
        """Return a policy of the same kind with a different base delay."""
        return replace(self, base_delay=base_delay)


@dataclass(frozen=True)
class FixedBackoff(BackoffPolicy):
    """Waits the same base delay before every retry."""

    def delay(self, attempt: int) -> int:
        return self.base_delay


@dataclass(frozen=True)
class ExponentialBackoff(BackoffPolicy):
    """
    Multiplies the base delay by `factor` for every failed attempt.

    The delay is truncated, not rounded: `floor(base_delay * factor ** attempt)`.
    """

    factor: float = BACKOFF_FACTOR

    def delay(self, attempt: int) -> int:
        return math.floor(self.base_delay * self.factor**attempt)


def busy_wait(ms: int) -> None:
    """
    Block the calling thread for `ms` milliseconds by polling a deadline.

    Does not yield to any scheduler.
    """
    deadline = time.monotonic() + ms / 1000
    while time.monotonic() < deadline:
        pass
