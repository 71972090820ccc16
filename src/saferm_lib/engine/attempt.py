# Released under MIT License.
# Copyright (c) 2026 The saferm Developers

from dataclasses import dataclass

from .backoff import BackoffPolicy
from .classify import ErrorClass, classify


@dataclass
class AttemptState:
    """
    Retry bookkeeping of a single leaf operation.

    A leaf operation is tried at most `max_retries + 1` times. The state is created
    for every leaf operation and never shared between entries.
    """

    max_retries: int
    backoff: BackoffPolicy
    # Index of the current try (0 for the first one).
    attempt: int = 0

    def canRetry(self, error: BaseException) -> bool:
        """
        Check whether the operation should be tried again after failing with `error`.

        Only retryable errors are retried and only while attempts remain.
        """
        return (
            classify(error) is ErrorClass.RETRYABLE
            and self.attempt < self.max_retries
        )

    def nextDelay(self) -> int:
        """Get the delay (in milliseconds) preceding the next try."""
        return self.backoff.delay(self.attempt)

    def advance(self) -> None:
        """Move to the next try."""
        self.attempt += 1

    @property
    def description(self) -> str:
        """Human-readable position of the current try."""
        return f"attempt {self.attempt + 1} of {self.max_retries + 1}"
