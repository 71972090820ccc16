# Released under MIT License.
# Copyright (c) 2026 The saferm Developers

"""
The resilient removal engine of saferm.

The engine removes a single file or a whole directory tree. Errors raised by
the filesystem are classified (`classify`): missing entries are ignored when
`force` is requested, transient failures are retried with a fixed or an
exponential backoff (`backoff`), and on Windows entries refusing removal with
'EPERM' get one permission repair (`repair`) before being retried.

The same algorithm is provided in two execution modes sharing all of the above:
`Remover` performs every step on the calling thread and busy-waits between
retries, while `AsyncRemover` dispatches filesystem operations to an executor,
removes the children of a directory concurrently, and reports the first error
of a directory walk exactly once.
"""

from .backoff import BackoffPolicy, ExponentialBackoff, FixedBackoff, busy_wait
from .blocking import Remover
from .classify import RETRYABLE_CODES, ErrorClass, classify, is_retryable
from .nonblocking import AsyncRemover
from .request import Profile, RemovalRequest

__all__ = [
    "AsyncRemover",
    "BackoffPolicy",
    "ErrorClass",
    "ExponentialBackoff",
    "FixedBackoff",
    "Profile",
    "RETRYABLE_CODES",
    "RemovalRequest",
    "Remover",
    "busy_wait",
    "classify",
    "is_retryable",
]
