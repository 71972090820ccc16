# Released under MIT License.
# Copyright (c) 2026 The saferm Developers

"""
Reliable removal of files and directory trees.

This package removes a file or a whole directory tree, tolerating transient
failures (locked files, slow antivirus scanners, Windows permission quirks).
The removal engine lives in `saferm_lib.engine`; the functions exported here
(`rm`, `rm_sync`, `safe_rm`, `safe_rm_sync` and their callback variants)
are the library interface and `cli` is the entry point of the `saferm`
command.
"""

from .api import (
    rm,
    rm_sync,
    rm_with_callback,
    safe_rm,
    safe_rm_sync,
    safe_rm_with_callback,
)
from .core.error import IllegalOnDirectoryError, InvalidRequestError, SafeRmError
from .saferm import __version__, cli

__all__ = [
    "__version__",
    "cli",
    "rm",
    "rm_sync",
    "rm_with_callback",
    "safe_rm",
    "safe_rm_sync",
    "safe_rm_with_callback",
    "IllegalOnDirectoryError",
    "InvalidRequestError",
    "SafeRmError",
]
