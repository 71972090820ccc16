# Released under MIT License.
# Copyright (c) 2026 The saferm Developers

import os
import sys

from .config import CFG

# OSTYPE values reported by POSIX-like shells running on Windows.
_WINDOWS_OSTYPES = ("msys", "cygwin")


def is_windows_family(platform: str | None = None, ostype: str | None = None) -> bool:
    """
    Check whether saferm is running on the Windows platform family.

    Both native Windows and POSIX emulation layers running on Windows
    (msys, cygwin) are considered part of the family.

    Args:
        platform (str | None): Platform identifier. Defaults to `sys.platform`.
        ostype (str | None): Shell-reported OS type. Defaults to the value of the OSTYPE
            environment variable.

    Returns:
        bool: True if the platform belongs to the Windows family.
    """
    if platform is None:
        platform = sys.platform
    if ostype is None:
        ostype = os.environ.get(CFG.env_vars.ostype, "")

    return platform == "win32" or ostype in _WINDOWS_OSTYPES


def format_milliseconds(ms: int) -> str:
    """Format a delay in milliseconds for log messages."""
    if ms < 1000:
        return f"{ms} ms"
    return f"{ms / 1000:g} s"
