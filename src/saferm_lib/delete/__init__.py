# Released under MIT License.
# Copyright (c) 2026 The saferm Developers

"""
Removal of paths given on the command line.

This module provides the `Deleter` class, which removes a list of paths
using a removal profile, reporting paths that could not be removed without
interrupting the removal of the others, and the `rm` command using the
strict profile.
"""

from .deleter import Deleter

__all__ = [
    "Deleter",
]
