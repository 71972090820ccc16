# Released under MIT License.
# Copyright (c) 2026 The saferm Developers

"""
Core infrastructure for saferm.

This module collects the foundational utilities used across the saferm
codebase: configuration, error types and error codes, platform detection,
structured logging, and the building blocks of the command-line interface.
"""
