# Released under MIT License.
# Copyright (c) 2026 The saferm Developers

"""
Configuration system for saferm.

This module defines dataclasses representing all configurable aspects of saferm,
including environment variables, the defaults of the strict and safe removal
profiles, the permission repair settings, and exit codes.

The `Config` class loads user configuration from a TOML file (if available)
and provides a globally accessible `CFG` instance.
"""

import os
import tomllib
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Self


@dataclass
class EnvironmentVariables:
    """Environment variable names used by saferm."""

    # Enables saferm debug mode.
    debug_mode: str = "SAFERM_DEBUG"
    # Explicit path to the saferm config file.
    config: str = "SAFERM_CONFIG"
    # Shell-reported OS type (used to detect msys and cygwin on Windows).
    ostype: str = "OSTYPE"


@dataclass
class StrictProfileSettings:
    """Defaults of the strict removal profile."""

    # Remove directories recursively.
    recursive: bool = False
    # Ignore missing paths.
    force: bool = False
    # Number of retries of a single failed leaf operation.
    max_retries: int = 0
    # Delay (in milliseconds) between retries.
    retry_delay: int = 100


@dataclass
class SafeProfileSettings:
    """Defaults of the safe removal profile."""

    # Remove directories recursively.
    recursive: bool = True
    # Ignore missing paths.
    force: bool = True
    # Number of retries of a single failed leaf operation on Windows.
    max_retries_windows: int = 10
    # Number of retries of a single failed leaf operation elsewhere.
    max_retries_posix: int = 0
    # Base delay (in milliseconds) of the exponential backoff.
    retry_delay: int = 100
    # Multiplicative factor of the exponential backoff.
    backoff_factor: float = 1.2


@dataclass
class RepairSettings:
    """Settings for the Windows permission repair."""

    # Permissions set on an entry before it is removed again.
    mode: int = 0o666


@dataclass
class DateFormats:
    """Date and time format strings."""

    # Standard date format used by saferm.
    standard: str = "%Y-%m-%d %H:%M:%S"


@dataclass
class ExitCodes:
    """Exit codes used for various errors."""

    # Default error code for failed removals.
    default: int = 91
    # Returned on an unexpected or unhandled error.
    unexpected_error: int = 99


@dataclass
class Config:
    """Main configuration for saferm."""

    env_vars: EnvironmentVariables = field(default_factory=EnvironmentVariables)
    strict: StrictProfileSettings = field(default_factory=StrictProfileSettings)
    safe: SafeProfileSettings = field(default_factory=SafeProfileSettings)
    repair: RepairSettings = field(default_factory=RepairSettings)
    date_formats: DateFormats = field(default_factory=DateFormats)
    exit_codes: ExitCodes = field(default_factory=ExitCodes)

    # Name of the saferm binary.
    binary_name: str = "saferm"

    @classmethod
    def load(cls, config_path: Path | None = None) -> Self:
        """
        Load configuration from TOML file or use defaults.

        Args:
            config_path: Explicit path to config file. If None, searches standard locations.

        Returns:
            Config instance with loaded or default values.
        """
        if config_path is None:
            config_path = Config._get_config_path()

        try:
            if config_path and config_path.exists():
                with config_path.open("rb") as f:
                    config_data = tomllib.load(f)
                return _dict_to_dataclass(cls, config_data)
        except Exception as e:
            raise ValueError(f"Could not read saferm config '{config_path}': {e}.")

        # no config found - use defaults
        return cls()

    @staticmethod
    def _get_config_path() -> Path | None:
        """
        Search for config file in standard locations (XDG compliant).
        Returns the first existing config file, or None.
        """
        config_locations: list[Path | None] = [
            # 1. Explicit environment variable (highest priority)
            Path(env_path) if (env_path := os.getenv("SAFERM_CONFIG")) else None,
            # 2. Current working directory (for development/override)
            Path.cwd() / "saferm_config.toml",
            # 3. XDG config home (standard user config location)
            Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
            / "saferm"
            / "config.toml",
        ]

        for path in config_locations:
            if path and path.is_file():
                return path

        return None


def _dict_to_dataclass(cls, data: dict[str, Any]):
    """
    Recursively convert a dictionary to a dataclass instance.
    Handles nested dataclasses properly.
    """
    if not is_dataclass(cls):
        return data

    field_values = {}
    for field_info in fields(cls):
        field_name = field_info.name
        field_type = field_info.type

        if field_name in data:
            value = data[field_name]
            if is_dataclass(field_type) and isinstance(value, dict):
                field_values[field_name] = _dict_to_dataclass(field_type, value)
            else:
                field_values[field_name] = value

    return cls(**field_values)


# Global configuration for saferm.
CFG = Config.load()
