"""Errors raised by Huaci commands.

Every command either fully succeeds or raises exactly one of these errors.
Nothing is retried.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass
class HuaciError(Exception):
    """Base class for all errors reported to the surrounding application."""

    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class ConfigIOError(HuaciError):
    """Configuration file cannot be read, written, or copied."""

    path: Path | None = None


@dataclass
class ConfigNotFound(ConfigIOError):
    """Configuration file does not exist and cannot be bootstrapped."""


@dataclass
class ConfigParseError(HuaciError):
    """Configuration file is not a valid TOML document."""

    path: Path | None = None


@dataclass
class ConfigSchemaError(HuaciError):
    """Configuration document does not have the required structure."""

    key: str = ""


class MissingConfigKey(ConfigSchemaError):
    """Required key is absent from the configuration document."""


class InvalidConfigValue(ConfigSchemaError):
    """Required key is present, but its value is not a string."""


class LockError(HuaciError):
    """Shared state guard cannot be acquired."""


class DatabaseError(HuaciError):
    """Dictionary database cannot be opened or queried."""


class UnsupportedPlatform(HuaciError):
    """Shell passthrough is not available on the current platform."""


class ShellError(HuaciError):
    """Shell passthrough command failed to start."""
