"""Exception types shared across ncmpy."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class NcmpyError(Exception):
    """Base class for ncmpy errors."""


class ConfigError(NcmpyError):
    """A configuration source could not be turned into runtime data."""


class ConfigIOError(ConfigError):
    """A configuration file could not be opened or read."""

    def __init__(self, path: Path, cause: Exception) -> None:
        reason = getattr(cause, "strerror", None) or cause
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path
        self.cause = cause


class ConfigParseError(ConfigError):
    """Malformed DSL input, with the 1-based position of the failure."""

    def __init__(
        self,
        message: str,
        *,
        line: int,
        column: int,
        source: Optional[str] = None,
    ) -> None:
        where = f"{source}:" if source else ""
        super().__init__(f"{where}{line}:{column}: {message}")
        self.message = message
        self.line = line
        self.column = column
        self.source = source


class UnknownKeyError(NcmpyError, ValueError):
    """A key name is not part of the key vocabulary."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unrecognized key name: {name!r}")
        self.name = name


class ClientError(NcmpyError):
    """The playback daemon rejected a command or is unreachable."""
