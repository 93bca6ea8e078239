"""Exception types shared across the analyzer."""

from __future__ import annotations

from pathlib import Path


class BunanaError(Exception):
    """Base class for fatal analyzer errors."""


class ManifestError(BunanaError):
    """Raised when bundle manifest headers are malformed."""

    def __init__(self, reason: str, header: str | None = None) -> None:
        message = f"{header}: {reason}" if header is not None else reason
        super().__init__(message)
        self.reason = reason
        self.header = header


class FilterSyntaxError(ValueError):
    """Raised when an LDAP-style filter string cannot be parsed."""

    def __init__(self, reason: str, text: str, position: int) -> None:
        super().__init__(f"{reason} at position {position} in filter {text!r}")
        self.reason = reason
        self.text = text
        self.position = position


class ScanError(BunanaError):
    """Raised when a module archive or directory cannot be read."""

    def __init__(self, reason: str, path: Path) -> None:
        super().__init__(f"{path}: {reason}")
        self.reason = reason
        self.path = path
