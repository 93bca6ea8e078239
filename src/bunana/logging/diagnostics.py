"""Structured diagnostics emitted while analyzing bundles."""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol, TextIO

LEVELS = ("debug", "warning", "error")


@dataclass(slots=True, frozen=True)
class Diagnostic:
    """Single non-fatal finding reported during a run."""

    timestamp: str
    level: str
    code: str
    source: str | None
    message: str
    details: dict[str, object] = field(default_factory=dict)


def utc_timestamp() -> str:
    """Return an ISO-8601 UTC timestamp."""
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def make_diagnostic(
    level: str,
    code: str,
    message: str,
    source: str | None = None,
    details: dict[str, object] | None = None,
) -> Diagnostic:
    """Build a timestamped diagnostic, validating its level."""
    if level not in LEVELS:
        raise ValueError(f"Diagnostic level must be one of {', '.join(LEVELS)}.")
    return Diagnostic(
        timestamp=utc_timestamp(),
        level=level,
        code=code,
        source=source,
        message=message,
        details=dict(details or {}),
    )


class DiagnosticSink(Protocol):
    """Receiver for diagnostics supplied by the caller."""

    def emit(self, diagnostic: Diagnostic) -> None:
        """Record one diagnostic."""


class DiagnosticCollector:
    """In-memory sink keeping diagnostics in emission order."""

    def __init__(self) -> None:
        self._items: list[Diagnostic] = []

    def emit(self, diagnostic: Diagnostic) -> None:
        self._items.append(diagnostic)

    @property
    def items(self) -> tuple[Diagnostic, ...]:
        return tuple(self._items)

    def codes(self) -> list[str]:
        return [item.code for item in self._items]

    def count(self, level: str) -> int:
        return sum(1 for item in self._items if item.level == level)


class StreamDiagnosticSink:
    """Write one readable line per diagnostic at or above ``min_level``."""

    def __init__(self, stream: TextIO, min_level: str = "warning") -> None:
        if min_level not in LEVELS:
            raise ValueError(f"Diagnostic level must be one of {', '.join(LEVELS)}.")
        self._stream = stream
        self._threshold = LEVELS.index(min_level)

    def emit(self, diagnostic: Diagnostic) -> None:
        if LEVELS.index(diagnostic.level) < self._threshold:
            return
        source = f" {diagnostic.source}:" if diagnostic.source else ""
        self._stream.write(f"{diagnostic.level}: [{diagnostic.code}]{source} {diagnostic.message}\n")


class TeeDiagnosticSink:
    """Forward every diagnostic to each wrapped sink in order."""

    def __init__(self, sinks: Iterable[DiagnosticSink]) -> None:
        self._sinks = tuple(sinks)

    def emit(self, diagnostic: Diagnostic) -> None:
        for sink in self._sinks:
            sink.emit(diagnostic)


class JsonlDiagnosticLog:
    """Append-only JSONL diagnostic log."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        """Return on-disk JSONL path."""
        return self._path

    def emit(self, diagnostic: Diagnostic) -> None:
        """Append the diagnostic as one JSON object per line."""
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(asdict(diagnostic), sort_keys=True, default=str))
            handle.write("\n")


def emit(
    sink: DiagnosticSink | None,
    level: str,
    code: str,
    message: str,
    source: str | None = None,
    details: dict[str, object] | None = None,
) -> None:
    """Emit a diagnostic when a sink was supplied."""
    if sink is None:
        return
    sink.emit(make_diagnostic(level, code, message, source=source, details=details))
