"""Diagnostic sinks for non-fatal findings."""

from .diagnostics import (
    LEVELS,
    Diagnostic,
    DiagnosticCollector,
    DiagnosticSink,
    JsonlDiagnosticLog,
    StreamDiagnosticSink,
    TeeDiagnosticSink,
    emit,
    make_diagnostic,
    utc_timestamp,
)

__all__ = [
    "LEVELS",
    "Diagnostic",
    "DiagnosticCollector",
    "DiagnosticSink",
    "JsonlDiagnosticLog",
    "StreamDiagnosticSink",
    "TeeDiagnosticSink",
    "emit",
    "make_diagnostic",
    "utc_timestamp",
]
