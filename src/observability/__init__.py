"""Observability primitives for handled notices.

This package provides a small foundation for:
- Recording diagnostic messages, decode errors, and skipped input as records.
- Capturing both the notice timestamp and the "logged at" time.
- Writing records to a sink (console lines by default, DuckDB for persistence).
"""

from .models import DiagnosticRecord
from .recorder import DiagnosticRecorder
from .sinks import (
    ConsoleDiagnosticSink,
    DiagnosticSink,
    DuckDBDiagnosticSink,
    InMemoryDiagnosticSink,
    build_sink,
    format_line,
)

__all__ = [
    "ConsoleDiagnosticSink",
    "DiagnosticRecord",
    "DiagnosticRecorder",
    "DiagnosticSink",
    "DuckDBDiagnosticSink",
    "InMemoryDiagnosticSink",
    "build_sink",
    "format_line",
]
