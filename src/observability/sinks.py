"""Diagnostic sinks (storage backends)."""

from __future__ import annotations

import sys
import threading
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, TextIO

import duckdb

from .models import DiagnosticRecord

if TYPE_CHECKING:
    from config import DiagnosticsConfig


def format_line(record: DiagnosticRecord) -> str:
    """Assemble the final log line: `[timestamp] message`."""
    return f"[{record.timestamp}] {record.message}"


class DiagnosticSink(Protocol):
    """A synchronous sink for diagnostic records."""

    def write(self, record: DiagnosticRecord) -> None:
        """Persist a single record."""

    def close(self) -> None:
        """Close any underlying resources."""


class InMemoryDiagnosticSink:
    """In-memory sink for tests and local debugging."""

    def __init__(self) -> None:
        """Create an empty in-memory sink."""
        self._lock = threading.Lock()
        self._records: list[DiagnosticRecord] = []

    def write(self, record: DiagnosticRecord) -> None:
        """Append a record to the in-memory list (thread-safe)."""
        with self._lock:
            self._records.append(record)

    def close(self) -> None:  # noqa: D401 - keep interface consistent
        """No-op."""

    def snapshot(self) -> Sequence[DiagnosticRecord]:
        """Return a point-in-time copy of all recorded entries."""
        with self._lock:
            return list(self._records)


class ConsoleDiagnosticSink:
    """Writes one human-readable line per record to a text stream."""

    def __init__(self, stream: TextIO | None = None) -> None:
        """Write to `stream` (defaults to stdout, resolved at write time)."""
        self._stream = stream
        self._lock = threading.Lock()

    def write(self, record: DiagnosticRecord) -> None:
        stream = self._stream or sys.stdout
        with self._lock:
            stream.write(format_line(record) + "\n")

    def close(self) -> None:
        """Flush the stream; the caller owns (and closes) it."""
        stream = self._stream or sys.stdout
        with self._lock:
            stream.flush()


@dataclass(frozen=True)
class DuckDBOptions:
    path: Path
    table: str = "diagnostic_records"


class DuckDBDiagnosticSink:
    """DuckDB sink for durable local persistence."""

    def __init__(self, *, path: str | Path, table: str = "diagnostic_records") -> None:
        """Create (or open) a DuckDB-backed sink at the given path."""
        self._opts = DuckDBOptions(path=Path(path), table=table)
        self._lock = threading.Lock()
        self._conn = duckdb.connect(str(self._opts.path))
        self._ensure_schema()

    def _ensure_schema(self) -> None:
        """Create the backing table if it does not exist yet."""
        create_sql = f"""
        create table if not exists {self._opts.table} (
          logged_at timestamptz not null,
          timestamp varchar not null,
          kind varchar not null,
          notice_type varchar,
          message varchar not null,
          error_domain varchar,
          error_code integer
        )
        """
        with self._lock:
            self._conn.execute(create_sql)

    def write(self, record: DiagnosticRecord) -> None:
        """Insert a single record into DuckDB.

        The notice timestamp is kept as text: it is opaque and may not parse.
        """
        insert_sql = f"""
        insert into {self._opts.table}
        (logged_at, timestamp, kind, notice_type, message, error_domain, error_code)
        values (?, ?, ?, ?, ?, ?, ?)
        """
        with self._lock:
            self._conn.execute(
                insert_sql,
                [
                    record.logged_at,
                    record.timestamp,
                    record.kind,
                    record.notice_type,
                    record.message,
                    record.error_domain,
                    record.error_code,
                ],
            )

    def fetch_messages(self) -> list[tuple[str, str, str]]:
        """Return `(kind, timestamp, message)` rows in insertion order."""
        with self._lock:
            rows = self._conn.execute(
                f"select kind, timestamp, message from {self._opts.table} order by rowid"
            ).fetchall()
        return [(str(kind), str(ts), str(msg)) for kind, ts, msg in rows]

    def close(self) -> None:
        """Close the underlying DuckDB connection."""
        with self._lock:
            self._conn.close()


def build_sink(config: DiagnosticsConfig, *, stream: TextIO | None = None) -> DiagnosticSink:
    """Create the sink selected by configuration."""
    if config.sink == "memory":
        return InMemoryDiagnosticSink()
    if config.sink == "duckdb":
        return DuckDBDiagnosticSink(path=config.db_path, table=config.table)
    return ConsoleDiagnosticSink(stream)
