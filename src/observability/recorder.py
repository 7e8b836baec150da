"""Recorder that turns diagnostics into records and writes them to a sink."""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Any

from diagnostics import DiagnosticMessage, ErrorRecord, RFC3339
from diagnostics.errors import DEFAULT_MAX_CAUSE_DEPTH

from .models import DiagnosticRecord, RecordKind, utc_now
from .sinks import DiagnosticSink


class DiagnosticRecorder:
    """Writes records synchronously; sink failures are counted, never raised."""

    def __init__(self, *, sink: DiagnosticSink, max_cause_depth: int = DEFAULT_MAX_CAUSE_DEPTH) -> None:
        """Create a recorder backed by a synchronous sink.

        Args:
            sink: Storage backend for records.
            max_cause_depth: Depth limit when rendering error cause chains.
        """
        self._sink = sink
        self._max_cause_depth = max_cause_depth
        self._lock = threading.Lock()
        self._closed = False

        # Degradation tracking: counts and time window.
        self._write_failures = 0
        self._first_failure_at: datetime | None = None
        self._last_failure_at: datetime | None = None

    def record_message(self, message: DiagnosticMessage, *, notice_type: str | None = None) -> None:
        """Record a diagnostic message derived from a notice."""
        self._write(
            DiagnosticRecord(
                kind="diagnostic",
                notice_type=notice_type,
                message=message.message,
                timestamp=message.timestamp,
            )
        )

    def record_error(
        self,
        error: ErrorRecord,
        *,
        notice_type: str | None = None,
        timestamp: str | None = None,
    ) -> None:
        """Record an error with its full descriptive rendering."""
        self._write(
            DiagnosticRecord(
                kind="error",
                notice_type=notice_type,
                message=error.describe(max_depth=self._max_cause_depth),
                timestamp=timestamp or RFC3339.now(),
                error_domain=error.domain,
                error_code=error.code,
            )
        )

    def record_skipped(self, reason: str) -> None:
        """Record input that was valid JSON but not a notice."""
        self._write(self._plain_record("skipped", f"Not a notice: {reason}"))

    def close(self) -> None:
        """Close the sink. Safe to call multiple times."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            try:
                self._sink.close()
            except Exception:  # noqa: BLE001 - diagnostics must not crash the host
                self._note_failure()

    def degraded_status(self) -> dict[str, Any]:
        """Return a minimal degraded-status snapshot."""
        with self._lock:
            return {
                "write_failures": self._write_failures,
                "first_failure_at": self._first_failure_at,
                "last_failure_at": self._last_failure_at,
            }

    def _plain_record(self, kind: RecordKind, message: str) -> DiagnosticRecord:
        return DiagnosticRecord(kind=kind, message=message, timestamp=RFC3339.now())

    def _write(self, record: DiagnosticRecord) -> None:
        # Held across the sink call so `close` never lands in the middle of a write.
        with self._lock:
            if self._closed:
                return
            try:
                self._sink.write(record)
            except Exception:  # noqa: BLE001 - diagnostics must not crash the host
                self._note_failure()

    def _note_failure(self) -> None:
        """Update the degraded-status window. Caller holds `self._lock`."""
        now = utc_now()
        self._write_failures += 1
        self._first_failure_at = self._first_failure_at or now
        self._last_failure_at = now
