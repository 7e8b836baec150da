"""Notice handler: the seam between the tunnel engine's notice stream and logging.

Each notice string is parsed, flattened into a diagnostic message, and recorded.
Nothing here raises on bad input: errors are recorded with their descriptive
rendering and handling continues with the next notice.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from typing import Literal

from observability.recorder import DiagnosticRecorder

from .notice import parse_notice
from .results import Err, NoNotice

NoticeOutcome = Literal["diagnostic", "skipped", "error"]


class NoticeHandler:
    """Feeds notice strings into a `DiagnosticRecorder`."""

    def __init__(self, recorder: DiagnosticRecorder, *, record_skipped: bool = False) -> None:
        """Create a handler.

        Args:
            recorder: Destination for diagnostics and errors.
            record_skipped: Also record input that is valid JSON but not a notice.
        """
        self._recorder = recorder
        self._record_skipped = record_skipped
        self._counts: Counter[str] = Counter()

    def handle_notice(self, wire: str | bytes) -> NoticeOutcome:
        """Handle a single notice string and return what happened to it."""
        parsed = parse_notice(wire)
        if isinstance(parsed, Err):
            self._recorder.record_error(parsed.error)
            return self._count("error")
        if isinstance(parsed, NoNotice):
            if self._record_skipped:
                self._recorder.record_skipped(parsed.reason)
            return self._count("skipped")

        notice = parsed.value
        converted = notice.to_diagnostic_message()
        if isinstance(converted, Err):
            self._recorder.record_error(converted.error, notice_type=notice.notice_type, timestamp=notice.timestamp)
            return self._count("error")

        self._recorder.record_message(converted.value, notice_type=notice.notice_type)
        return self._count("diagnostic")

    def handle_many(self, lines: Iterable[str | bytes]) -> list[NoticeOutcome]:
        """Handle notices in order, one per non-blank line."""
        outcomes: list[NoticeOutcome] = []
        for line in lines:
            if not line.strip():
                continue
            outcomes.append(self.handle_notice(line))
        return outcomes

    def stats(self) -> dict[str, int]:
        """Return counts per outcome."""
        return {outcome: self._counts[outcome] for outcome in ("diagnostic", "skipped", "error")}

    def _count(self, outcome: NoticeOutcome) -> NoticeOutcome:
        self._counts[outcome] += 1
        return outcome
