"""RFC3339 timestamps with millisecond precision.

The format is fixed: `YYYY-MM-DDTHH:MM:SS.mmm+HH:MM`. Output is always written
with offset zero and never goes through `strftime`, so the process locale can't
change it. Parsing is strict: anything that is not exactly this shape is
treated as "no timestamp".
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

_RFC3339_MS = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})\.(\d{3})([+-])(\d{2}):(\d{2})",
    re.ASCII,
)


@dataclass(frozen=True)
class Rfc3339Formatter:
    """Immutable formatter; one instance can be shared by any number of threads."""

    def format(self, instant: datetime) -> str:
        """Format an instant in UTC. Naive datetimes are taken to be UTC already."""
        if instant.tzinfo is None:
            utc = instant
        else:
            utc = instant.astimezone(timezone.utc)
        millis = utc.microsecond // 1000
        return (
            f"{utc.year:04d}-{utc.month:02d}-{utc.day:02d}"
            f"T{utc.hour:02d}:{utc.minute:02d}:{utc.second:02d}.{millis:03d}+00:00"
        )

    def parse(self, text: str) -> datetime | None:
        """Parse `text` into an aware datetime, or return None if it doesn't match."""
        if not isinstance(text, str):
            return None
        match = _RFC3339_MS.fullmatch(text)
        if match is None:
            return None
        year, month, day, hour, minute, second, millis, sign, off_h, off_m = match.groups()
        if int(off_h) > 23 or int(off_m) > 59:
            return None
        offset = timedelta(hours=int(off_h), minutes=int(off_m))
        if sign == "-":
            offset = -offset
        try:
            parsed = datetime(
                int(year),
                int(month),
                int(day),
                int(hour),
                int(minute),
                int(second),
                int(millis) * 1000,
                tzinfo=timezone(offset),
            )
            # Must still be representable once shifted to UTC for `format`.
            parsed.astimezone(timezone.utc)
        except (ValueError, OverflowError):
            # Out-of-range calendar values (month 13, Feb 30, second 60, ...).
            return None
        return parsed

    def now(self, at: datetime | None = None) -> str:
        """Format `at`, or the current instant when omitted."""
        return self.format(at if at is not None else datetime.now(tz=timezone.utc))


RFC3339 = Rfc3339Formatter()
