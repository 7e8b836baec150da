"""Display-ready diagnostic messages."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from .timestamps import RFC3339, Rfc3339Formatter


class DiagnosticMessage(BaseModel):
    """A flattened `(message, timestamp)` pair ready for a logging sink."""

    model_config = ConfigDict(frozen=True)

    message: str
    timestamp: str

    @classmethod
    def now(
        cls,
        message: str,
        *,
        formatter: Rfc3339Formatter | None = None,
        at: datetime | None = None,
    ) -> DiagnosticMessage:
        """Create a message stamped with `at` (default: the current instant).

        `formatter` defaults to the shared RFC3339 formatter.
        """
        fmt = formatter or RFC3339
        return cls(message=message, timestamp=fmt.now(at))
