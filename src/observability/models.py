"""Diagnostic record models.

Records are designed to be:
- Append-only (the sink decides storage).
- Flat, so every sink can store them without nested structure.
- Self-describing: errors carry their full descriptive rendering as `message`.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(tz=timezone.utc)


RecordKind = Literal["diagnostic", "error", "skipped"]


class DiagnosticRecord(BaseModel):
    """A durable, structured record of one handled notice."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    # High-level classification for downstream filtering.
    kind: RecordKind

    # The notice type when known (absent for errors raised before parsing finished).
    notice_type: str | None = None

    # Display text: the diagnostic line, the error's descriptive string, or the skip reason.
    message: str

    # RFC3339 text of when the event occurred (notice timestamp or ingestion time).
    timestamp: str
    logged_at: datetime = Field(default_factory=utc_now)

    # Set for `kind == "error"` only.
    error_domain: str | None = None
    error_code: int | None = None
