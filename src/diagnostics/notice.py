"""Notices: typed event records emitted by the tunnel engine.

Wire format (UTF-8 JSON object):

    {"noticeType": "Info", "timestamp": "2020-01-01T00:00:00.000+00:00", "data": {...}}

Only `noticeType` is required. Parsing has three outcomes:

- `Ok(Notice)` for a well-formed notice.
- `NoNotice` when the JSON decoded but isn't shaped like a notice. Wire formats
  evolve, so this is expected and not an error.
- `Err` when decoding itself broke (bad UTF-8, invalid JSON).
"""

from __future__ import annotations

import copy
import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, JsonValue, field_validator

from .errors import ErrorRecord, NoticeErrorCode
from .message import DiagnosticMessage
from .results import Err, NoNotice, Ok
from .timestamps import RFC3339, Rfc3339Formatter
from .wire import dumps_compact, ensure_utf8_text, json_type_name


class Notice(BaseModel):
    """A structured event record: type tag, optional payload, optional timestamp.

    The owner may reassign fields (assignments are validated); the payload is
    always a private deep copy.
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    notice_type: str = Field(alias="noticeType")
    data: dict[str, JsonValue] | None = None
    timestamp: str | None = None

    @field_validator("data", mode="before")
    @classmethod
    def _copy_data(cls, v: Any) -> Any:
        """Never share the caller's mapping."""
        if v is None:
            return None
        return copy.deepcopy(v)

    @classmethod
    def stamped(
        cls,
        notice_type: str,
        data: dict[str, Any] | None = None,
        *,
        formatter: Rfc3339Formatter | None = None,
        at: datetime | None = None,
    ) -> Notice:
        """Create a notice timestamped by `formatter` at `at` (default: now)."""
        fmt = formatter or RFC3339
        return cls(notice_type=notice_type, data=data, timestamp=fmt.now(at))

    def to_diagnostic_message(self) -> Ok[DiagnosticMessage] | Err:
        """Flatten into `"<noticeType>: <json of data>"` plus the notice timestamp.

        Both `data` and `timestamp` are required here; there is no fallback to
        the current time.
        """
        if self.data is None:
            return Err(ErrorRecord.notice(NoticeErrorCode.DATA_MISSING, "No data to encode diagnostic message"))

        try:
            payload = dumps_compact(self.data)
        except (TypeError, ValueError, RecursionError) as exc:
            return Err(
                ErrorRecord.notice(
                    NoticeErrorCode.ENCODE_JSON_FAILED,
                    "Encoding JSON failed",
                    ErrorRecord.from_exception(exc),
                )
            )
        except Exception as exc:  # noqa: BLE001 - should never happen; keep the error shape
            return Err(ErrorRecord.notice(NoticeErrorCode.ENCODE_JSON_FAILED, f"Encoding JSON failed: {exc}"))

        try:
            ensure_utf8_text(payload)
        except UnicodeError as exc:
            return Err(
                ErrorRecord.notice(
                    NoticeErrorCode.ENCODE_UTF8_FAILED,
                    "Failed to encode JSON data",
                    ErrorRecord.from_exception(exc),
                )
            )

        if self.timestamp is None:
            return Err(ErrorRecord.notice(NoticeErrorCode.DATA_MISSING, "Timestamp missing"))

        return Ok(DiagnosticMessage(message=f"{self.notice_type}: {payload}", timestamp=self.timestamp))

    def to_json(self) -> Ok[str] | Err:
        """Serialize back to the wire format, omitting absent fields."""
        wire = self.model_dump(by_alias=True, exclude_none=True)
        try:
            return Ok(ensure_utf8_text(dumps_compact(wire)))
        except UnicodeError as exc:
            return Err(
                ErrorRecord.notice(
                    NoticeErrorCode.ENCODE_UTF8_FAILED,
                    "Failed to encode JSON data",
                    ErrorRecord.from_exception(exc),
                )
            )
        except (TypeError, ValueError, RecursionError) as exc:
            return Err(
                ErrorRecord.notice(
                    NoticeErrorCode.ENCODE_JSON_FAILED,
                    "Encoding JSON failed",
                    ErrorRecord.from_exception(exc),
                )
            )


def parse_notice(wire: str | bytes) -> Ok[Notice] | NoNotice | Err:
    """Parse a notice from its JSON wire form."""
    try:
        text = ensure_utf8_text(wire)
    except UnicodeError as exc:
        return Err(
            ErrorRecord.notice(
                NoticeErrorCode.DECODE_UTF8_FAILED,
                "Notice is not valid UTF-8",
                ErrorRecord.from_exception(exc),
            )
        )

    try:
        decoded = json.loads(text)
    except (ValueError, RecursionError) as exc:
        return Err(
            ErrorRecord.notice(
                NoticeErrorCode.DECODE_JSON_FAILED,
                "Decoding JSON failed",
                ErrorRecord.from_exception(exc),
            )
        )

    if not isinstance(decoded, dict):
        return NoNotice(reason=f"expected a JSON object, got {json_type_name(decoded)}")
    notice_type = decoded.get("noticeType")
    if not isinstance(notice_type, str):
        return NoNotice(reason="missing string noticeType")

    # Fields of the wrong type are treated as absent.
    timestamp = decoded.get("timestamp")
    data = decoded.get("data")
    # `json.loads` already produced a fresh, JSON-typed tree; revalidating it
    # would only add a nesting limit the decoder doesn't have.
    return Ok(
        Notice.model_construct(
            notice_type=notice_type,
            timestamp=timestamp if isinstance(timestamp, str) else None,
            data=data if isinstance(data, dict) else None,
        )
    )
