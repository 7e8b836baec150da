"""Codec for the tunnel engine's opaque configuration blob.

The blob is a free-form JSON object. This module only converts between the wire
text and a `dict`; validating its contents is up to the caller.
"""

from __future__ import annotations

import json
from typing import Any

from .errors import ConfigErrorCode, ErrorRecord
from .results import Err, Ok
from .wire import dumps_compact, ensure_utf8_text, json_type_name


def decode_config(wire: str | bytes) -> Ok[dict[str, Any]] | Err:
    """Decode a config blob. The top-level JSON value must be an object."""
    try:
        text = ensure_utf8_text(wire)
    except UnicodeError as exc:
        return Err(
            ErrorRecord.config(
                ConfigErrorCode.DECODE_FAILED,
                "Config is not valid UTF-8",
                ErrorRecord.from_exception(exc),
            )
        )

    try:
        decoded = json.loads(text)
    except (ValueError, RecursionError) as exc:
        return Err(
            ErrorRecord.config(
                ConfigErrorCode.DECODE_FAILED,
                "Decoding config failed",
                ErrorRecord.from_exception(exc),
            )
        )

    if not isinstance(decoded, dict):
        return Err(
            ErrorRecord.config(
                ConfigErrorCode.DECODE_FAILED,
                f"Unexpected config type: {json_type_name(decoded)}",
            )
        )
    return Ok(decoded)


def encode_config(config: Any) -> Ok[str] | Err:
    """Encode a config mapping as JSON text.

    Any JSON-compatible top-level value is accepted. Key order in the output is
    not guaranteed.
    """
    try:
        return Ok(ensure_utf8_text(dumps_compact(config)))
    except (TypeError, ValueError, RecursionError) as exc:
        return Err(
            ErrorRecord.config(
                ConfigErrorCode.ENCODE_FAILED,
                "Encoding config failed",
                ErrorRecord.from_exception(exc),
            )
        )
    except Exception as exc:  # noqa: BLE001 - should never happen; keep the error shape
        return Err(ErrorRecord.config(ConfigErrorCode.ENCODE_FAILED, f"Encoding config failed: {exc}"))
