"""Helpers for the JSON wire format shared by the codecs."""

from __future__ import annotations

import json
from typing import Any


def ensure_utf8_text(wire: str | bytes) -> str:
    """Return `wire` as text, verifying it round-trips through UTF-8.

    Raises `UnicodeError` for invalid UTF-8 bytes or text with lone surrogates.
    """
    if isinstance(wire, (bytes, bytearray)):
        return bytes(wire).decode("utf-8")
    wire.encode("utf-8")
    return wire


def json_type_name(value: Any) -> str:
    """Name the JSON type of a decoded value (`object`, `array`, ...)."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def dumps_compact(value: Any) -> str:
    """Serialize to compact JSON text; NaN and Infinity are rejected."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
