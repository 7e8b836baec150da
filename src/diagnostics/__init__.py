"""Notice diagnostics core.

This package converts between three representations of tunnel engine events:
- wire JSON notices,
- typed `Notice` objects,
- display-ready `DiagnosticMessage`s,

and round-trips the engine's opaque config blob. Every fallible operation
returns `Ok`/`Err` (plus `NoNotice` for notice parsing) instead of raising.
"""

from .config_blob import decode_config, encode_config
from .errors import (
    ConfigErrorCode,
    ErrorDomain,
    ErrorRecord,
    NoticeErrorCode,
    describe_error,
)
from .message import DiagnosticMessage
from .notice import Notice, parse_notice
from .results import Err, NoNotice, Ok
from .timestamps import RFC3339, Rfc3339Formatter

__all__ = [
    "ConfigErrorCode",
    "DiagnosticMessage",
    "Err",
    "ErrorDomain",
    "ErrorRecord",
    "NoNotice",
    "Notice",
    "NoticeErrorCode",
    "Ok",
    "RFC3339",
    "Rfc3339Formatter",
    "decode_config",
    "describe_error",
    "encode_config",
    "parse_notice",
]
