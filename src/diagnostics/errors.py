"""Error taxonomy shared by the config and notice codecs.

Failures never cross a codec boundary as raised exceptions. Instead they are
described by an `ErrorRecord`:

- `domain` separates config errors from notice errors (or names the Python
  exception type for wrapped low-level failures).
- `code` is drawn from a closed enumeration per domain; ranges do not overlap.
- `underlying` links to the lower-level error that caused this one.
"""

from __future__ import annotations

from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict

DEFAULT_MAX_CAUSE_DEPTH = 32
TRUNCATION_MARKER = "... (cause chain truncated)"


class ErrorDomain(str, Enum):
    CONFIG = "config-error"
    NOTICE = "notice-error"


class ConfigErrorCode(IntEnum):
    DECODE_FAILED = 1000
    ENCODE_FAILED = 1001


class NoticeErrorCode(IntEnum):
    ENCODE_UTF8_FAILED = 2000
    DECODE_UTF8_FAILED = 2001
    DECODE_JSON_FAILED = 2002
    ENCODE_JSON_FAILED = 2003
    DATA_MISSING = 2004


class ErrorRecord(BaseModel):
    """A structured error with an optional cause."""

    model_config = ConfigDict(frozen=True)

    domain: str
    code: int
    message: str
    underlying: ErrorRecord | None = None

    @classmethod
    def config(cls, code: ConfigErrorCode, message: str, underlying: ErrorRecord | None = None) -> ErrorRecord:
        """Build a config-domain error."""
        return cls(domain=ErrorDomain.CONFIG.value, code=int(code), message=message, underlying=underlying)

    @classmethod
    def notice(cls, code: NoticeErrorCode, message: str, underlying: ErrorRecord | None = None) -> ErrorRecord:
        """Build a notice-domain error."""
        return cls(domain=ErrorDomain.NOTICE.value, code=int(code), message=message, underlying=underlying)

    @classmethod
    def from_exception(cls, exc: BaseException) -> ErrorRecord:
        """Wrap a Python exception, following its explicit `__cause__` links.

        The domain is the exception's qualified type name, e.g.
        `json.decoder.JSONDecodeError`. OS-level errors keep their errno as code.
        """
        # Collect first so the records can be linked innermost-first.
        chain: list[BaseException] = [exc]
        seen = {id(exc)}
        current = exc.__cause__
        while current is not None and id(current) not in seen and len(chain) < DEFAULT_MAX_CAUSE_DEPTH:
            seen.add(id(current))
            chain.append(current)
            current = current.__cause__

        record = cls._wrap_one(chain[-1], None)
        for item in reversed(chain[:-1]):
            record = cls._wrap_one(item, record)
        return record

    @classmethod
    def _wrap_one(cls, exc: BaseException, underlying: ErrorRecord | None) -> ErrorRecord:
        exc_type = type(exc)
        errno = getattr(exc, "errno", None)
        return cls(
            domain=f"{exc_type.__module__}.{exc_type.__qualname__}",
            code=errno if isinstance(errno, int) else 0,
            message=str(exc) or exc_type.__name__,
            underlying=underlying,
        )

    def causes(self) -> list[ErrorRecord]:
        """Return this record followed by its causes, outermost first."""
        chain: list[ErrorRecord] = []
        current: ErrorRecord | None = self
        while current is not None:
            chain.append(current)
            current = current.underlying
        return chain

    def describe(self, *, max_depth: int = DEFAULT_MAX_CAUSE_DEPTH) -> str:
        """Render this record and its cause chain (see `describe_error`)."""
        return describe_error(self, max_depth=max_depth)


def describe_error(err: ErrorRecord, *, max_depth: int = DEFAULT_MAX_CAUSE_DEPTH) -> str:
    """Render an error and its causes as one display string.

    Each link renders as `domain.code: message`, outermost first, separated by a
    single space. The walk is iterative and stops after `max_depth` links (or on
    a record it has already rendered), appending `TRUNCATION_MARKER`.
    """
    if max_depth < 1:
        raise ValueError(f"max_depth must be >= 1. Got: {max_depth!r}")

    parts: list[str] = []
    seen: set[int] = set()
    current: ErrorRecord | None = err
    while current is not None:
        if len(parts) >= max_depth or id(current) in seen:
            parts.append(TRUNCATION_MARKER)
            break
        seen.add(id(current))
        parts.append(f"{current.domain}.{current.code}: {current.message}")
        current = current.underlying
    return " ".join(parts)
