"""Result types returned by the codecs.

Binary outcomes are `Ok | Err`. Notice parsing has a third outcome, `NoNotice`,
for input that decoded fine but is not shaped like a notice.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from .errors import ErrorRecord

_T = TypeVar("_T")


@dataclass(frozen=True)
class Ok(Generic[_T]):
    value: _T


@dataclass(frozen=True)
class Err:
    error: ErrorRecord

    def describe(self) -> str:
        """Shortcut for `self.error.describe()`."""
        return self.error.describe()


@dataclass(frozen=True)
class NoNotice:
    """Input was valid JSON but not a notice (wrong top-level type, no `noticeType`)."""

    reason: str
