"""Data models for term matching and recognizer entries."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any


class MatchKind(str, Enum):
    """What a produced match stands for."""

    VALUE = "value"
    CURRENT_CHOICE = "current_choice"
    NO_PREFERENCE = "no_preference"
    FIELD = "field"


class EntryKind(str, Enum):
    """Tag of one compiled recognizer entry."""

    VALUE = "value"
    CURRENT_CHOICE = "current_choice"
    NO_PREFERENCE = "no_preference"
    FIELD = "field"


@dataclass(frozen=True)
class TermMatch:
    """A span of the input recognized as a value.

    ``value`` is ``None`` for an explicit "no preference" and for field
    references; ``kind`` tells those apart from a concrete ``None`` default.
    """

    start: int
    length: int
    confidence: float
    value: Any
    kind: MatchKind = MatchKind.VALUE

    @property
    def end(self) -> int:
        return self.start + self.length

    def text(self, source: str) -> str:
        """Return the slice of ``source`` consumed by this match."""

        return source[self.start : self.end]

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": self.start,
            "length": self.length,
            "confidence": self.confidence,
            "value": self.value,
            "kind": self.kind.value,
        }


@dataclass(frozen=True)
class TermPattern:
    """Compiled alternation for one logical value."""

    expression: re.Pattern[str]
    longest_term: str
    shortcut: str | None = None

    @property
    def reference_length(self) -> int:
        return max(len(self.longest_term), 1)


@dataclass(frozen=True)
class TermEntry:
    """One recognizer entry: a tag, its value and its compiled pattern."""

    kind: EntryKind
    value: Any
    pattern: TermPattern
    ordinal: int
