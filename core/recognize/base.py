"""Recognizer interface definitions."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any, Protocol

from core.recognize.models import TermMatch


class Recognizer(Protocol):
    """Protocol shared by enumeration and primitive recognizers."""

    def matches(self, text: str, default_value: Any = None) -> Iterator[TermMatch]:
        """Lazily produce candidate matches for ``text``."""

    def help(self, state: object | None, default_value: Any = None) -> str:
        """Describe the accepted inputs."""

    def values(self) -> Sequence[Any] | None:
        """Return the closed value set, or None for open domains."""

    def value_descriptions(self) -> Sequence[str]:
        """Return the display description of every value."""

    def value_description(self, value: Any) -> str:
        """Return the display description of ``value``."""

    def valid_inputs(self, value: Any) -> Sequence[str]:
        """Return inputs that select ``value``."""
