"""Recognizers for primitive field types.

All variants share the no-preference / current-choice handling in
``PrimitiveRecognizer.matches`` and only supply ``parse``.
"""

from __future__ import annotations

import logging
import math
import re
from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from datetime import datetime
from typing import Any

from core.config.models import PhraseConfig
from core.recognize.datetime_phrases import DateTimeParser, parse_datetime_phrase
from core.recognize.models import MatchKind, TermMatch
from core.templates.models import Template, TemplateRenderer
from core.templates.renderer import PatternRenderer
from core.utils.errors import RecognizerConfigError
from core.utils.events import log_event

logger = logging.getLogger("formrecog.recognize")

_INTEGER_RE = re.compile(r"\s*[+-]?\d+\s*")
_REAL_RE = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*")
_CURRENT_CHOICE_SHORTCUT = "c"


def _phrase_set(phrases: Sequence[str]) -> frozenset[str]:
    return frozenset(phrase.strip().lower() for phrase in phrases)


class PrimitiveRecognizer(ABC):
    """Base recognizer for open value domains."""

    kind = "primitive"

    def __init__(
        self,
        field_name: str,
        phrases: PhraseConfig,
        *,
        help_template: Template,
        optional: bool = False,
        nullable: bool = False,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        if optional and not nullable:
            raise RecognizerConfigError(
                f"Primitive field '{field_name}' must be nullable to be optional",
                field_name=field_name,
            )
        self._field_name = field_name
        self._phrases = phrases
        self._optional = optional
        self._help_template = help_template
        self._renderer = renderer or PatternRenderer()
        self._current_choices = _phrase_set(phrases.current_choice)
        self._no_preference = _phrase_set(phrases.no_preference) if optional else None

        log_event(logger, logging.DEBUG, "recognizer_built", field=field_name, kind=self.kind)

    @abstractmethod
    def parse(self, text: str) -> TermMatch | None:
        """Parse the whole of ``text`` as a single value."""

    def matches(self, text: str, default_value: Any = None) -> Iterator[TermMatch]:
        match_value = text.strip().lower()
        if self._no_preference is not None and match_value in self._no_preference:
            yield TermMatch(0, len(text), 1.0, None, MatchKind.NO_PREFERENCE)
        elif (default_value is not None or self._no_preference is not None) and (
            match_value in ("", _CURRENT_CHOICE_SHORTCUT) or match_value in self._current_choices
        ):
            yield TermMatch(0, len(text), 1.0, default_value, MatchKind.CURRENT_CHOICE)
        else:
            result = self.parse(text)
            if result is not None:
                yield result

    def values(self) -> Sequence[Any] | None:
        return None

    def value_descriptions(self) -> Sequence[str]:
        return []

    def value_description(self, value: Any) -> str:
        return str(value)

    def valid_inputs(self, value: Any) -> Sequence[str]:
        return [self.value_description(value)]

    def help(self, state: object | None, default_value: Any = None) -> str:
        args = self.help_args(default_value)
        return self._renderer.render(self._help_template, state, self._field_name, args)

    def help_args(self, default_value: Any) -> list[object | None]:
        """Template args for the current-choice and no-preference shortcuts."""

        if default_value is None and not self._optional:
            return [None, None]
        current = f"{self._phrases.current_choice[0]} or '{_CURRENT_CHOICE_SHORTCUT}'"
        no_preference = self._phrases.no_preference[0] if self._optional else None
        return [current, no_preference]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._field_name})"


class BoolRecognizer(PrimitiveRecognizer):
    kind = "bool"

    def __init__(self, field_name: str, phrases: PhraseConfig, **kwargs: Any) -> None:
        super().__init__(field_name, phrases, **kwargs)
        self._yes = _phrase_set(phrases.yes)
        self._no = _phrase_set(phrases.no)

    def parse(self, text: str) -> TermMatch | None:
        match_value = text.strip().lower()
        if match_value in self._yes:
            return TermMatch(0, len(text), 1.0, True)
        if match_value in self._no:
            return TermMatch(0, len(text), 1.0, False)
        return None

    def value_description(self, value: Any) -> str:
        return self.valid_inputs(value)[0]

    def valid_inputs(self, value: Any) -> Sequence[str]:
        return self._phrases.yes if value else self._phrases.no


class StringRecognizer(PrimitiveRecognizer):
    kind = "string"

    def parse(self, text: str) -> TermMatch | None:
        if not text.strip():
            return None
        # Zero confidence so commands and shortcuts win over free text.
        return TermMatch(0, len(text), 0.0, text)


class IntegerRecognizer(PrimitiveRecognizer):
    kind = "integer"

    def __init__(
        self,
        field_name: str,
        phrases: PhraseConfig,
        *,
        minimum: int | None = None,
        maximum: int | None = None,
        show_limits: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(field_name, phrases, **kwargs)
        self._min = minimum
        self._max = maximum
        self._show_limits = show_limits

    def parse(self, text: str) -> TermMatch | None:
        if _INTEGER_RE.fullmatch(text) is None:
            return None
        try:
            number = int(text)
        except ValueError:
            # Digit strings past the interpreter's conversion limit.
            return None
        if not _within(number, self._min, self._max):
            return None
        return TermMatch(0, len(text), 1.0, number)

    def help_args(self, default_value: Any) -> list[object | None]:
        args = super().help_args(default_value)
        if self._show_limits:
            args.extend([self._min, self._max])
        return args


class RealRecognizer(PrimitiveRecognizer):
    kind = "real"

    def __init__(
        self,
        field_name: str,
        phrases: PhraseConfig,
        *,
        minimum: float | None = None,
        maximum: float | None = None,
        show_limits: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(field_name, phrases, **kwargs)
        self._min = minimum
        self._max = maximum
        self._show_limits = show_limits

    def parse(self, text: str) -> TermMatch | None:
        if _REAL_RE.fullmatch(text) is None:
            return None
        number = float(text)
        if math.isinf(number) or not _within(number, self._min, self._max):
            return None
        return TermMatch(0, len(text), 1.0, number)

    def help_args(self, default_value: Any) -> list[object | None]:
        args = super().help_args(default_value)
        if self._show_limits:
            args.extend([self._min, self._max])
        return args


class DateTimeRecognizer(PrimitiveRecognizer):
    kind = "datetime"

    def __init__(
        self,
        field_name: str,
        phrases: PhraseConfig,
        *,
        parser: DateTimeParser | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(field_name, phrases, **kwargs)
        self._parser = parser or parse_datetime_phrase

    def parse(self, text: str) -> TermMatch | None:
        moment = self._parser(text)
        if moment is None:
            return None
        return TermMatch(0, len(text), 1.0, moment)

    def value_description(self, value: Any) -> str:
        if isinstance(value, datetime):
            return value.strftime(self._phrases.datetime_format)
        return str(value)


def _within(number: float, minimum: float | None, maximum: float | None) -> bool:
    if minimum is not None and number < minimum:
        return False
    if maximum is not None and number > maximum:
        return False
    return True
