"""Recognizer for fields with a closed set of values."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import Any

from core.recognize.models import EntryKind, MatchKind, TermEntry, TermMatch
from core.recognize.patterns import build_term_pattern
from core.templates.models import Template, TemplateRenderer, build_list
from core.templates.renderer import PatternRenderer
from core.utils.errors import RecognizerConfigError
from core.utils.events import log_event

logger = logging.getLogger("formrecog.recognize")

DescribeValue = Callable[[Any], str]
TermsForValue = Callable[[Any], Sequence[str]]


class EnumerationRecognizer:
    """Match free text against the terms of each enumerated value.

    Entries are compiled once, in this order: current choice (ordinal 0,
    shortcut ``c``), each value (ordinals 1..N), no preference (N+1) and
    finally the field's own terms, which only help route input to the field.
    """

    def __init__(
        self,
        description: str,
        values: Iterable[Any],
        describe: DescribeValue,
        terms_for: TermsForValue,
        *,
        help_template: Template,
        allow_numbers: bool = True,
        field_terms: Sequence[str] = (),
        no_preference: Sequence[str] | None = None,
        current_choice: Sequence[str] | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self._description = description
        self._values = tuple(values)
        self._describe = describe
        self._terms_for = terms_for
        self._value_descriptions = tuple(describe(value) for value in self._values)
        self._help_template = help_template
        self._allow_numbers = allow_numbers
        self._field_terms = tuple(field_terms)
        self._no_preference = tuple(no_preference) if no_preference else None
        self._current_choice = current_choice[0] if current_choice else None
        self._renderer = renderer or PatternRenderer()
        self._entries, self._max = self._build_entries(current_choice)

        log_event(
            logger,
            logging.DEBUG,
            "recognizer_built",
            field=description,
            kind="enum",
            entries=len(self._entries),
            max_ordinal=self._max,
        )

    def values(self) -> Sequence[Any]:
        return self._values

    def value_descriptions(self) -> Sequence[str]:
        return self._value_descriptions

    def value_description(self, value: Any) -> str:
        return self._describe(value)

    def valid_inputs(self, value: Any) -> Sequence[str]:
        return self._terms_for(value)

    def entries(self) -> tuple[TermEntry, ...]:
        return self._entries

    def help(self, state: object | None, default_value: Any = None) -> str:
        descriptions = list(self._value_descriptions)
        max_ordinal = self._max
        if self._no_preference is not None:
            descriptions.append(self._no_preference[0])
            if default_value is None:
                max_ordinal -= 1
        if (default_value is not None or self._no_preference is not None) and self._current_choice:
            descriptions.append(f"{self._current_choice} or 'c'")

        args: list[object | None]
        if self._allow_numbers:
            args = [1, max_ordinal]
        else:
            args = [None, None]
        args.append(
            build_list(
                descriptions, self._help_template.separator, self._help_template.last_separator
            )
        )
        return self._renderer.render(self._help_template, state, "", args)

    def matches(self, text: str, default_value: Any = None) -> Iterator[TermMatch]:
        """Yield every candidate match for ``text``, entry by entry.

        Blank input accepts the default (or no preference) before any
        pattern is tried. No ranking or deduplication happens here.
        """

        accepts_default = default_value is not None or self._no_preference is not None
        if not text.strip() and accepts_default:
            yield TermMatch(0, len(text), 1.0, default_value, MatchKind.CURRENT_CHOICE)

        for entry in self._entries:
            pattern = entry.pattern
            for match in pattern.expression.finditer(text):
                word = match.group(1)
                if word is not None:
                    start, length = match.start(1), len(word)
                    if pattern.shortcut is not None and word.lower() == pattern.shortcut:
                        confidence = 1.0
                    else:
                        confidence = min(length / pattern.reference_length, 1.0)
                else:
                    # Symbolic terms cannot be part of a larger word.
                    start, length = match.start(2), len(match.group(2))
                    confidence = 1.0

                if entry.kind is EntryKind.CURRENT_CHOICE:
                    if accepts_default:
                        yield TermMatch(
                            start, length, confidence, default_value, MatchKind.CURRENT_CHOICE
                        )
                elif entry.kind is EntryKind.NO_PREFERENCE:
                    yield TermMatch(start, length, confidence, None, MatchKind.NO_PREFERENCE)
                elif entry.kind is EntryKind.FIELD:
                    yield TermMatch(start, length, confidence, None, MatchKind.FIELD)
                else:
                    yield TermMatch(start, length, confidence, entry.value)

    def _build_entries(
        self, current_choice: Sequence[str] | None
    ) -> tuple[tuple[TermEntry, ...], int]:
        entries: list[TermEntry] = []
        if current_choice:
            entries.append(self._entry(EntryKind.CURRENT_CHOICE, None, current_choice, 0, "c"))
        ordinal = 1
        for value in self._values:
            shortcut = str(ordinal) if self._allow_numbers else None
            entries.append(
                self._entry(EntryKind.VALUE, value, self._terms_for(value), ordinal, shortcut)
            )
            ordinal += 1
        if self._no_preference is not None:
            shortcut = str(ordinal) if self._allow_numbers else None
            entries.append(
                self._entry(EntryKind.NO_PREFERENCE, None, self._no_preference, ordinal, shortcut)
            )
            ordinal += 1
        if self._field_terms:
            entries.append(self._entry(EntryKind.FIELD, None, self._field_terms, ordinal, None))
        return tuple(entries), ordinal - 1

    def _entry(
        self,
        kind: EntryKind,
        value: Any,
        terms: Sequence[str],
        ordinal: int,
        shortcut: str | None,
    ) -> TermEntry:
        try:
            pattern = build_term_pattern(terms, shortcut)
        except re.error as exc:
            raise RecognizerConfigError(
                f"Invalid term pattern for {kind.value} {value!r} of {self._description}: {exc}",
                field_name=self._description,
            ) from exc
        return TermEntry(kind=kind, value=value, pattern=pattern, ordinal=ordinal)

    def __repr__(self) -> str:
        descriptions = " ".join(self._value_descriptions)
        return f"EnumerationRecognizer({self._description} [ {descriptions}])"
