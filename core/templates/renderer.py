"""Default help template renderer.

Template syntax:
- ``{0}``, ``{1}``...: positional arguments; ``None`` renders as empty text.
- ``{&}``: the field name.
- ``{?...}``: optional section, dropped when any positional argument it
  references is ``None`` or missing. Sections may nest.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from core.templates.models import Template

_PLACEHOLDER_RE = re.compile(r"\{(\d+|&)\}")
_OPTIONAL_OPEN = "{?"


class PatternRenderer:
    """Render ``Template`` patterns with positional arguments."""

    def render(
        self,
        template: Template,
        state: object | None,
        field_name: str,
        args: Sequence[object | None],
    ) -> str:
        return _expand(template.pattern, field_name, list(args))


def _expand(text: str, field_name: str, args: list[object | None]) -> str:
    pieces: list[str] = []
    cursor = 0
    while True:
        start = text.find(_OPTIONAL_OPEN, cursor)
        if start < 0:
            pieces.append(_substitute(text[cursor:], field_name, args))
            break
        pieces.append(_substitute(text[cursor:start], field_name, args))
        end = _closing_brace(text, start + len(_OPTIONAL_OPEN))
        inner = text[start + len(_OPTIONAL_OPEN) : end]
        if _arguments_present(inner, args):
            pieces.append(_expand(inner, field_name, args))
        cursor = end + 1
    return "".join(pieces)


def _closing_brace(text: str, position: int) -> int:
    depth = 0
    for index in range(position, len(text)):
        char = text[index]
        if char == "{":
            depth += 1
        elif char == "}":
            if depth == 0:
                return index
            depth -= 1
    raise ValueError(f"Unbalanced optional section in template: {text!r}")


def _without_optional_sections(text: str) -> str:
    pieces: list[str] = []
    cursor = 0
    while (start := text.find(_OPTIONAL_OPEN, cursor)) >= 0:
        pieces.append(text[cursor:start])
        cursor = _closing_brace(text, start + len(_OPTIONAL_OPEN)) + 1
    pieces.append(text[cursor:])
    return "".join(pieces)


def _arguments_present(text: str, args: list[object | None]) -> bool:
    # Nested sections decide for themselves.
    for match in _PLACEHOLDER_RE.finditer(_without_optional_sections(text)):
        token = match.group(1)
        if token == "&":
            continue
        index = int(token)
        if index >= len(args) or args[index] is None:
            return False
    return True


def _substitute(text: str, field_name: str, args: list[object | None]) -> str:
    def replace(match: re.Match[str]) -> str:
        token = match.group(1)
        if token == "&":
            return field_name
        index = int(token)
        if index >= len(args) or args[index] is None:
            return ""
        return str(args[index])

    return _PLACEHOLDER_RE.sub(replace, text)
