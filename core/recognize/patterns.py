"""Build per-value regular expressions from surface terms.

Each value gets a single alternation of the form::

    (\\b(?:word terms|shortcut)\\b)|(symbolic terms)

Group 1 holds terms that look like words and must match on word
boundaries. Group 2 holds punctuation-heavy terms (emoji, symbols) that
cannot rely on ``\\b``. Exactly one group participates in a match.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from core.recognize.models import TermPattern

# Never matches; keeps empty groups and empty terms structurally valid.
UNMATCHABLE = "(?!)"

_WHITESPACE_RE = re.compile(r"\s+")
_WORD_CHAR_RE = re.compile(r"\w")
_QUANTIFIER_SUFFIX_RE = re.compile(r"(?:\?|\*|\+|\{\d+\}|\{\d+,\}|\{,\d+\}|\{\d+,\d+\})$")


def normalize_term(term: str) -> str:
    """Trim ``term`` and let inner whitespace runs match any whitespace."""

    normalized = _WHITESPACE_RE.sub(r"\\s+", term.strip())
    return normalized or UNMATCHABLE


def is_word_term(term: str) -> bool:
    """Return True when a normalized term should be matched on word boundaries."""

    return _starts_like_word(term) and _ends_like_word(term)


def build_term_pattern(terms: Iterable[str], shortcut: str | None = None) -> TermPattern:
    """Compile ``terms`` into one case-insensitive alternation.

    Args:
        terms: Literal phrases or regular expression fragments for one value.
        shortcut: Optional literal (an ordinal number or ``c``) appended to the
            word group so the value can be picked without typing a term.

    Returns:
        TermPattern with the compiled expression and the longest original
        term, used as reference length for confidence.

    Raises:
        re.error: When a term is not a valid regular expression fragment.
    """

    ordered = sorted(terms, key=len, reverse=True)
    word_terms: list[str] = []
    symbolic_terms: list[str] = []
    for term in ordered:
        normalized = normalize_term(term)
        if is_word_term(normalized):
            word_terms.append(f"(?:{normalized})")
        else:
            symbolic_terms.append(f"(?:{normalized})")

    if shortcut is not None:
        word_terms.append(re.escape(shortcut))

    word_group = rf"(\b(?:{'|'.join(word_terms)})\b)" if word_terms else f"({UNMATCHABLE})"
    symbolic_group = f"({'|'.join(symbolic_terms)})" if symbolic_terms else f"({UNMATCHABLE})"
    expression = re.compile(f"{word_group}|{symbolic_group}", re.IGNORECASE)
    return TermPattern(
        expression=expression,
        longest_term=ordered[0] if ordered else "",
        shortcut=shortcut.lower() if shortcut is not None else None,
    )


def _starts_like_word(term: str) -> bool:
    if not term:
        return False
    if term[0] == "(" or term.startswith(("\\w", "\\d")):
        return True
    if term[0] == "[":
        return _class_end(term) is not None
    return _is_word_char(term[0])


def _ends_like_word(term: str) -> bool:
    quantifier = _QUANTIFIER_SUFFIX_RE.search(term)
    body = term[: quantifier.start()] if quantifier else term
    if not body:
        return False
    if body[-1] == ")":
        return True
    if body[-1] == "]":
        return _class_start(body) is not None
    # Also covers the escapes \w and \d.
    return _is_word_char(body[-1])


def _class_end(term: str) -> int | None:
    """Index after a balanced leading ``[...]`` of word chars and hyphens."""

    depth = 0
    for index in range(1, len(term)):
        char = term[index]
        if char == "[":
            depth += 1
        elif char == "]":
            if depth == 0:
                return index + 1
            depth -= 1
        elif char != "-" and not _is_word_char(char):
            return None
    return None


def _class_start(body: str) -> int | None:
    """Index of the ``[`` opening a balanced trailing ``[...]`` class."""

    depth = 0
    for index in range(len(body) - 2, -1, -1):
        char = body[index]
        if char == "]":
            depth += 1
        elif char == "[":
            if depth == 0:
                return index
            depth -= 1
        elif char != "-" and not _is_word_char(char):
            return None
    return None


def _is_word_char(char: str) -> bool:
    return _WORD_CHAR_RE.fullmatch(char) is not None
