from __future__ import annotations

from datetime import datetime
from typing import Any

import pytest

from core.config.models import PhraseConfig
from core.recognize.models import MatchKind, TermMatch
from core.recognize.primitives import (
    BoolRecognizer,
    DateTimeRecognizer,
    IntegerRecognizer,
    RealRecognizer,
    StringRecognizer,
)
from core.templates.models import DEFAULT_TEMPLATES, TemplateUsage
from core.utils.errors import RecognizerConfigError

PHRASES = PhraseConfig(
    yes=["yes", "y"],
    no=["no", "n"],
    no_preference=["no preference", "none"],
    current_choice=["current choice", "current"],
    datetime_format="%d.%m.%Y",
)


def _bool(**kwargs: Any) -> BoolRecognizer:
    return BoolRecognizer(
        "subscribe", PHRASES, help_template=DEFAULT_TEMPLATES[TemplateUsage.BOOL_HELP], **kwargs
    )


def _integer(**kwargs: Any) -> IntegerRecognizer:
    return IntegerRecognizer(
        "quantity",
        PHRASES,
        help_template=DEFAULT_TEMPLATES[TemplateUsage.INTEGER_HELP],
        **kwargs,
    )


def _real(**kwargs: Any) -> RealRecognizer:
    return RealRecognizer(
        "weight", PHRASES, help_template=DEFAULT_TEMPLATES[TemplateUsage.DOUBLE_HELP], **kwargs
    )


def test_bool_matches_yes_and_no_phrases_case_insensitively() -> None:
    recognizer = _bool()

    assert list(recognizer.matches("Y")) == [TermMatch(0, 1, 1.0, True)]
    assert list(recognizer.matches(" No ")) == [TermMatch(0, 4, 1.0, False)]
    assert list(recognizer.matches("maybe")) == []


def test_bool_descriptions_use_canonical_phrases() -> None:
    recognizer = _bool()

    assert recognizer.value_description(True) == "yes"
    assert list(recognizer.valid_inputs(False)) == ["no", "n"]
    assert recognizer.values() is None
    assert list(recognizer.value_descriptions()) == []


def test_optional_primitive_must_be_nullable() -> None:
    with pytest.raises(RecognizerConfigError) as exc_info:
        _bool(optional=True, nullable=False)

    assert exc_info.value.field_name == "subscribe"


def test_no_preference_phrase_yields_none_regardless_of_default() -> None:
    recognizer = _bool(optional=True, nullable=True)

    for default in (None, True):
        assert list(recognizer.matches("None", default)) == [
            TermMatch(0, 4, 1.0, None, MatchKind.NO_PREFERENCE)
        ]


def test_current_choice_inputs_yield_default() -> None:
    recognizer = _bool()

    for text in ("", "c", "C ", "current", "current choice"):
        assert list(recognizer.matches(text, True)) == [
            TermMatch(0, len(text), 1.0, True, MatchKind.CURRENT_CHOICE)
        ]


def test_current_choice_inputs_need_default_or_no_preference() -> None:
    recognizer = _bool()

    assert list(recognizer.matches("c")) == []
    assert list(recognizer.matches("")) == []


def test_optional_blank_input_accepts_missing_default() -> None:
    recognizer = _bool(optional=True, nullable=True)

    assert list(recognizer.matches("")) == [TermMatch(0, 0, 1.0, None, MatchKind.CURRENT_CHOICE)]


def test_bool_help_lists_shortcuts() -> None:
    assert _bool().help(None) == "Please enter 'yes' or 'no'."
    assert _bool().help(None, False) == "Please enter 'yes' or 'no', current choice or 'c'."
    assert _bool(optional=True, nullable=True).help(None) == (
        "Please enter 'yes' or 'no', current choice or 'c', no preference."
    )


def test_string_accepts_any_non_blank_input_with_zero_confidence() -> None:
    recognizer = StringRecognizer(
        "name", PHRASES, help_template=DEFAULT_TEMPLATES[TemplateUsage.STRING_HELP]
    )

    assert list(recognizer.matches("Ada Lovelace")) == [TermMatch(0, 12, 0.0, "Ada Lovelace")]
    assert list(recognizer.matches("   ")) == []
    assert recognizer.valid_inputs("Ada") == ["Ada"]


def test_integer_bounds_are_inclusive() -> None:
    recognizer = _integer(minimum=1, maximum=10)

    assert list(recognizer.matches("1")) == [TermMatch(0, 1, 1.0, 1)]
    assert list(recognizer.matches("10")) == [TermMatch(0, 2, 1.0, 10)]
    assert list(recognizer.matches("0")) == []
    assert list(recognizer.matches("11")) == []


@pytest.mark.parametrize("text", ["abc", "1.5", "1_0", "", "1 2"])
def test_integer_rejects_malformed_input(text: str) -> None:
    assert list(_integer().matches(text)) == []


def test_integer_accepts_sign_and_surrounding_whitespace() -> None:
    recognizer = _integer()

    assert list(recognizer.matches(" +7 ")) == [TermMatch(0, 4, 1.0, 7)]
    assert list(recognizer.matches("-12345678901")) == [TermMatch(0, 12, 1.0, -12345678901)]


def test_integer_too_long_to_convert_matches_nothing() -> None:
    digits = "9" * 5000

    assert list(_integer().matches(digits)) == []
    assert list(_integer(minimum=1, maximum=10).matches(digits)) == []


def test_integer_help_shows_visible_limits() -> None:
    assert _integer(minimum=1, maximum=10, show_limits=True).help(None) == (
        "You can enter a number between 1 and 10."
    )
    assert _integer(minimum=1, maximum=10).help(None) == "You can enter a number."


def test_real_bounds_are_inclusive() -> None:
    recognizer = _real(minimum=0.5, maximum=2.5)

    assert list(recognizer.matches("0.5")) == [TermMatch(0, 3, 1.0, 0.5)]
    assert list(recognizer.matches("2.5")) == [TermMatch(0, 3, 1.0, 2.5)]
    assert list(recognizer.matches("0.4")) == []
    assert list(recognizer.matches("2.6")) == []


@pytest.mark.parametrize("text", ["nan", "inf", "-infinity", "1e999", "1,5", "one"])
def test_real_rejects_non_finite_and_malformed_input(text: str) -> None:
    assert list(_real().matches(text)) == []


def test_real_accepts_decimal_forms() -> None:
    recognizer = _real()

    assert [match.value for match in recognizer.matches(".5")] == [0.5]
    assert [match.value for match in recognizer.matches("-2e3")] == [-2000.0]


def test_real_help_shows_visible_limits() -> None:
    recognizer = _real(minimum=0.5, maximum=2.5, show_limits=True)

    assert recognizer.help(None, 1.0) == (
        "You can enter a decimal number between 0.5 and 2.5, current choice or 'c'."
    )


def test_datetime_uses_injected_parser() -> None:
    moment = datetime(2026, 1, 2, 9, 30)
    recognizer = DateTimeRecognizer(
        "arrival",
        PHRASES,
        parser=lambda text: moment if text == "soon" else None,
        help_template=DEFAULT_TEMPLATES[TemplateUsage.DATETIME_HELP],
    )

    assert list(recognizer.matches("soon")) == [TermMatch(0, 4, 1.0, moment)]
    assert list(recognizer.matches("later")) == []
    assert recognizer.value_description(moment) == "02.01.2026"
    assert recognizer.valid_inputs(moment) == ["02.01.2026"]


def test_datetime_default_parser_resolves_dates() -> None:
    recognizer = DateTimeRecognizer(
        "arrival", PHRASES, help_template=DEFAULT_TEMPLATES[TemplateUsage.DATETIME_HELP]
    )

    matches = list(recognizer.matches("2026-03-01 09:15"))

    assert matches == [TermMatch(0, 16, 1.0, datetime(2026, 3, 1, 9, 15))]
    assert list(recognizer.matches("banana split")) == []


def test_repr_names_variant_and_field() -> None:
    assert repr(_integer()) == "IntegerRecognizer(quantity)"
