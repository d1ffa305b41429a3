from __future__ import annotations

from datetime import datetime

import pytest

from core.config.models import PhraseConfig
from core.fields.models import FieldLimits, FieldSpec, ValueSpec
from core.recognize.enumeration import EnumerationRecognizer
from core.recognize.models import MatchKind, TermMatch
from core.recognize.primitives import DateTimeRecognizer, IntegerRecognizer, StringRecognizer
from core.recognize.registry import create_recognizer, list_supported_kinds
from core.templates.models import TemplateUsage
from core.utils.errors import RecognizerConfigError

PHRASES = PhraseConfig(
    yes=["yes", "y"],
    no=["no", "n"],
    no_preference=["no preference", "none"],
    current_choice=["current choice", "current"],
)


def _bread_field(**overrides: object) -> FieldSpec:
    data: dict[str, object] = {
        "name": "bread",
        "kind": "enum",
        "description": "Bread",
        "terms": ["bread"],
        "values": [
            ValueSpec(value="white", terms=["white", "plain"]),
            ValueSpec(value="wheat", description="Whole wheat"),
            ValueSpec(value="rye"),
        ],
    }
    data.update(overrides)
    return FieldSpec.model_validate(data)


def test_supported_kinds_cover_field_schema() -> None:
    assert list_supported_kinds() == ["bool", "datetime", "enum", "integer", "real", "string"]


def test_enum_field_builds_enumeration_recognizer() -> None:
    recognizer = create_recognizer(_bread_field(), PHRASES)

    assert isinstance(recognizer, EnumerationRecognizer)
    assert list(recognizer.matches("plain")) == [TermMatch(0, 5, 1.0, "white")]
    assert list(recognizer.matches("3")) == [TermMatch(0, 1, 1.0, "rye")]
    assert [match.kind for match in recognizer.matches("bread")] == [MatchKind.FIELD]


def test_optional_enum_field_accepts_no_preference() -> None:
    recognizer = create_recognizer(_bread_field(optional=True), PHRASES)

    assert list(recognizer.matches("no preference")) == [
        TermMatch(0, 13, 1.0, None, MatchKind.NO_PREFERENCE)
    ]
    assert list(recognizer.matches("4")) == [TermMatch(0, 1, 1.0, None, MatchKind.NO_PREFERENCE)]


def test_required_enum_field_ignores_no_preference_phrases() -> None:
    recognizer = create_recognizer(_bread_field(), PHRASES)

    assert list(recognizer.matches("no preference")) == []


def test_enum_help_template_follows_numbers_and_multiplicity() -> None:
    many = create_recognizer(_bread_field(allows_multiple=True), PHRASES)
    words = create_recognizer(_bread_field(allow_numbers=False), PHRASES)

    assert many.help(None) == (
        "You can enter one or more selections from 1-3 or words from the descriptions. "
        "(white, Whole wheat, and rye)"
    )
    assert words.help(None) == (
        "You can enter any words from the descriptions. (white, Whole wheat, or rye)"
    )


def test_integer_field_uses_limits() -> None:
    field = FieldSpec(name="length", kind="integer", limits=FieldLimits(min=6, max=12))

    recognizer = create_recognizer(field, PHRASES)

    assert isinstance(recognizer, IntegerRecognizer)
    assert [match.value for match in recognizer.matches("12")] == [12]
    assert list(recognizer.matches("13")) == []
    assert recognizer.help(None) == "You can enter a number between 6 and 12."


def test_hidden_limits_stay_out_of_help() -> None:
    field = FieldSpec(
        name="weight", kind="real", limits=FieldLimits(min=0.5, max=2.0, show=False)
    )

    recognizer = create_recognizer(field, PHRASES)

    assert recognizer.help(None) == "You can enter a decimal number."
    assert list(recognizer.matches("2.5")) == []


def test_optional_non_nullable_primitive_is_rejected() -> None:
    field = FieldSpec(name="length", kind="integer", optional=True)

    with pytest.raises(RecognizerConfigError, match="must be nullable"):
        create_recognizer(field, PHRASES)


def test_optional_string_is_nullable_by_default() -> None:
    field = FieldSpec(name="note", kind="string", optional=True)

    recognizer = create_recognizer(field, PHRASES)

    assert isinstance(recognizer, StringRecognizer)
    assert list(recognizer.matches("none")) == [
        TermMatch(0, 4, 1.0, None, MatchKind.NO_PREFERENCE)
    ]


def test_field_template_overrides_default() -> None:
    field = FieldSpec(
        name="length",
        kind="integer",
        limits=FieldLimits(min=6, max=12),
        templates={TemplateUsage.INTEGER_HELP: "{&}: {2} to {3} inches{?, {0}}."},
    )

    recognizer = create_recognizer(field, PHRASES)

    assert recognizer.help(None, 8) == "length: 6 to 12 inches, current choice or 'c'."


def test_datetime_parser_is_injected() -> None:
    moment = datetime(2026, 5, 1, 12, 0)
    field = FieldSpec(name="pickup", kind="datetime")

    recognizer = create_recognizer(field, PHRASES, datetime_parser=lambda text: moment)

    assert isinstance(recognizer, DateTimeRecognizer)
    assert [match.value for match in recognizer.matches("noonish")] == [moment]


def test_identical_configuration_gives_identical_matches() -> None:
    first = create_recognizer(_bread_field(optional=True), PHRASES)
    second = create_recognizer(_bread_field(optional=True), PHRASES)

    text = "plain or rye, or none"
    assert list(first.matches(text, "wheat")) == list(second.matches(text, "wheat"))
