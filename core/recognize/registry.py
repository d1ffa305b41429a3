"""Recognizer registry keyed by field kind."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, get_args

from core.config.models import PhraseConfig
from core.fields.models import FieldKind, FieldSpec
from core.recognize.base import Recognizer
from core.recognize.datetime_phrases import DateTimeParser
from core.recognize.enumeration import EnumerationRecognizer
from core.recognize.primitives import (
    BoolRecognizer,
    DateTimeRecognizer,
    IntegerRecognizer,
    RealRecognizer,
    StringRecognizer,
)
from core.templates.models import FieldTemplates, TemplateProvider, TemplateRenderer, TemplateUsage
from core.utils.errors import RecognizerConfigError


class _BuildContext:
    def __init__(
        self,
        field: FieldSpec,
        phrases: PhraseConfig,
        templates: TemplateProvider,
        renderer: TemplateRenderer | None,
        datetime_parser: DateTimeParser | None,
    ) -> None:
        self.field = field
        self.phrases = phrases
        self.templates = templates
        self.renderer = renderer
        self.datetime_parser = datetime_parser

    def primitive_kwargs(self, usage: TemplateUsage) -> dict[str, Any]:
        return {
            "help_template": self.templates.template(usage),
            "optional": self.field.optional,
            "nullable": self.field.is_nullable,
            "renderer": self.renderer,
        }


RecognizerFactory = Callable[[_BuildContext], Recognizer]


def _enum_help_usage(field: FieldSpec) -> TemplateUsage:
    if field.allow_numbers:
        if field.allows_multiple:
            return TemplateUsage.ENUM_MANY_NUMBER_HELP
        return TemplateUsage.ENUM_ONE_NUMBER_HELP
    if field.allows_multiple:
        return TemplateUsage.ENUM_MANY_WORD_HELP
    return TemplateUsage.ENUM_ONE_WORD_HELP


def _build_enum(context: _BuildContext) -> Recognizer:
    field = context.field

    def describe(value: Any) -> str:
        return field.value_spec(value).display

    def terms_for(value: Any) -> list[str]:
        return field.value_spec(value).match_terms

    return EnumerationRecognizer(
        field.display,
        [spec.value for spec in field.values],
        describe,
        terms_for,
        help_template=context.templates.template(_enum_help_usage(field)),
        allow_numbers=field.allow_numbers,
        field_terms=field.terms,
        no_preference=context.phrases.no_preference if field.optional else None,
        current_choice=context.phrases.current_choice,
        renderer=context.renderer,
    )


def _build_bool(context: _BuildContext) -> Recognizer:
    return BoolRecognizer(
        context.field.name,
        context.phrases,
        **context.primitive_kwargs(TemplateUsage.BOOL_HELP),
    )


def _build_string(context: _BuildContext) -> Recognizer:
    return StringRecognizer(
        context.field.name,
        context.phrases,
        **context.primitive_kwargs(TemplateUsage.STRING_HELP),
    )


def _build_integer(context: _BuildContext) -> Recognizer:
    limits = context.field.limits
    return IntegerRecognizer(
        context.field.name,
        context.phrases,
        minimum=_as_int(limits.min) if limits else None,
        maximum=_as_int(limits.max) if limits else None,
        show_limits=bool(limits and limits.show),
        **context.primitive_kwargs(TemplateUsage.INTEGER_HELP),
    )


def _build_real(context: _BuildContext) -> Recognizer:
    limits = context.field.limits
    return RealRecognizer(
        context.field.name,
        context.phrases,
        minimum=limits.min if limits else None,
        maximum=limits.max if limits else None,
        show_limits=bool(limits and limits.show),
        **context.primitive_kwargs(TemplateUsage.DOUBLE_HELP),
    )


def _build_datetime(context: _BuildContext) -> Recognizer:
    return DateTimeRecognizer(
        context.field.name,
        context.phrases,
        parser=context.datetime_parser,
        **context.primitive_kwargs(TemplateUsage.DATETIME_HELP),
    )


_SUPPORTED_KINDS: dict[str, RecognizerFactory] = {
    "enum": _build_enum,
    "bool": _build_bool,
    "string": _build_string,
    "integer": _build_integer,
    "real": _build_real,
    "datetime": _build_datetime,
}


def create_recognizer(
    field: FieldSpec,
    phrases: PhraseConfig,
    *,
    templates: TemplateProvider | None = None,
    renderer: TemplateRenderer | None = None,
    datetime_parser: DateTimeParser | None = None,
) -> Recognizer:
    """Build the recognizer matching ``field.kind``."""

    try:
        factory = _SUPPORTED_KINDS[field.kind]
    except KeyError as exc:
        raise RecognizerConfigError(
            f"Unsupported field kind: {field.kind}", field_name=field.name
        ) from exc
    context = _BuildContext(
        field,
        phrases,
        templates or FieldTemplates(field.templates),
        renderer,
        datetime_parser,
    )
    return factory(context)


def list_supported_kinds() -> list[str]:
    """Return supported field kinds in stable order."""

    return sorted(_SUPPORTED_KINDS)


def _as_int(bound: float | None) -> int | None:
    return int(bound) if bound is not None else None


def _assert_registry_alignment() -> None:
    """Fail fast when the factory table and the field kind schema diverge."""

    schema_kinds = set(get_args(FieldKind))
    if schema_kinds != set(_SUPPORTED_KINDS):
        raise RuntimeError(
            "Recognizer registry must cover every field kind: "
            f"registry={sorted(_SUPPORTED_KINDS)}, schema={sorted(schema_kinds)}"
        )


_assert_registry_alignment()
