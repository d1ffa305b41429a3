"""Help template models and the default template set."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Protocol


class TemplateUsage(str, Enum):
    """Where a help template is used."""

    ENUM_ONE_NUMBER_HELP = "enum_one_number_help"
    ENUM_MANY_NUMBER_HELP = "enum_many_number_help"
    ENUM_ONE_WORD_HELP = "enum_one_word_help"
    ENUM_MANY_WORD_HELP = "enum_many_word_help"
    BOOL_HELP = "bool_help"
    STRING_HELP = "string_help"
    INTEGER_HELP = "integer_help"
    DOUBLE_HELP = "double_help"
    DATETIME_HELP = "datetime_help"


@dataclass(frozen=True)
class Template:
    """Pattern text plus the separators used when joining lists into it."""

    pattern: str
    separator: str = ", "
    last_separator: str = ", or "


class TemplateProvider(Protocol):
    """Supplies the template a recognizer should use for a usage."""

    def template(self, usage: TemplateUsage) -> Template:
        """Return the template for ``usage``."""


class TemplateRenderer(Protocol):
    """Turns a template and its argument list into end-user text."""

    def render(
        self,
        template: Template,
        state: object | None,
        field_name: str,
        args: Sequence[object | None],
    ) -> str:
        """Render ``template`` for ``field_name`` with positional ``args``."""


_CHOICE_SHORTCUTS = "{?, {0}}{?, {1}}"

DEFAULT_TEMPLATES: Mapping[TemplateUsage, Template] = MappingProxyType(
    {
        TemplateUsage.ENUM_ONE_NUMBER_HELP: Template(
            "You can enter a number {0}-{1} or words from the descriptions. ({2})"
        ),
        TemplateUsage.ENUM_MANY_NUMBER_HELP: Template(
            "You can enter one or more selections from {0}-{1} "
            "or words from the descriptions. ({2})",
            last_separator=", and ",
        ),
        TemplateUsage.ENUM_ONE_WORD_HELP: Template(
            "You can enter any words from the descriptions. ({2})"
        ),
        TemplateUsage.ENUM_MANY_WORD_HELP: Template(
            "You can enter one or more selections from words in the descriptions. ({2})",
            last_separator=", and ",
        ),
        TemplateUsage.BOOL_HELP: Template("Please enter 'yes' or 'no'" + _CHOICE_SHORTCUTS + "."),
        TemplateUsage.STRING_HELP: Template("You can enter anything" + _CHOICE_SHORTCUTS + "."),
        TemplateUsage.INTEGER_HELP: Template(
            "You can enter a number{? between {2} and {3}}" + _CHOICE_SHORTCUTS + "."
        ),
        TemplateUsage.DOUBLE_HELP: Template(
            "You can enter a decimal number{? between {2} and {3}}" + _CHOICE_SHORTCUTS + "."
        ),
        TemplateUsage.DATETIME_HELP: Template(
            "Please enter a date or time expression like 'Monday' or 'July 3rd'"
            + _CHOICE_SHORTCUTS
            + "."
        ),
    }
)


class FieldTemplates:
    """Template provider layering per-field overrides over the defaults."""

    def __init__(self, overrides: Mapping[TemplateUsage, str] | None = None) -> None:
        self._templates = dict(DEFAULT_TEMPLATES)
        for usage, pattern in (overrides or {}).items():
            base = DEFAULT_TEMPLATES[usage]
            self._templates[usage] = Template(
                pattern, separator=base.separator, last_separator=base.last_separator
            )

    def template(self, usage: TemplateUsage) -> Template:
        return self._templates[usage]


def build_list(items: Sequence[str], separator: str, last_separator: str) -> str:
    """Join ``items`` into prose, using ``last_separator`` before the final item."""

    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    return separator.join(items[:-1]) + last_separator + items[-1]
