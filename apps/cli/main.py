"""Typer CLI entrypoint for formrecog."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, Any, NoReturn

import typer

from core.config.loader import load_phrases
from core.fields.loader import load_form
from core.recognize.base import Recognizer
from core.recognize.models import MatchKind
from core.recognize.registry import create_recognizer
from core.utils.errors import RecognizerConfigError
from core.utils.events import log_event

app = typer.Typer(help="Form value recognizer CLI", rich_markup_mode=None)
logger = logging.getLogger("formrecog.cli")

_CONFIG_ERROR_EXIT = 2


@app.callback()
def cli_callback() -> None:
    """CLI root callback to keep commands in explicit `formrecog <command>` form."""


@app.command("match")
def match_command(
    form: Annotated[Path, typer.Option(..., exists=True, dir_okay=False, file_okay=True)],
    field: Annotated[str, typer.Option(...)],
    text: Annotated[str, typer.Option("--input")],
    default: Annotated[str | None, typer.Option()] = None,
    phrases: Annotated[Path | None, typer.Option()] = None,
) -> None:
    """Print every candidate match for the input, in production order."""

    recognizer = _build_recognizer(form, field, phrases)
    default_value = _resolve_default(recognizer, field, default)
    matches = [match.to_dict() for match in recognizer.matches(text, default_value)]
    log_event(logger, logging.INFO, "match", field=field, match_count=len(matches))
    typer.echo(json.dumps(matches, ensure_ascii=False, default=str))


@app.command("help")
def help_command(
    form: Annotated[Path, typer.Option(..., exists=True, dir_okay=False, file_okay=True)],
    field: Annotated[str, typer.Option(...)],
    default: Annotated[str | None, typer.Option()] = None,
    phrases: Annotated[Path | None, typer.Option()] = None,
) -> None:
    """Print the help text describing accepted inputs for a field."""

    recognizer = _build_recognizer(form, field, phrases)
    default_value = _resolve_default(recognizer, field, default)
    log_event(logger, logging.INFO, "help", field=field, has_default=default_value is not None)
    typer.echo(recognizer.help(None, default_value))


def _build_recognizer(form_path: Path, field_name: str, phrases_path: Path | None) -> Recognizer:
    try:
        form_spec = load_form(form_path)
        field_spec = form_spec.field(field_name)
        recognizer = create_recognizer(field_spec, load_phrases(phrases_path))
    except (ValueError, RecognizerConfigError) as exc:
        _fail(str(exc), field=field_name)
    return recognizer


def _resolve_default(recognizer: Recognizer, field_name: str, default_text: str | None) -> Any:
    """Turn the `--default` text into a typed field value via the field's own recognizer."""

    if default_text is None:
        return None
    candidates = [
        match for match in recognizer.matches(default_text) if match.kind is MatchKind.VALUE
    ]
    if not candidates:
        _fail(
            f"Default value '{default_text}' is not recognized for field '{field_name}'",
            field=field_name,
        )
    best = max(candidates, key=lambda match: (match.confidence, match.length))
    return best.value


def _fail(message: str, **fields: Any) -> NoReturn:
    log_event(logger, logging.ERROR, "config_error", message=message, **fields)
    typer.echo(message, err=True)
    raise typer.Exit(code=_CONFIG_ERROR_EXIT)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
