"""Form metadata loading utilities."""

from __future__ import annotations

from pathlib import Path

import yaml  # type: ignore[import-untyped]
from pydantic import ValidationError

from core.fields.models import FormSpec


def load_form(path: Path) -> FormSpec:
    """Load and validate a form definition from YAML."""

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ValueError(f"Form file not found: {path}") from exc
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in form file: {path}") from exc

    if not isinstance(raw, dict):
        raise ValueError(f"Form file must contain a mapping: {path}")

    try:
        return FormSpec.model_validate(raw)
    except ValidationError as exc:
        raise ValueError(f"Invalid form schema: {path}") from exc
