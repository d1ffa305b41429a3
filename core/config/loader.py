"""Phrase configuration loading utilities."""

from __future__ import annotations

from pathlib import Path

import yaml  # type: ignore[import-untyped]
from pydantic import ValidationError

from core.config.models import PhraseConfig


def load_phrases(path: Path | None = None) -> PhraseConfig:
    """Load and validate phrase configuration from YAML."""

    phrases_path = path or Path(__file__).with_name("phrases.yaml")

    try:
        raw = yaml.safe_load(phrases_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ValueError(f"Phrase file not found: {phrases_path}") from exc
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in phrase file: {phrases_path}") from exc

    if not isinstance(raw, dict):
        raise ValueError(f"Phrase file must contain a mapping: {phrases_path}")

    try:
        return PhraseConfig.model_validate(_stringify_phrases(raw))
    except ValidationError as exc:
        raise ValueError(f"Invalid phrase schema: {phrases_path}") from exc


def _stringify_phrases(raw: dict[object, object]) -> dict[object, object]:
    # YAML 1.1 turns bare yes/no/1 into bools and ints, keys included.
    normalized = dict(raw)
    for flag, key in ((True, "yes"), (False, "no")):
        if flag in normalized and key not in normalized:
            normalized[key] = normalized.pop(flag)
    for key in ("yes", "no", "no_preference", "current_choice"):
        value = normalized.get(key)
        if isinstance(value, list):
            normalized[key] = [_phrase_text(item) for item in value]
    return normalized


def _phrase_text(item: object) -> object:
    if isinstance(item, bool):
        return "yes" if item else "no"
    if isinstance(item, (int, float)):
        return str(item)
    return item
