"""Process-wide phrase configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PhraseConfig(BaseModel):
    """Phrase lists shared by every recognizer; the first entry is canonical."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    yes: list[str] = Field(min_length=1)
    no: list[str] = Field(min_length=1)
    no_preference: list[str] = Field(min_length=1)
    current_choice: list[str] = Field(min_length=1)
    datetime_format: str = "%Y-%m-%d %H:%M"
