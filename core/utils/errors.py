"""Custom exceptions for core logic."""

from __future__ import annotations


class RecognizerConfigError(Exception):
    """Raised when a recognizer cannot be built from its field configuration."""

    def __init__(self, message: str, *, field_name: str | None = None) -> None:
        super().__init__(message)
        self.field_name = field_name
