"""Field and form metadata consumed by recognizers."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from core.templates.models import TemplateUsage

FieldKind = Literal["enum", "bool", "string", "integer", "real", "datetime"]

_NULLABLE_BY_DEFAULT = frozenset({"enum", "string"})


class ValueSpec(BaseModel):
    """One legal value of an enumerated field."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    value: Any
    description: str | None = None
    terms: list[str] = Field(default_factory=list)

    @property
    def display(self) -> str:
        return self.description if self.description is not None else str(self.value)

    @property
    def match_terms(self) -> list[str]:
        return self.terms or [self.display]


class FieldLimits(BaseModel):
    """Inclusive numeric bounds; ``show`` puts them into help text."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    min: float | None = None
    max: float | None = None
    show: bool = True


class FieldSpec(BaseModel):
    """Read-only snapshot of one form field."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    kind: FieldKind
    description: str | None = None
    terms: list[str] = Field(default_factory=list)
    values: list[ValueSpec] = Field(default_factory=list)
    allow_numbers: bool = True
    allows_multiple: bool = False
    optional: bool = False
    nullable: bool | None = None
    limits: FieldLimits | None = None
    templates: dict[TemplateUsage, str] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_values(self) -> FieldSpec:
        if self.kind == "enum" and not self.values:
            raise ValueError(f"Enumerated field '{self.name}' needs at least one value")
        if self.kind != "enum" and self.values:
            raise ValueError(f"Only enumerated fields take values: '{self.name}'")
        for index, spec in enumerate(self.values):
            if any(spec.value == other.value for other in self.values[:index]):
                raise ValueError(f"Duplicate value {spec.value!r} in field '{self.name}'")
        return self

    @property
    def display(self) -> str:
        return self.description or self.name

    @property
    def is_nullable(self) -> bool:
        if self.nullable is None:
            return self.kind in _NULLABLE_BY_DEFAULT
        return self.nullable

    def value_spec(self, value: Any) -> ValueSpec:
        for spec in self.values:
            if spec.value == value:
                return spec
        raise KeyError(value)


class FormSpec(BaseModel):
    """A named collection of fields."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    fields: list[FieldSpec] = Field(default_factory=list)

    def field(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise ValueError(f"Unknown field '{name}' in form '{self.name}'")
