"""Template analysis and validation report models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from quicklink.templates.models import ArgumentOption


class ArgumentInfo(BaseModel):
    """Argument metadata for building input prompts.

    Rules:
    - required == (default is None)
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    default: str | None = None
    options: list[ArgumentOption] | None = None
    required: bool

    @property
    def has_default(self) -> bool:
        return self.default is not None

    @property
    def has_options(self) -> bool:
        return bool(self.options)


class TemplateInfo(BaseModel):
    """Structural summary of a template."""

    model_config = ConfigDict(extra="forbid")

    arguments: list[ArgumentInfo] = Field(default_factory=list)
    uses_clipboard: bool = False
    uses_selection: bool = False
    uses_date: bool = False
    date_formats: list[str] = Field(default_factory=list)

    @property
    def required_arguments(self) -> list[ArgumentInfo]:
        return [argument for argument in self.arguments if argument.required]

    @property
    def optional_arguments(self) -> list[ArgumentInfo]:
        return [argument for argument in self.arguments if not argument.required]


class ValidationResult(BaseModel):
    """Syntax validation output.

    Rules:
    - is_valid == (not errors)
    """

    model_config = ConfigDict(extra="forbid")

    is_valid: bool
    errors: list[str] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def first_error(self) -> str | None:
        return self.errors[0] if self.errors else None

    @classmethod
    def from_errors(cls, errors: list[str]) -> ValidationResult:
        return cls(is_valid=not errors, errors=errors)
