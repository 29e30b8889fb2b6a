"""Custom exceptions for core logic."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from quicklink.analysis.models import ValidationResult
    from quicklink.render.models import ProcessResult


class PlaceholderSyntaxError(ValueError):
    """Raised when placeholder content has no parseable segments."""

    def __init__(self, message: str, *, raw_content: str) -> None:
        super().__init__(message)
        self.raw_content = raw_content


class TemplateError(Exception):
    """Raised when template validation fails in strict execution paths."""

    def __init__(self, message: str, *, validation: ValidationResult | None = None) -> None:
        super().__init__(message)
        self.validation = validation


class MissingArgumentsError(Exception):
    """Raised when required arguments are missing after processing in strict mode."""

    def __init__(
        self,
        message: str,
        *,
        missing_arguments: list[str],
        result: ProcessResult | None = None,
    ) -> None:
        super().__init__(message)
        self.missing_arguments = missing_arguments
        self.result = result
