"""Template syntax validation."""

from __future__ import annotations

from quicklink.analysis.models import ValidationResult
from quicklink.templates.attributes import extract_attribute, strip_quoted_pairs
from quicklink.templates.grammar import split_segments
from quicklink.templates.scanner import scan_placeholders

_OPEN_BRACE = "{"
_CLOSE_BRACE = "}"


def validate(template: str) -> bool:
    """Return True when the template has no syntax diagnostics."""

    return validate_with_errors(template).is_valid


def validate_with_errors(template: str) -> ValidationResult:
    """Check brace balance and the shape of every placeholder.

    Unknown placeholder kinds and unknown modifier names are accepted.
    """

    errors = find_brace_errors(template)
    for span in scan_placeholders(template):
        error = validate_placeholder_content(span.raw_content)
        if error is not None:
            errors.append(error)
    return ValidationResult.from_errors(errors)


def find_brace_errors(template: str) -> list[str]:
    errors: list[str] = []
    open_count = 0
    last_open = -1

    for index, char in enumerate(template):
        if char == _OPEN_BRACE:
            open_count += 1
            last_open = index
        elif char == _CLOSE_BRACE:
            open_count -= 1
            if open_count < 0:
                errors.append(f"Unexpected closing brace at position {index}")
                open_count = 0

    if open_count > 0:
        errors.append(f"Unclosed placeholder starting at position {last_open}")
    return errors


def validate_placeholder_content(content: str) -> str | None:
    """Return a diagnostic for malformed placeholder content, or None."""

    segments = split_segments(content)
    if not segments:
        return "Empty placeholder content"

    base = segments[0].strip()
    if '"' in strip_quoted_pairs(base):
        return f"Malformed placeholder: {base}"

    if base.startswith("argument") and extract_attribute(base, "name") is None:
        return "Argument placeholder missing required 'name' attribute"
    return None
