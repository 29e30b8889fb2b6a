"""Read-only template analysis."""

from __future__ import annotations

from quicklink.analysis.models import ArgumentInfo, TemplateInfo
from quicklink.templates.grammar import parse_placeholder
from quicklink.templates.models import ParsedPlaceholder
from quicklink.templates.scanner import scan_placeholders
from quicklink.utils.errors import PlaceholderSyntaxError


def analyze(template: str) -> TemplateInfo:
    """Summarize the inputs a template needs without resolving anything.

    Arguments are de-duplicated by name (first occurrence wins); date formats
    are kept in source order including duplicates. Malformed placeholders are
    skipped.
    """

    info = TemplateInfo()
    seen_arguments: set[str] = set()

    for span in scan_placeholders(template):
        try:
            placeholder = parse_placeholder(span.raw_content)
        except PlaceholderSyntaxError:
            continue

        if placeholder.kind == "argument" and placeholder.name is not None:
            if placeholder.name not in seen_arguments:
                info.arguments.append(argument_info(placeholder))
                seen_arguments.add(placeholder.name)
        elif placeholder.kind == "clipboard":
            info.uses_clipboard = True
        elif placeholder.kind == "selection":
            info.uses_selection = True
        elif placeholder.is_date_like:
            info.uses_date = True
            if placeholder.format is not None:
                info.date_formats.append(placeholder.format)

    return info


def argument_info(placeholder: ParsedPlaceholder) -> ArgumentInfo:
    """Build argument metadata from a parsed argument placeholder."""

    if placeholder.name is None:
        raise ValueError(f"Not an argument placeholder: {placeholder.base}")
    return ArgumentInfo(
        name=placeholder.name,
        default=placeholder.default,
        options=list(placeholder.options) if placeholder.options is not None else None,
        required=placeholder.required,
    )
