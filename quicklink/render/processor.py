"""Template processor: resolve placeholders and substitute them into the output."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime

from quicklink.render.dates import render_date_placeholder
from quicklink.render.models import ProcessResult, RenderPolicy, ReplaceLogEntry
from quicklink.render.modifiers import apply_modifiers
from quicklink.templates.grammar import parse_placeholder
from quicklink.templates.models import ParsedPlaceholder, PlaceholderSpan
from quicklink.templates.scanner import scan_placeholders
from quicklink.utils.errors import PlaceholderSyntaxError

_DEFAULT_POLICY = RenderPolicy()


def process(
    template: str,
    arguments: Mapping[str, str] | None = None,
    clipboard: str | None = None,
    selection: str | None = None,
    reference_instant: datetime | None = None,
    *,
    policy: RenderPolicy | None = None,
) -> ProcessResult:
    """Resolve every placeholder in ``template``.

    Rules:
    - Arguments resolve from an exact-key supplied value, then the declared
      default; otherwise the name is reported missing and the literal is kept.
    - ``{clipboard}``/``{selection}`` without an input value keep their literal.
    - Date-like placeholders always resolve against ``reference_instant``
      (current local time when omitted).
    - Unknown placeholders are passed through unchanged.
    - Output is assembled in source order from literal runs and resolved
      values, so offsets of later spans are never invalidated.
    """

    supplied = arguments or {}
    instant = reference_instant or datetime.now().astimezone()
    active_policy = policy or _DEFAULT_POLICY

    parts: list[str] = []
    entries: list[ReplaceLogEntry] = []
    cursor = 0

    for span in scan_placeholders(template):
        parts.append(template[cursor : span.start])
        entry = _resolve_span(span, supplied, clipboard, selection, instant, active_policy)
        parts.append(entry.new_text if entry.new_text is not None else span.text)
        entries.append(entry)
        cursor = span.end

    parts.append(template[cursor:])
    return ProcessResult.from_entries("".join(parts), entries)


def _resolve_span(
    span: PlaceholderSpan,
    arguments: Mapping[str, str],
    clipboard: str | None,
    selection: str | None,
    instant: datetime,
    policy: RenderPolicy,
) -> ReplaceLogEntry:
    try:
        placeholder = parse_placeholder(span.raw_content)
    except PlaceholderSyntaxError as exc:
        return ReplaceLogEntry(
            status="error",
            start=span.start,
            end=span.end,
            original_text=span.text,
            reason=str(exc),
        )

    if placeholder.kind == "argument" and placeholder.name is not None:
        value = arguments.get(placeholder.name, placeholder.default)
        if value is None:
            return ReplaceLogEntry(
                status="missing",
                kind=placeholder.kind,
                start=span.start,
                end=span.end,
                original_text=span.text,
                argument_name=placeholder.name,
                reason="missing_argument",
            )
    else:
        value = _base_value(placeholder, clipboard, selection, instant, policy)

    if value is None:
        return ReplaceLogEntry(
            status="passthrough",
            kind=placeholder.kind,
            start=span.start,
            end=span.end,
            original_text=span.text,
            reason="unknown_placeholder" if placeholder.kind == "unknown" else "no_input",
        )

    return ReplaceLogEntry(
        status="replaced",
        kind=placeholder.kind,
        start=span.start,
        end=span.end,
        original_text=span.text,
        new_text=apply_modifiers(value, placeholder.modifiers),
        argument_name=placeholder.name,
    )


def _base_value(
    placeholder: ParsedPlaceholder,
    clipboard: str | None,
    selection: str | None,
    instant: datetime,
    policy: RenderPolicy,
) -> str | None:
    if placeholder.kind == "clipboard":
        return clipboard
    if placeholder.kind == "selection":
        return selection
    if placeholder.is_date_like:
        return render_date_placeholder(placeholder, instant, policy)
    return None
