"""Placeholder grammar parser.

Supported base expressions:
- ``clipboard`` / ``selection``
- ``date`` / ``time`` / ``datetime`` with optional ``format=`` and ``offset=``
- ``argument name=... [default=...] [options=...]``

Anything else is ``unknown`` and is left untouched by the processor.
"""

from __future__ import annotations

from quicklink.templates.attributes import extract_attribute
from quicklink.templates.models import ParsedPlaceholder, PlaceholderKind
from quicklink.templates.options import parse_options
from quicklink.utils.errors import PlaceholderSyntaxError

_QUOTE = '"'
_PIPE = "|"


def split_segments(content: str) -> list[str]:
    """Split content on ``|`` outside double-quoted values.

    Returns raw (untrimmed) segments with empty pieces dropped, so
    ``|clipboard`` has base ``clipboard`` and content made only of pipes
    yields no segments at all.
    """

    segments: list[str] = []
    buffer: list[str] = []
    in_quotes = False

    for char in content:
        if char == _QUOTE:
            in_quotes = not in_quotes
        elif char == _PIPE and not in_quotes:
            segments.append("".join(buffer))
            buffer = []
            continue
        buffer.append(char)
    segments.append("".join(buffer))

    return [segment for segment in segments if segment]


def parse_placeholder(raw_content: str) -> ParsedPlaceholder:
    """Parse raw placeholder content (text between the braces).

    Raises:
        PlaceholderSyntaxError: content has no segments (e.g. ``{|}``).
    """

    segments = split_segments(raw_content)
    if not segments:
        raise PlaceholderSyntaxError("Empty placeholder", raw_content=raw_content)

    base = segments[0].strip()
    modifiers = tuple(
        name for name in (segment.strip() for segment in segments[1:]) if name
    )

    if base == "clipboard":
        return ParsedPlaceholder(kind="clipboard", base=base, modifiers=modifiers)
    if base == "selection":
        return ParsedPlaceholder(kind="selection", base=base, modifiers=modifiers)
    if _is_keyword(base, "time"):
        return _parse_date_like("time", base, modifiers)
    if _is_keyword(base, "datetime"):
        return _parse_date_like("datetime", base, modifiers)
    if base.startswith("argument"):
        return _parse_argument(base, modifiers)
    if _is_keyword(base, "date"):
        return _parse_date_like("date", base, modifiers)
    return ParsedPlaceholder(kind="unknown", base=base, modifiers=modifiers)


def _is_keyword(base: str, keyword: str) -> bool:
    if base == keyword:
        return True
    return base.startswith(keyword) and base[len(keyword)].isspace()


def _parse_argument(base: str, modifiers: tuple[str, ...]) -> ParsedPlaceholder:
    name = extract_attribute(base, "name")
    if name is None:
        return ParsedPlaceholder(kind="unknown", base=base, modifiers=modifiers)

    raw_options = extract_attribute(base, "options")
    return ParsedPlaceholder(
        kind="argument",
        base=base,
        modifiers=modifiers,
        name=name,
        default=extract_attribute(base, "default"),
        options=tuple(parse_options(raw_options)) if raw_options is not None else None,
    )


def _parse_date_like(
    kind: PlaceholderKind, base: str, modifiers: tuple[str, ...]
) -> ParsedPlaceholder:
    return ParsedPlaceholder(
        kind=kind,
        base=base,
        modifiers=modifiers,
        format=extract_attribute(base, "format"),
        offset=extract_attribute(base, "offset"),
    )
