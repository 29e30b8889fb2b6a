"""Text modifiers applied after placeholder resolution."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from urllib.parse import quote

Modifier = Callable[[str], str]

# Unreserved set: ASCII letters and digits are always kept by ``quote``.
_PERCENT_SAFE = "-._~"


def percent_encode(value: str) -> str:
    """Percent-encode UTF-8 bytes outside ``A-Z a-z 0-9 - . _ ~``.

    Text that cannot be encoded as UTF-8 (lone surrogates) is returned unchanged.
    """

    try:
        return quote(value, safe=_PERCENT_SAFE)
    except UnicodeEncodeError:
        return value


def json_stringify(value: str) -> str:
    """Escape for embedding as a JSON string literal and wrap in quotes."""

    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


_SUPPORTED_MODIFIERS: dict[str, Modifier] = {
    "json-stringify": json_stringify,
    "lowercase": str.lower,
    "percent-encode": percent_encode,
    "trim": str.strip,
    "uppercase": str.upper,
}


def apply_modifier(value: str, name: str) -> str:
    """Apply one modifier by case-insensitive name; unknown names are no-ops."""

    modifier = _SUPPORTED_MODIFIERS.get(name.lower())
    if modifier is None:
        return value
    return modifier(value)


def apply_modifiers(value: str, names: Iterable[str]) -> str:
    """Fold modifiers left to right."""

    for name in names:
        value = apply_modifier(value, name)
    return value


def list_supported_modifiers() -> list[str]:
    """Return supported modifier names in stable order."""

    return sorted(_SUPPORTED_MODIFIERS)
