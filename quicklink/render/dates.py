"""Date rendering with Unicode date-pattern syntax (``yyyy-MM-dd``, ``MMM d``...).

Rules:
- Runs of the same pattern letter form one field; the run length selects the width.
- Text inside single quotes is literal; ``''`` is a literal quote.
- Non-letter characters are literal.
- An unquoted ASCII letter outside the supported set makes the whole pattern
  unsupported; it is then echoed verbatim instead of raising.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from quicklink.render.models import RenderPolicy
from quicklink.render.offsets import apply_offset
from quicklink.templates.models import ParsedPlaceholder

_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_QUARTER_ORDINALS = ("1st", "2nd", "3rd", "4th")

_FIELD_CHARS = frozenset("GyYuQqMLwdDEecahHKkmsSZxXz")

Token = tuple[str, str, int]


class UnsupportedPatternError(ValueError):
    """Raised when a date pattern uses an unsupported field letter."""


def tokenize_pattern(pattern: str) -> list[Token]:
    """Split a date pattern into ``("field", char, width)`` / ``("literal", text, 0)``."""

    tokens: list[Token] = []
    index = 0
    length = len(pattern)

    while index < length:
        char = pattern[index]

        if char == "'":
            if index + 1 < length and pattern[index + 1] == "'":
                tokens.append(("literal", "'", 0))
                index += 2
                continue
            chunk: list[str] = []
            index += 1
            while index < length:
                if pattern[index] == "'":
                    if index + 1 < length and pattern[index + 1] == "'":
                        chunk.append("'")
                        index += 2
                        continue
                    break
                chunk.append(pattern[index])
                index += 1
            tokens.append(("literal", "".join(chunk), 0))
            index += 1
            continue

        if char.isascii() and char.isalpha():
            if char not in _FIELD_CHARS:
                raise UnsupportedPatternError(f"Unsupported date pattern field: {char}")
            end = index
            while end < length and pattern[end] == char:
                end += 1
            tokens.append(("field", char, end - index))
            index = end
            continue

        tokens.append(("literal", char, 0))
        index += 1

    return tokens


def format_pattern(instant: datetime, pattern: str) -> str:
    """Render ``instant`` with a date pattern; unsupported patterns are echoed."""

    try:
        tokens = tokenize_pattern(pattern)
    except UnsupportedPatternError:
        return pattern

    parts: list[str] = []
    for token_type, value, width in tokens:
        if token_type == "literal":
            parts.append(value)
        else:
            parts.append(_format_field(instant, value, width))
    return "".join(parts)


def localize(instant: datetime, policy: RenderPolicy) -> datetime:
    """Convert aware instants to the policy timezone when one is configured."""

    if policy.timezone is None or instant.tzinfo is None:
        return instant
    return instant.astimezone(ZoneInfo(policy.timezone))


def render_date_placeholder(
    placeholder: ParsedPlaceholder, instant: datetime, policy: RenderPolicy
) -> str:
    """Render a ``date``/``time``/``datetime`` placeholder."""

    working = localize(instant, policy)
    if placeholder.offset is not None:
        working = apply_offset(working, placeholder.offset)

    if placeholder.format is not None:
        return format_pattern(working, placeholder.format)

    if placeholder.kind == "time":
        return format_pattern(working, policy.short_time_pattern)
    if placeholder.kind == "datetime":
        return policy.datetime_pattern.replace(
            "{date}", format_pattern(working, policy.medium_date_pattern)
        ).replace("{time}", format_pattern(working, policy.short_time_pattern))
    return format_pattern(working, policy.medium_date_pattern)


def _format_field(instant: datetime, char: str, width: int) -> str:
    if char == "G":
        if width == 4:
            return "Anno Domini"
        return "A" if width == 5 else "AD"
    if char in {"y", "u"}:
        return _format_year(instant.year, width)
    if char == "Y":
        return _format_year(instant.isocalendar()[0], width)
    if char in {"Q", "q"}:
        quarter = (instant.month - 1) // 3 + 1
        if width == 3:
            return f"Q{quarter}"
        if width >= 4:
            return f"{_QUARTER_ORDINALS[quarter - 1]} quarter"
        return _pad(quarter, width)
    if char in {"M", "L"}:
        return _format_text_or_number(instant.month, _MONTH_NAMES[instant.month - 1], width)
    if char == "w":
        return _pad(instant.isocalendar()[1], width)
    if char == "d":
        return _pad(instant.day, width)
    if char == "D":
        return _pad(instant.timetuple().tm_yday, width)
    if char == "E":
        return _format_weekday(instant, max(width, 3))
    if char in {"e", "c"}:
        if width <= 2:
            # Sunday-first numbering (Sunday == 1).
            return _pad(instant.isoweekday() % 7 + 1, width)
        return _format_weekday(instant, width)
    if char == "a":
        return "AM" if instant.hour < 12 else "PM"
    if char == "h":
        return _pad(instant.hour % 12 or 12, width)
    if char == "H":
        return _pad(instant.hour, width)
    if char == "K":
        return _pad(instant.hour % 12, width)
    if char == "k":
        return _pad(instant.hour or 24, width)
    if char == "m":
        return _pad(instant.minute, width)
    if char == "s":
        return _pad(instant.second, width)
    if char == "S":
        return f"{instant.microsecond:06d}"[:width].ljust(width, "0")
    return _format_zone(instant, char, width)


def _format_year(year: int, width: int) -> str:
    if width == 2:
        return f"{year % 100:02d}"
    return _pad(year, width)


def _format_text_or_number(number: int, name: str, width: int) -> str:
    if width <= 2:
        return _pad(number, width)
    if width == 3:
        return name[:3]
    if width == 4:
        return name
    return name[0]


def _format_weekday(instant: datetime, width: int) -> str:
    name = _WEEKDAY_NAMES[instant.weekday()]
    if width == 4:
        return name
    if width == 5:
        return name[0]
    if width >= 6:
        return name[:2]
    return name[:3]


def _format_zone(instant: datetime, char: str, width: int) -> str:
    offset = instant.utcoffset() or timedelta(0)
    total_minutes = int(offset.total_seconds()) // 60
    sign = "-" if total_minutes < 0 else "+"
    hours, minutes = divmod(abs(total_minutes), 60)

    if char == "z":
        name = instant.tzname()
        if name:
            return name
        return "GMT" if total_minutes == 0 else f"GMT{sign}{hours}:{minutes:02d}"
    if char == "X" and total_minutes == 0:
        return "Z"
    if char == "Z":
        if width == 4:
            return "GMT" if total_minutes == 0 else f"GMT{sign}{hours:02d}:{minutes:02d}"
        if width == 5:
            return "Z" if total_minutes == 0 else f"{sign}{hours:02d}:{minutes:02d}"
        return f"{sign}{hours:02d}{minutes:02d}"
    if width == 1:
        return f"{sign}{hours:02d}" + (f"{minutes:02d}" if minutes else "")
    if width == 2:
        return f"{sign}{hours:02d}{minutes:02d}"
    return f"{sign}{hours:02d}:{minutes:02d}"


def _pad(number: int, width: int) -> str:
    return str(number).zfill(width)
