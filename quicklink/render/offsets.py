"""Date offset tokens such as ``+7d`` or ``-1M``."""

from __future__ import annotations

import calendar
import re
from datetime import datetime, timedelta, timezone

_OFFSET_RE = re.compile(r"([+-])([0-9]+)([mhdMy])")

OFFSET_UNITS: dict[str, str] = {
    "m": "minutes",
    "h": "hours",
    "d": "days",
    "M": "months",
    "y": "years",
}


def apply_offset(instant: datetime, token: str) -> datetime:
    """Shift ``instant`` by an offset token.

    Units are case-sensitive: ``m`` minutes, ``h`` hours, ``d`` days, ``M``
    months, ``y`` years. Minutes/hours/days are fixed durations; months and
    years move the calendar fields and clamp the day to the end of the target
    month. Malformed or out-of-range tokens return ``instant`` unchanged.
    """

    match = _OFFSET_RE.fullmatch(token.strip())
    if match is None:
        return instant

    sign, digits, unit = match.groups()
    amount = int(digits) if sign == "+" else -int(digits)

    try:
        if unit == "M":
            return add_months(instant, amount)
        if unit == "y":
            return add_months(instant, amount * 12)
        return add_duration(instant, timedelta(**{OFFSET_UNITS[unit]: amount}))
    except (OverflowError, ValueError):
        return instant


def add_duration(instant: datetime, delta: timedelta) -> datetime:
    """Add elapsed time; aware instants step in UTC so DST shifts are honored."""

    if instant.tzinfo is None:
        return instant + delta
    return (instant.astimezone(timezone.utc) + delta).astimezone(instant.tzinfo)


def add_months(instant: datetime, months: int) -> datetime:
    """Add calendar months, clamping the day to the target month length."""

    month_index = instant.year * 12 + (instant.month - 1) + months
    year, month_zero = divmod(month_index, 12)
    month = month_zero + 1
    last_day = calendar.monthrange(year, month)[1]
    return instant.replace(year=year, month=month, day=min(instant.day, last_day))
