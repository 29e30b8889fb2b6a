"""Attribute extraction for ``key="value"`` and ``key=value`` pairs."""

from __future__ import annotations

import re

# Keys cannot be the tail of a longer identifier (``username=`` is not ``name=``).
_KEY_BOUNDARY = r"(?<![\w-])"
_QUOTED_PAIR_RE = re.compile(_KEY_BOUNDARY + r"[A-Za-z_][\w-]*=\"[^\"]*\"")


def extract_attribute(content: str, key: str) -> str | None:
    """Extract the value of ``key`` from placeholder content.

    The quoted form wins over the unquoted one. A quoted value is returned
    verbatim and may contain spaces, ``|`` and ``=``; an unquoted value ends
    at the first whitespace character.
    """

    escaped_key = re.escape(key)
    quoted = re.search(_KEY_BOUNDARY + escaped_key + r"=\"([^\"]*)\"", content)
    if quoted is not None:
        return quoted.group(1)

    unquoted = re.search(_KEY_BOUNDARY + escaped_key + r"=(\S+)", content)
    if unquoted is not None:
        return unquoted.group(1)
    return None


def strip_quoted_pairs(content: str) -> str:
    """Remove every ``key="..."`` pair, leaving stray quotes behind."""

    return _QUOTED_PAIR_RE.sub("", content)
