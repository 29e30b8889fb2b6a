"""Placeholder scanner for ``{...}`` spans."""

from __future__ import annotations

import re

from quicklink.templates.models import PlaceholderSpan

PLACEHOLDER_RE = re.compile(r"\{([^}]+)\}")


def scan_placeholders(template: str) -> list[PlaceholderSpan]:
    """Return every placeholder span in left-to-right source order.

    The first ``}`` closes a span, so an inner ``{`` is part of the content:
    ``{{clipboard}}`` yields one span whose content is ``{clipboard``.
    """

    return [
        PlaceholderSpan(start=match.start(), end=match.end(), raw_content=match.group(1))
        for match in PLACEHOLDER_RE.finditer(template)
    ]
