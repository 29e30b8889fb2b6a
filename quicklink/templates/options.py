"""Option list parsing for argument placeholders."""

from __future__ import annotations

from quicklink.templates.models import ArgumentOption


def parse_options(raw: str) -> list[ArgumentOption]:
    """Parse ``options`` attribute text into ordered label/value pairs.

    Rules:
    - Tokens are comma-separated and trimmed; empty tokens are skipped.
    - ``Label|value`` splits on the first ``|`` only.
    - A plain token is both label and value.
    """

    options: list[ArgumentOption] = []
    for part in raw.split(","):
        token = part.strip()
        if not token:
            continue
        if "|" in token:
            label, value = token.split("|", 1)
            options.append(ArgumentOption(label=label.strip(), value=value.strip()))
            continue
        options.append(ArgumentOption(label=token, value=token))
    return options
