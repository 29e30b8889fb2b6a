"""Data models for placeholder scanning and grammar parsing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

PlaceholderKind = Literal[
    "argument",
    "clipboard",
    "selection",
    "date",
    "time",
    "datetime",
    "unknown",
]

DATE_KINDS: frozenset[str] = frozenset({"date", "time", "datetime"})


@dataclass(frozen=True)
class PlaceholderSpan:
    """A single ``{...}`` occurrence in a template."""

    start: int
    end: int
    raw_content: str

    @property
    def text(self) -> str:
        return "{" + self.raw_content + "}"


@dataclass(frozen=True)
class ArgumentOption:
    """Selectable argument value with its display label."""

    label: str
    value: str


@dataclass(frozen=True)
class ParsedPlaceholder:
    """Typed placeholder produced by the grammar parser.

    Rules:
    - ``name``/``default``/``options`` are only set for ``kind == "argument"``.
    - ``format``/``offset`` are only set for date-like kinds.
    - ``modifiers`` keeps names as written; matching is case-insensitive downstream.
    """

    kind: PlaceholderKind
    base: str
    modifiers: tuple[str, ...] = ()
    name: str | None = None
    default: str | None = None
    options: tuple[ArgumentOption, ...] | None = None
    format: str | None = None
    offset: str | None = None

    @property
    def required(self) -> bool:
        return self.kind == "argument" and self.default is None

    @property
    def is_date_like(self) -> bool:
        return self.kind in DATE_KINDS
