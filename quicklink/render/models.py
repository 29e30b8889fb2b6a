"""Render policy, request and result models."""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator

from quicklink.templates.models import PlaceholderKind

ReplaceStatus = Literal["replaced", "missing", "passthrough", "error"]


class RenderPolicy(BaseModel):
    """Date/time rendering policy loaded from YAML."""

    model_config = ConfigDict(extra="forbid")

    medium_date_pattern: str = "MMM d, y"
    short_time_pattern: str = "h:mm a"
    datetime_pattern: str = "{date}, {time}"
    timezone: str | None = None

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: str | None) -> str | None:
        if value is None:
            return value
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value


class ProcessRequest(BaseModel):
    """Inputs for one template processing call."""

    model_config = ConfigDict(extra="forbid")

    template: str
    arguments: dict[str, str] = Field(default_factory=dict)
    clipboard: str | None = None
    selection: str | None = None
    now: datetime | None = None


class ReplaceLogEntry(BaseModel):
    """Outcome of a single placeholder."""

    model_config = ConfigDict(extra="forbid")

    status: ReplaceStatus
    kind: PlaceholderKind | None = None
    start: int
    end: int
    original_text: str
    new_text: str | None = None
    argument_name: str | None = None
    reason: str | None = None


class ReplaceSummary(BaseModel):
    """Aggregate counters over replace log entries."""

    model_config = ConfigDict(extra="forbid")

    total_placeholders: int
    replaced_count: int
    missing_count: int
    passthrough_count: int
    error_count: int


class ProcessResult(BaseModel):
    """Template processing output.

    Rules:
    - success == (not missing_arguments and not errors)
    - missing_arguments keeps duplicates in source order
    - url keeps the literal text of every unresolved placeholder
    """

    model_config = ConfigDict(extra="forbid")

    url: str
    missing_arguments: list[str] = Field(default_factory=list)
    success: bool
    errors: list[str] = Field(default_factory=list)
    entries: list[ReplaceLogEntry] = Field(default_factory=list)

    @property
    def summary(self) -> ReplaceSummary:
        statuses = [entry.status for entry in self.entries]
        return ReplaceSummary(
            total_placeholders=len(statuses),
            replaced_count=statuses.count("replaced"),
            missing_count=statuses.count("missing"),
            passthrough_count=statuses.count("passthrough"),
            error_count=statuses.count("error"),
        )

    @classmethod
    def from_entries(cls, url: str, entries: list[ReplaceLogEntry]) -> ProcessResult:
        missing = [
            entry.argument_name
            for entry in entries
            if entry.status == "missing" and entry.argument_name is not None
        ]
        errors = [entry.reason for entry in entries if entry.status == "error" and entry.reason]
        return cls(
            url=url,
            missing_arguments=missing,
            success=not missing and not errors,
            errors=errors,
            entries=entries,
        )
