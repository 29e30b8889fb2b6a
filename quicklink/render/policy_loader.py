"""Render policy loading utilities."""

from __future__ import annotations

from pathlib import Path

import yaml  # type: ignore[import-untyped]
from pydantic import ValidationError

from quicklink.render.models import RenderPolicy

_DATETIME_SLOTS = ("{date}", "{time}")


def load_policy(path: Path | None = None) -> RenderPolicy:
    """Load and validate render policy from YAML."""

    policy_path = path or Path(__file__).with_name("policy.yaml")

    try:
        text = policy_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ValueError(f"Policy file not found: {policy_path}") from exc

    return parse_policy(text, source=str(policy_path))


def parse_policy(text: str, *, source: str = "<inline>") -> RenderPolicy:
    """Validate render policy YAML text."""

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in policy file: {source}") from exc

    if not isinstance(raw, dict):
        raise ValueError(f"Policy file must contain a mapping: {source}")

    try:
        policy = RenderPolicy.model_validate(raw)
    except ValidationError as exc:
        raise ValueError(f"Invalid policy schema: {source}") from exc

    if not any(slot in policy.datetime_pattern for slot in _DATETIME_SLOTS):
        raise ValueError(
            f"Invalid datetime_pattern in {source}: "
            "expected at least one of {date} or {time}."
        )
    return policy
