"""CLI I/O helpers for atomic output writing."""

from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import Any

from quicklink.render.models import ProcessResult


def write_result_atomic(path: Path, result: ProcessResult) -> None:
    """Write the process result JSON (with summary) atomically."""

    payload = result.model_dump(mode="json")
    payload["summary"] = result.summary.model_dump(mode="json")
    path.parent.mkdir(parents=True, exist_ok=True)
    _atomic_write_json(path, payload)


def write_fallback_json_atomic(
    path: Path,
    *,
    error_type: str,
    error_message: str,
    stage: str,
    base_result: ProcessResult | None = None,
) -> None:
    """Write a fallback report carrying error metadata."""

    if base_result is not None:
        payload = base_result.model_dump(mode="json")
    else:
        payload = {"url": "", "missing_arguments": [], "success": False, "errors": [], "entries": []}

    payload["error"] = {
        "error_type": error_type,
        "error_message": error_message,
        "stage": stage,
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    _atomic_write_json(path, payload)


def _atomic_write_json(path: Path, payload: dict[str, Any]) -> None:
    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        dir=path.parent,
        delete=False,
        prefix=f"{path.name}.",
        suffix=".tmp",
    ) as tmp:
        tmp_path = Path(tmp.name)
        json.dump(payload, tmp, ensure_ascii=False, sort_keys=True, separators=(",", ":"))

    tmp_path.replace(path)
