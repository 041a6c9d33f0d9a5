from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from hanoi_tutor.puzzle.env import MAX_DISKS, MAX_PEGS, MIN_DISKS, MIN_PEGS

MIN_SPEED_MS = 100
MAX_SPEED_MS = 1200

DEFAULT_CONFIG: dict[str, Any] = {"n_pegs": 3, "n_disks": 4, "speed_ms": 500}


@dataclass(frozen=True, slots=True)
class TutorConfig:
    n_pegs: int
    n_disks: int
    speed_ms: int


def load_config(path: str) -> dict[str, Any]:
    data = json.loads(Path(path).read_text())
    if not isinstance(data, dict):
        raise ValueError("config file must contain a JSON object")
    return _expand_env_vars(data)


def _expand_env_vars(value: Any) -> Any:
    if isinstance(value, str):
        return os.path.expandvars(value)
    if isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    if isinstance(value, dict):
        return {str(k): _expand_env_vars(v) for k, v in value.items()}
    return value


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = {**base}
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_dicts(result[key], value)
        else:
            result[key] = value
    return result


def _clamp(value: Any, low: int, high: int, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return max(low, min(high, number))


def clamp_pegs(value: Any) -> int:
    return _clamp(value, MIN_PEGS, MAX_PEGS, DEFAULT_CONFIG["n_pegs"])


def clamp_disks(value: Any) -> int:
    return _clamp(value, MIN_DISKS, MAX_DISKS, DEFAULT_CONFIG["n_disks"])


def clamp_speed(value: Any) -> int:
    return _clamp(value, MIN_SPEED_MS, MAX_SPEED_MS, DEFAULT_CONFIG["speed_ms"])


def resolve_config(
    path: str | None = None, overrides: dict[str, Any] | None = None
) -> TutorConfig:
    """Defaults, then the JSON file, then explicit overrides; clamped into range."""

    merged = dict(DEFAULT_CONFIG)
    if path:
        merged = merge_dicts(merged, load_config(path))
    if overrides:
        merged = merge_dicts(
            merged, {k: v for k, v in overrides.items() if v is not None}
        )
    return TutorConfig(
        n_pegs=clamp_pegs(merged.get("n_pegs")),
        n_disks=clamp_disks(merged.get("n_disks")),
        speed_ms=clamp_speed(merged.get("speed_ms")),
    )
