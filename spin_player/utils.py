"""Path and environment parsing helpers for configuration."""
from __future__ import annotations

import math
import os
from typing import Callable, Iterable, Optional, TypeVar

_Number = TypeVar("_Number", int, float)

_TRUE_VALUES = ("1", "true", "yes", "on")


def resolve_path(value: str, base_dir: str) -> str:
    """Join value onto base_dir unless it is already absolute."""
    if os.path.isabs(value):
        return value
    return os.path.join(base_dir, value)


def _bounded(
    value: _Number,
    min_value: Optional[_Number],
    max_value: Optional[_Number],
) -> _Number:
    if min_value is not None and value < min_value:
        return min_value
    if max_value is not None and value > max_value:
        return max_value
    return value


def _parse_number_env(
    name: str,
    default: _Number,
    cast: Callable[[str], _Number],
    min_value: Optional[_Number],
    max_value: Optional[_Number],
) -> _Number:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return _bounded(default, min_value, max_value)
    try:
        value = cast(raw.strip())
    except ValueError:
        value = default
    return _bounded(value, min_value, max_value)


def _finite_float(raw: str) -> float:
    value = float(raw)
    if not math.isfinite(value):
        raise ValueError(f"non-finite value: {raw}")
    return value


def parse_int_env(
    name: str,
    default: int,
    *,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
) -> int:
    """Read an integer variable; unparsable values use default, then bounds apply."""
    return _parse_number_env(name, default, int, min_value, max_value)


def parse_float_env(
    name: str,
    default: float,
    *,
    min_value: Optional[float] = None,
    max_value: Optional[float] = None,
) -> float:
    return _parse_number_env(name, default, _finite_float, min_value, max_value)


def parse_choice_env(name: str, default: str, choices: Iterable[str]) -> str:
    """Read a lower-cased choice, falling back to default for unknown values."""
    value = os.getenv(name, default).strip().lower()
    if value not in set(choices):
        return default
    return value


def parse_flag_env(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES
