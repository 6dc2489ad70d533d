"""Elapsed-time formatting."""

from __future__ import annotations

import math


def format_time(seconds: float) -> str:
    """Render seconds as mm:ss, truncating toward zero.

    Minutes are not wrapped at 60, so 3661 renders as "61:01".
    """
    try:
        value = float(seconds)
    except (TypeError, ValueError):
        return "00:00"
    if not math.isfinite(value) or value <= 0:
        return "00:00"
    minutes, secs = divmod(int(value), 60)
    return f"{minutes:02d}:{secs:02d}"
