"""Album cover rotation arithmetic."""

from __future__ import annotations


def advance_angle(angle: float, elapsed_ms: float, period_seconds: float) -> float:
    """Advance a linear rotation by elapsed_ms at one turn per period_seconds."""
    if period_seconds <= 0:
        return float(angle)
    degrees = 360.0 * (float(elapsed_ms) / 1000.0) / float(period_seconds)
    return settle_angle(float(angle) + degrees)


def settle_angle(angle: float) -> float:
    return float(angle) % 360.0
