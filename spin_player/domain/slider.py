"""Coordinate/value mapping for the progress slider.

The slider maps a value inside a closed range onto a horizontal track of a
known rendered width, and maps pointer positions on that track back onto the
range. All functions are pure; rendering lives in the UI layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple


class ValueRange(NamedTuple):
    lower: float
    upper: float

    @classmethod
    def of(cls, lower: float, upper: float) -> "ValueRange":
        if float(lower) > float(upper):
            raise ValueError(f"Invalid range: lower {lower} is above upper {upper}")
        return cls(float(lower), float(upper))

    @property
    def span(self) -> float:
        return self.upper - self.lower


@dataclass(frozen=True)
class SliderMetrics:
    """Sizes of the rendered slider parts, in pixels."""

    slider_height: int
    line_height: int
    thumb_size: int
    thumb_offset: int
    hit_area: int


COMPACT = SliderMetrics(slider_height=20, line_height=2, thumb_size=12, thumb_offset=6, hit_area=32)
LARGE = SliderMetrics(slider_height=40, line_height=6, thumb_size=28, thumb_offset=14, hit_area=44)

LARGE_LAYOUT_MIN_WIDTH = 700


def metrics_for_width(width: float) -> SliderMetrics:
    return LARGE if width >= LARGE_LAYOUT_MIN_WIDTH else COMPACT


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def value_to_fraction(value: float, value_range: ValueRange) -> float:
    """Return where value sits inside the range, in [0, 1].

    A degenerate range (upper == lower) maps every value to 0.
    """
    lower, upper = value_range
    span = float(upper) - float(lower)
    if span <= 0:
        return 0.0
    return clamp((float(value) - float(lower)) / span, 0.0, 1.0)


def fraction_to_offset(fraction: float, track_width: float) -> float:
    return float(fraction) * float(track_width)


def thumb_offset(
    value: float,
    value_range: ValueRange,
    track_width: float,
    correction: float,
) -> float:
    """Horizontal offset of the thumb's leading edge so it centers on the progress end."""
    return fraction_to_offset(value_to_fraction(value, value_range), track_width) - float(correction)


def pointer_to_value(pointer_x: float, track_width: float, value_range: ValueRange) -> float:
    """Map a pointer x coordinate on the rendered track to a clamped range value."""
    lower, upper = value_range
    if track_width <= 0:
        return float(lower)
    raw = float(lower) + (float(pointer_x) / float(track_width)) * (float(upper) - float(lower))
    return clamp(raw, float(lower), float(upper))


def offset_to_value(offset: float, track_width: float, value_range: ValueRange) -> float:
    return pointer_to_value(offset, track_width, value_range)
