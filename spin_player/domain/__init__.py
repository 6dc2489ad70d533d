"""Domain logic for slider mapping, time formatting and cover rotation."""

from .rotation import advance_angle, settle_angle
from .slider import (
    COMPACT,
    LARGE,
    SliderMetrics,
    ValueRange,
    clamp,
    fraction_to_offset,
    metrics_for_width,
    offset_to_value,
    pointer_to_value,
    thumb_offset,
    value_to_fraction,
)
from .time_format import format_time

__all__ = [
    "COMPACT",
    "LARGE",
    "SliderMetrics",
    "ValueRange",
    "advance_angle",
    "clamp",
    "format_time",
    "fraction_to_offset",
    "metrics_for_width",
    "offset_to_value",
    "pointer_to_value",
    "settle_angle",
    "thumb_offset",
    "value_to_fraction",
]
