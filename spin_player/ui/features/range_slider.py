"""Custom progress slider drawn on a Tk canvas."""

from __future__ import annotations

import tkinter as tk
from typing import Any, Callable

from ...domain.slider import (
    SliderMetrics,
    ValueRange,
    fraction_to_offset,
    pointer_to_value,
    thumb_offset,
    value_to_fraction,
)
from ..common import BG, TRACK_FILLED, TRACK_REMAINING


class RangeSliderWidget:
    """Line + progress + thumb slider with a hit area taller than the line.

    The bound value is owned by the caller: drags only propose values through
    ``on_change`` and the caller pushes the accepted value back with
    ``set_value``. Pointer math is relative to the rendered track, which is
    inset horizontally by half a thumb so the thumb is never clipped.
    """

    def __init__(
        self,
        parent: tk.Misc,
        *,
        metrics: SliderMetrics,
        on_change: Callable[[float], None],
        background: str = BG,
    ) -> None:
        self.metrics = metrics
        self.on_change = on_change
        self._value = 0.0
        self._range = ValueRange(0.0, 0.0)
        self.canvas = tk.Canvas(
            parent,
            height=metrics.hit_area,
            background=background,
            highlightthickness=0,
            borderwidth=0,
            cursor="hand2",
        )
        self.canvas.bind("<ButtonPress-1>", self._on_pointer)
        self.canvas.bind("<B1-Motion>", self._on_pointer)
        self.canvas.bind("<Configure>", lambda _event: self.redraw())

    @property
    def value(self) -> float:
        return self._value

    @property
    def value_range(self) -> ValueRange:
        return self._range

    @property
    def inset(self) -> float:
        return self.metrics.thumb_size / 2.0

    def track_width(self) -> float:
        width = int(self.canvas.winfo_width())
        return max(0.0, float(width) - 2.0 * self.inset)

    def set_range(self, lower: float, upper: float) -> None:
        value_range = ValueRange.of(lower, upper)
        if value_range == self._range:
            return
        self._range = value_range
        self.redraw()

    def set_value(self, value: float) -> None:
        value = float(value)
        if value == self._value:
            return
        self._value = value
        self.redraw()

    def set_metrics(self, metrics: SliderMetrics) -> None:
        if metrics == self.metrics:
            return
        self.metrics = metrics
        self.canvas.configure(height=metrics.hit_area)
        self.redraw()

    def value_at(self, x: float) -> float:
        return pointer_to_value(float(x) - self.inset, self.track_width(), self._range)

    def _on_pointer(self, event: tk.Event[Any]) -> None:
        self.on_change(self.value_at(event.x))

    def redraw(self) -> None:
        canvas = self.canvas
        if not canvas.winfo_exists():
            return
        canvas.delete("all")
        metrics = self.metrics
        width = self.track_width()
        left = self.inset
        middle = max(int(canvas.winfo_height()), metrics.hit_area) / 2.0
        half_line = metrics.line_height / 2.0
        canvas.create_rectangle(
            left,
            middle - half_line,
            left + width,
            middle + half_line,
            fill=TRACK_REMAINING,
            width=0,
            tags=("track",),
        )
        progress = fraction_to_offset(value_to_fraction(self._value, self._range), width)
        canvas.create_rectangle(
            left,
            middle - half_line,
            left + progress,
            middle + half_line,
            fill=TRACK_FILLED,
            width=0,
            tags=("progress",),
        )
        thumb_x = left + thumb_offset(self._value, self._range, width, metrics.thumb_offset)
        canvas.create_oval(
            thumb_x,
            middle - metrics.thumb_size / 2.0,
            thumb_x + metrics.thumb_size,
            middle + metrics.thumb_size / 2.0,
            fill=TRACK_FILLED,
            width=0,
            tags=("thumb",),
        )
