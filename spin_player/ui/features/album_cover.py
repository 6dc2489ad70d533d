"""Album cover disc with a rotation animation while audio plays."""

from __future__ import annotations

import os
import time
import tkinter as tk
from typing import Callable

from PIL import Image, ImageDraw, ImageOps, ImageTk

from ...domain.rotation import advance_angle, settle_angle
from ..common import BG, DISC_LABEL, RING_INNER, RING_OUTER

_INNER_RING_RATIO = 0.75 / 0.85
_DISC_RATIO = 0.70 / 0.85
_VINYL_SIZE = 512


def _vinyl_image(size: int = _VINYL_SIZE) -> Image.Image:
    """Plain record used when no cover art is available."""
    image = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)
    center = size / 2.0

    def _circle(radius: float, **kwargs) -> None:
        draw.ellipse((center - radius, center - radius, center + radius, center + radius), **kwargs)

    _circle(center - 1, fill="#111318", outline="#000000")
    groove = center * 0.92
    while groove > center * 0.42:
        _circle(groove, outline="#1d2027", width=2)
        groove -= center * 0.06
    _circle(center * 0.34, fill=DISC_LABEL)
    # Off-center mark on the label so the spin stays visible.
    mark = center * 0.06
    mx, my = center, center - center * 0.22
    draw.ellipse((mx - mark, my - mark, mx + mark, my + mark), fill="#f0e6d8")
    _circle(center * 0.04, fill=BG)
    return image


def _circular_disc(source: Image.Image, diameter: int) -> Image.Image:
    """Crop source to fill a square of diameter pixels and mask it to a circle."""
    disc = ImageOps.fit(source, (diameter, diameter), method=Image.LANCZOS).convert("RGBA")
    mask = Image.new("L", (diameter, diameter), 0)
    ImageDraw.Draw(mask).ellipse((0, 0, diameter - 1, diameter - 1), fill=255)
    disc.putalpha(mask)
    return disc


class AlbumCoverFeature:
    """Draws the cover and spins it at one turn per rotation period."""

    def __init__(
        self,
        parent: tk.Misc,
        *,
        scheduler,
        cover_path: str,
        rotation_period_seconds: float,
        frame_ms: int,
        logger,
        size: int = 300,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.scheduler = scheduler
        self.rotation_period_seconds = float(rotation_period_seconds)
        self.frame_ms = int(frame_ms)
        self.logger = logger
        self.clock = clock
        self.angle = 0.0
        self.is_spinning = False
        self._task = None
        self._last_frame_at = 0.0
        self.canvas = tk.Canvas(
            parent,
            width=size,
            height=size,
            background=BG,
            highlightthickness=0,
            borderwidth=0,
        )
        self.cover_image = self._load_cover_image(cover_path)
        self.disc_image: Image.Image | None = None
        # Tk drops images without a live Python reference.
        self.frame_image: ImageTk.PhotoImage | None = None
        self.canvas.bind("<Configure>", lambda _event: self.redraw())

    def _load_cover_image(self, cover_path: str) -> Image.Image | None:
        if not cover_path or not os.path.isfile(cover_path):
            self.logger.debug("Cover image not found, drawing a plain disc: %s", cover_path)
            return None
        try:
            with Image.open(cover_path) as image:
                return image.convert("RGBA")
        except (OSError, ValueError):
            self.logger.exception("Failed to load cover image: %s", cover_path)
            return None

    def set_playing(self, is_playing: bool) -> None:
        if is_playing:
            self.start()
        else:
            self.stop()

    def start(self) -> None:
        if self.is_spinning:
            return
        self.is_spinning = True
        self._last_frame_at = self.clock()
        self._task = self.scheduler.call_every(self.frame_ms, self._on_frame)

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
        if not self.is_spinning:
            return
        self.is_spinning = False
        self.angle = settle_angle(self.angle)
        self._render_frame()

    def _on_frame(self) -> None:
        now = self.clock()
        elapsed_ms = max(0.0, now - self._last_frame_at) * 1000.0
        self._last_frame_at = now
        self.angle = advance_angle(self.angle, elapsed_ms, self.rotation_period_seconds)
        self._render_frame()

    def _geometry(self) -> tuple[float, float, float]:
        width = int(self.canvas.winfo_width())
        height = int(self.canvas.winfo_height())
        if width <= 1 or height <= 1:
            # Not mapped yet; fall back to the requested size.
            width = int(self.canvas.cget("width"))
            height = int(self.canvas.cget("height"))
        width = max(1, width)
        height = max(1, height)
        return width / 2.0, height / 2.0, min(width, height) / 2.0

    def _render_frame(self) -> None:
        canvas = self.canvas
        if self.disc_image is None or not canvas.winfo_exists():
            return
        # PIL rotates counter-clockwise, the disc spins clockwise.
        rotated = self.disc_image.rotate(-self.angle, resample=Image.BICUBIC)
        self.frame_image = ImageTk.PhotoImage(rotated, master=canvas)
        canvas.itemconfigure("disc", image=self.frame_image)

    def redraw(self) -> None:
        canvas = self.canvas
        if not canvas.winfo_exists():
            return
        canvas.delete("all")
        cx, cy, outer = self._geometry()
        inner = outer * _INNER_RING_RATIO
        diameter = max(2, int(outer * _DISC_RATIO * 2))

        def _circle(radius: float, **kwargs) -> None:
            canvas.create_oval(cx - radius, cy - radius, cx + radius, cy + radius, **kwargs)

        _circle(outer, fill=RING_OUTER, width=0)
        _circle(inner, fill=RING_INNER, width=0)
        if self.disc_image is None or self.disc_image.width != diameter:
            source = self.cover_image if self.cover_image is not None else _vinyl_image()
            self.disc_image = _circular_disc(source, diameter)
        canvas.create_image(cx, cy, tags=("disc",))
        self._render_frame()
