"""Tkinter single-screen music player."""
from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Any, Callable

from ..application.playback import PlaybackController, PlaybackSession
from ..config import AppConfig
from ..domain.slider import clamp
from ..domain.time_format import format_time
from .common import (
    APP_TITLE,
    BG,
    TEXT_MUTED,
    TEXT_PRIMARY,
    TITLE_TEXT,
    SECONDARY_ACTIONS,
    TRANSPORT_INERT_ACTIONS,
    play_button_text,
    resolve_slider_metrics,
)
from .desktop_types import DesktopApp
from .features.album_cover import AlbumCoverFeature
from .features.range_slider import RangeSliderWidget


class TkinterDesktopApp(DesktopApp):
    """Tkinter implementation of the player screen."""

    def __init__(
        self,
        *,
        config: AppConfig,
        logger,
        controller: PlaybackController,
        scheduler,
    ) -> None:
        self.title = APP_TITLE
        self.config = config
        self.logger = logger
        self.controller = controller
        self.scheduler = scheduler

        self.root: tk.Tk | None = None
        self.closed = False
        self._unsubscribe: Callable[[], None] | None = None
        self.inert_action_log: list[str] = []

        self.elapsed_var: tk.StringVar | None = None
        self.duration_var: tk.StringVar | None = None
        self.play_text_var: tk.StringVar | None = None

        # Widgets assigned during UI build.
        self.album_cover: AlbumCoverFeature | None = None
        self.slider: RangeSliderWidget | None = None
        self.play_btn: ttk.Button | None = None
        self.action_buttons: dict[str, ttk.Button] = {}

    def launch(self) -> None:
        self._ensure_root()
        assert self.root is not None
        self.root.mainloop()

    def build_for_test(self) -> tk.Tk:
        """Build root/widgets without entering mainloop (for tests)."""
        self._ensure_root()
        assert self.root is not None
        return self.root

    def _ensure_root(self) -> None:
        if self.root is not None:
            return
        root = tk.Tk()
        root.title(APP_TITLE)
        root.geometry("420x780")
        root.minsize(360, 640)
        self.root = root
        self.scheduler.bind(root)
        self._configure_theme()
        self._init_tk_variables()
        self._build_layout()
        self._bind_shortcuts()
        self._unsubscribe = self.controller.subscribe(self._on_session_changed)
        self._render_session(self.controller.session)
        root.bind("<Configure>", self._on_root_configure, add="+")
        root.protocol("WM_DELETE_WINDOW", self.close)
        self.logger.debug("Tkinter UI wiring complete")

    def _configure_theme(self) -> None:
        assert self.root is not None
        style = ttk.Style(self.root)
        available = set(style.theme_names())
        for theme_name in ("clam", "alt", "default", "classic"):
            if theme_name in available:
                style.theme_use(theme_name)
                break
        self.root.configure(background=BG)
        style.configure(".", background=BG, foreground=TEXT_PRIMARY, font=("Segoe UI", 10))
        style.configure("AppBg.TFrame", background=BG)
        style.configure("Heading.TLabel", background=BG, foreground=TITLE_TEXT, font=("Segoe UI", 18))
        style.configure("TrackTitle.TLabel", background=BG, foreground=TEXT_PRIMARY, font=("Segoe UI", 22, "bold"))
        style.configure("TrackArtist.TLabel", background=BG, foreground=TEXT_MUTED, font=("Segoe UI", 13))
        style.configure("Time.TLabel", background=BG, foreground=TEXT_MUTED, font=("Consolas", 10))
        style.configure(
            "Transport.TButton",
            background=BG,
            foreground=TEXT_PRIMARY,
            borderwidth=0,
            padding=(10, 6),
            font=("Segoe UI", 11),
        )
        style.configure(
            "TransportPrimary.TButton",
            background=BG,
            foreground=TEXT_PRIMARY,
            borderwidth=1,
            padding=(18, 12),
            font=("Segoe UI", 14, "bold"),
        )
        style.configure(
            "Action.TButton",
            background=BG,
            foreground=TEXT_MUTED,
            borderwidth=0,
            padding=(8, 4),
            font=("Segoe UI", 10),
        )
        for name in ("Transport.TButton", "TransportPrimary.TButton", "Action.TButton"):
            style.map(name, background=[("active", "#2c323b"), ("pressed", "#171a1f")])

    def _init_tk_variables(self) -> None:
        assert self.root is not None
        self.elapsed_var = tk.StringVar(master=self.root, value="00:00")
        self.duration_var = tk.StringVar(master=self.root, value="00:00")
        self.play_text_var = tk.StringVar(master=self.root, value=play_button_text(False))

    def _build_layout(self) -> None:
        assert self.root is not None
        outer = ttk.Frame(self.root, padding=(24, 16), style="AppBg.TFrame")
        outer.pack(fill="both", expand=True)
        outer.grid_columnconfigure(0, weight=1)
        outer.grid_rowconfigure(1, weight=1)

        ttk.Label(outer, text=self.config.track_artist, style="Heading.TLabel").grid(
            row=0, column=0, pady=(8, 12)
        )

        self.album_cover = AlbumCoverFeature(
            outer,
            scheduler=self.scheduler,
            cover_path=self.config.cover_path,
            rotation_period_seconds=self.config.rotation_period_seconds,
            frame_ms=self.config.rotation_frame_ms,
            logger=self.logger,
        )
        self.album_cover.canvas.grid(row=1, column=0, sticky="nsew", pady=(0, 16))

        info_row = ttk.Frame(outer, style="AppBg.TFrame")
        info_row.grid(row=2, column=0, sticky="ew")
        info_row.grid_columnconfigure(0, weight=1)
        ttk.Label(info_row, text=self.config.track_title, style="TrackTitle.TLabel").grid(
            row=0, column=0, sticky="w"
        )
        ttk.Label(info_row, text=self.config.track_artist, style="TrackArtist.TLabel").grid(
            row=1, column=0, sticky="w", pady=(4, 0)
        )
        like_btn = ttk.Button(
            info_row,
            text="Like",
            style="Action.TButton",
            command=lambda: self._on_inert_action("favourite"),
        )
        like_btn.grid(row=0, column=1, rowspan=2, sticky="e")
        self.action_buttons["favourite"] = like_btn

        progress_row = ttk.Frame(outer, style="AppBg.TFrame")
        progress_row.grid(row=3, column=0, sticky="ew", pady=(12, 0))
        progress_row.grid_columnconfigure(0, weight=1)
        self.slider = RangeSliderWidget(
            progress_row,
            metrics=resolve_slider_metrics(self.config.ui_size, 420),
            on_change=self._on_slider_change,
        )
        self.slider.canvas.grid(row=0, column=0, columnspan=2, sticky="ew")
        ttk.Label(progress_row, textvariable=self.elapsed_var, style="Time.TLabel").grid(
            row=1, column=0, sticky="w"
        )
        ttk.Label(progress_row, textvariable=self.duration_var, style="Time.TLabel").grid(
            row=1, column=1, sticky="e"
        )

        transport_row = ttk.Frame(outer, style="AppBg.TFrame")
        transport_row.grid(row=4, column=0, pady=(8, 8))
        (previous_key, previous_label), (next_key, next_label) = TRANSPORT_INERT_ACTIONS
        previous_btn = ttk.Button(
            transport_row,
            text=previous_label,
            style="Transport.TButton",
            command=lambda: self._on_inert_action(previous_key),
        )
        previous_btn.grid(row=0, column=0, padx=24)
        self.play_btn = ttk.Button(
            transport_row,
            textvariable=self.play_text_var,
            style="TransportPrimary.TButton",
            command=self._on_play_pause,
        )
        self.play_btn.grid(row=0, column=1, padx=24)
        next_btn = ttk.Button(
            transport_row,
            text=next_label,
            style="Transport.TButton",
            command=lambda: self._on_inert_action(next_key),
        )
        next_btn.grid(row=0, column=2, padx=24)
        self.action_buttons[previous_key] = previous_btn
        self.action_buttons[next_key] = next_btn

        actions_row = ttk.Frame(outer, style="AppBg.TFrame")
        actions_row.grid(row=5, column=0, pady=(4, 8))
        for column, (key, label) in enumerate(SECONDARY_ACTIONS):
            button = ttk.Button(
                actions_row,
                text=label,
                style="Action.TButton",
                command=lambda key=key: self._on_inert_action(key),
            )
            button.grid(row=0, column=column, padx=20)
            self.action_buttons[key] = button

    def _bind_shortcuts(self) -> None:
        assert self.root is not None
        self.root.bind("<space>", self._on_shortcut_play_pause, add="+")
        self.root.bind(
            "<Left>",
            lambda event: self._on_shortcut_seek(event, -float(self.config.seek_step_seconds)),
            add="+",
        )
        self.root.bind(
            "<Right>",
            lambda event: self._on_shortcut_seek(event, float(self.config.seek_step_seconds)),
            add="+",
        )
        # A focused ttk button would otherwise also invoke itself on space.
        for button in (self.play_btn, *self.action_buttons.values()):
            if button is None:
                continue
            button.bind("<space>", self._on_shortcut_play_pause, add="+")

    def _on_shortcut_play_pause(self, _event: tk.Event[Any]) -> str:
        self._on_play_pause()
        return "break"

    def _on_shortcut_seek(self, _event: tk.Event[Any], delta_seconds: float) -> str:
        self._seek_relative(delta_seconds)
        return "break"

    def _on_play_pause(self) -> None:
        self.controller.toggle_play_pause()

    def _seek_relative(self, delta_seconds: float) -> None:
        if not self.controller.is_loaded:
            return
        target = clamp(
            self.controller.elapsed + float(delta_seconds),
            0.0,
            self.controller.duration,
        )
        self.controller.seek(target)

    def _on_slider_change(self, value: float) -> None:
        self.controller.seek(value)

    def _on_inert_action(self, key: str) -> None:
        self.inert_action_log.append(key)
        self.logger.debug("Action '%s' is not available", key)

    def _on_root_configure(self, event: tk.Event[Any]) -> None:
        if self.slider is None or getattr(event, "widget", None) is not self.root:
            return
        self.slider.set_metrics(resolve_slider_metrics(self.config.ui_size, event.width))

    def _on_session_changed(self, session: PlaybackSession) -> None:
        self._render_session(session)

    def _render_session(self, session: PlaybackSession) -> None:
        if self.slider is not None:
            self.slider.set_range(0.0, session.duration)
            self.slider.set_value(session.elapsed)
        if self.elapsed_var is not None:
            self.elapsed_var.set(self.controller.format_time(session.elapsed))
        if self.duration_var is not None:
            self.duration_var.set(format_time(session.duration))
        if self.play_text_var is not None:
            self.play_text_var.set(play_button_text(session.is_playing))
        if self.album_cover is not None:
            self.album_cover.set_playing(session.is_playing)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self.album_cover is not None:
            self.album_cover.stop()
        self.controller.dispose()
        if self.root is not None:
            self.root.destroy()
        self.logger.debug("Player window closed")


def create_tkinter_app(
    *,
    config: AppConfig,
    logger,
    controller: PlaybackController,
    scheduler,
) -> DesktopApp:
    """Create the Tkinter desktop app instance."""
    return TkinterDesktopApp(
        config=config,
        logger=logger,
        controller=controller,
        scheduler=scheduler,
    )
