"""Configuration loading from environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .constants import (
    AUDIO_BACKEND_CHOICES,
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_ROTATION_FRAME_MS,
    DEFAULT_ROTATION_PERIOD_SECONDS,
    DEFAULT_SEEK_STEP_SECONDS,
    UI_SIZE_CHOICES,
)
from .utils import (
    parse_choice_env,
    parse_flag_env,
    parse_float_env,
    parse_int_env,
    resolve_path,
)


@dataclass(frozen=True)
class AppConfig:
    log_level: str
    file_log_level: str
    log_dir: str
    log_file: str
    asset_dir: str
    track_resource: str
    track_title: str
    track_artist: str
    cover_resource: str
    audio_backend: str = "auto"
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS
    rotation_period_seconds: float = DEFAULT_ROTATION_PERIOD_SECONDS
    rotation_frame_ms: int = DEFAULT_ROTATION_FRAME_MS
    seek_step_seconds: float = DEFAULT_SEEK_STEP_SECONDS
    ui_size: str = "auto"

    @property
    def track_path(self) -> str:
        return os.path.abspath(os.path.join(self.asset_dir, self.track_resource))

    @property
    def cover_path(self) -> str:
        return os.path.abspath(os.path.join(self.asset_dir, self.cover_resource))


def load_config() -> AppConfig:
    base_dir = str(Path(__file__).resolve().parents[1])
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    file_log_level = os.getenv("FILE_LOG_LEVEL", "DEBUG").upper()
    log_dir = resolve_path(os.getenv("LOG_DIR", "logs"), base_dir)
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(
        log_dir, f"app_{datetime.now().strftime('%Y%m%d_%H%M%S_%f')}.log"
    )
    asset_dir = resolve_path(os.getenv("ASSET_DIR", "assets").strip() or "assets", base_dir)
    track_resource = os.getenv("TRACK_RESOURCE", "Test Music.mp3").strip() or "Test Music.mp3"
    track_title = os.getenv("TRACK_TITLE", "Test Music").strip() or "Test Music"
    track_artist = os.getenv("TRACK_ARTIST", "Producer").strip() or "Producer"
    cover_resource = os.getenv("COVER_RESOURCE", "CD.png").strip() or "CD.png"
    audio_backend = parse_choice_env("AUDIO_BACKEND", "auto", AUDIO_BACKEND_CHOICES)
    poll_interval_ms = parse_int_env(
        "POLL_INTERVAL_MS", DEFAULT_POLL_INTERVAL_MS, min_value=20, max_value=1000
    )
    rotation_period_seconds = parse_float_env(
        "ROTATION_PERIOD_SECONDS",
        DEFAULT_ROTATION_PERIOD_SECONDS,
        min_value=1.0,
        max_value=600.0,
    )
    rotation_frame_ms = parse_int_env(
        "ROTATION_FRAME_MS", DEFAULT_ROTATION_FRAME_MS, min_value=10, max_value=200
    )
    seek_step_seconds = parse_float_env(
        "SEEK_STEP_SECONDS",
        DEFAULT_SEEK_STEP_SECONDS,
        min_value=0.5,
        max_value=60.0,
    )
    ui_size = parse_choice_env("UI_SIZE", "auto", UI_SIZE_CHOICES)
    return AppConfig(
        log_level=log_level,
        file_log_level=file_log_level,
        log_dir=log_dir,
        log_file=log_file,
        asset_dir=asset_dir,
        track_resource=track_resource,
        track_title=track_title,
        track_artist=track_artist,
        cover_resource=cover_resource,
        audio_backend=audio_backend,
        poll_interval_ms=poll_interval_ms,
        rotation_period_seconds=rotation_period_seconds,
        rotation_frame_ms=rotation_frame_ms,
        seek_step_seconds=seek_step_seconds,
        ui_size=ui_size,
    )


def skip_app_init() -> bool:
    return parse_flag_env("SPIN_SKIP_APP_INIT")
