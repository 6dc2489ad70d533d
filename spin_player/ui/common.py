"""UI-neutral helpers shared by desktop UI implementations."""
from __future__ import annotations

from ..domain.slider import COMPACT, LARGE, SliderMetrics, metrics_for_width

APP_TITLE = "Spin Player"

BG = "#22262d"
TEXT_PRIMARY = "#ffffff"
TEXT_MUTED = "#99a6b3"
TITLE_TEXT = "#b3bfcc"
RING_OUTER = "#33404d"
RING_INNER = "#0d0d0d"
TRACK_REMAINING = "#4e535a"
TRACK_FILLED = "#ffffff"
DISC_LABEL = "#c8553d"

# (key, label) pairs for buttons that are present but have no behavior yet.
TRANSPORT_INERT_ACTIONS = (("previous", "Prev"), ("next", "Next"))
SECONDARY_ACTIONS = (("playlist", "Playlist"), ("download", "Download"), ("share", "Share"))


def play_button_text(is_playing: bool) -> str:
    return "Pause" if is_playing else "Play"


def resolve_slider_metrics(ui_size: str, window_width: float) -> SliderMetrics:
    if ui_size == "compact":
        return COMPACT
    if ui_size == "large":
        return LARGE
    return metrics_for_width(window_width)
