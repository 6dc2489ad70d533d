"""User interface layer."""

from .common import APP_TITLE, play_button_text, resolve_slider_metrics
from .desktop_types import DesktopApp
from .scheduler import TkRepeatingTask, TkScheduler
from .tkinter_app import TkinterDesktopApp, create_tkinter_app

__all__ = [
    "APP_TITLE",
    "DesktopApp",
    "TkRepeatingTask",
    "TkScheduler",
    "TkinterDesktopApp",
    "create_tkinter_app",
    "play_button_text",
    "resolve_slider_metrics",
]
