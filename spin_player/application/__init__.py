"""Application layer orchestration."""

from .playback import PlaybackController, PlaybackSession
from .ports import AudioBackend, RepeatingTask, Scheduler

__all__ = [
    "AudioBackend",
    "PlaybackController",
    "PlaybackSession",
    "RepeatingTask",
    "Scheduler",
]
