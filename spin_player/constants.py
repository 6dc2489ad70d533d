"""Shared constants."""

AUDIO_BACKEND_CHOICES = ("auto", "vlc", "sounddevice")
UI_SIZE_CHOICES = ("auto", "compact", "large")

DEFAULT_POLL_INTERVAL_MS = 100
DEFAULT_ROTATION_PERIOD_SECONDS = 20.0
DEFAULT_ROTATION_FRAME_MS = 33
DEFAULT_SEEK_STEP_SECONDS = 5.0

# Backend position reads this close to the end count as finished.
END_OF_MEDIA_EPSILON_SECONDS = 0.05
