"""Application-level ports for audio output and event-loop scheduling."""

from __future__ import annotations

from typing import Callable, Protocol


class AudioBackend(Protocol):
    """Port abstraction over an audio decoding/output library."""

    def load(self, path: str) -> None: ...

    def length_seconds(self) -> float: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def stop(self) -> None: ...

    def position_seconds(self) -> float: ...

    def set_position_seconds(self, seconds: float) -> None: ...

    def has_ended(self) -> bool: ...

    def release(self) -> None: ...


class RepeatingTask(Protocol):
    """Handle for a callback re-armed on the host event loop."""

    @property
    def active(self) -> bool: ...

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Schedules repeating callbacks on the single UI thread."""

    def call_every(self, interval_ms: int, callback: Callable[[], None]) -> RepeatingTask: ...
