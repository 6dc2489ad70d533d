"""Playback state controller for the single bundled track."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, replace
from typing import Callable

from ..constants import DEFAULT_POLL_INTERVAL_MS, END_OF_MEDIA_EPSILON_SECONDS
from ..domain.slider import clamp
from ..domain.time_format import format_time
from .ports import AudioBackend, RepeatingTask, Scheduler

SessionListener = Callable[["PlaybackSession"], None]


@dataclass(frozen=True)
class PlaybackSession:
    """Observable playback state; a new snapshot is published on every change."""

    is_playing: bool = False
    elapsed: float = 0.0
    duration: float = 0.0


class PlaybackController:
    """Owns the audio backend, the elapsed-time poll and the observable session.

    All methods are expected to run on the host event loop thread. When the
    audio resource cannot be loaded the controller stays in an inert state:
    duration is 0 and play/pause/seek do not touch any backend.
    """

    def __init__(
        self,
        *,
        backend: AudioBackend | None,
        scheduler: Scheduler,
        resource_path: str,
        logger,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
    ) -> None:
        self.backend = backend
        self.scheduler = scheduler
        self.resource_path = resource_path
        self.logger = logger
        self.poll_interval_ms = int(poll_interval_ms)
        self._session = PlaybackSession()
        self._loaded = False
        self._disposed = False
        self._poll: RepeatingTask | None = None
        self._listeners: list[SessionListener] = []

    @property
    def session(self) -> PlaybackSession:
        return self._session

    @property
    def is_playing(self) -> bool:
        return self._session.is_playing

    @property
    def elapsed(self) -> float:
        return self._session.elapsed

    @property
    def duration(self) -> float:
        return self._session.duration

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def is_polling(self) -> bool:
        return self._poll is not None and self._poll.active

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener called with each new session; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def initialize(self) -> PlaybackSession:
        if self._disposed:
            return self._session
        if self._loaded:
            self.logger.debug("Audio resource already loaded: %s", self.resource_path)
            return self._session
        name = os.path.basename(self.resource_path)
        if self.backend is None:
            self.logger.error("No audio backend available; playback disabled for %s", name)
            return self._mark_unloaded()
        try:
            self.backend.load(self.resource_path)
            duration = float(self.backend.length_seconds())
        except FileNotFoundError:
            self.logger.error("Audio resource not found: %s", self.resource_path)
            return self._mark_unloaded()
        except Exception:
            self.logger.exception("Failed to load audio resource: %s", self.resource_path)
            return self._mark_unloaded()
        if not math.isfinite(duration) or duration <= 0:
            self.logger.error("Audio resource has no playable length: %s", self.resource_path)
            return self._mark_unloaded()
        self._loaded = True
        self._publish(PlaybackSession(is_playing=False, elapsed=0.0, duration=duration))
        self.logger.info("Loaded %s (%.1fs)", name, duration)
        return self._session

    def toggle_play_pause(self) -> None:
        # The play flag flips even when nothing is loaded and the action was a no-op.
        if self._disposed:
            return
        if self._session.is_playing:
            self._pause_playback()
        else:
            self._start_playback()
        self._publish(replace(self._session, is_playing=not self._session.is_playing))

    def seek(self, time: float) -> None:
        """Move playback to time seconds; callers are responsible for range clamping."""
        if self._disposed or not self._loaded:
            return
        target = float(time)
        assert self.backend is not None
        try:
            self.backend.set_position_seconds(target)
        except Exception:
            self.logger.exception("Failed to seek audio backend to %.3fs", target)
        self._publish(replace(self._session, elapsed=target))

    @staticmethod
    def format_time(time: float) -> str:
        return format_time(time)

    def dispose(self) -> None:
        if self._disposed:
            return
        self._cancel_poll()
        backend = self.backend
        if backend is not None:
            try:
                backend.stop()
            except Exception:
                self.logger.exception("Failed to stop audio backend")
            try:
                backend.release()
            except Exception:
                self.logger.exception("Failed to release audio backend")
        self.backend = None
        self._loaded = False
        self._disposed = True
        self._listeners.clear()
        self.logger.debug("Playback controller disposed")

    def _mark_unloaded(self) -> PlaybackSession:
        self._loaded = False
        self._publish(replace(self._session, elapsed=0.0, duration=0.0))
        return self._session

    def _start_playback(self) -> None:
        if not self._loaded:
            self.logger.warning("Play requested with no audio loaded; toggling play state only")
            return
        assert self.backend is not None
        if self._session.elapsed >= self._session.duration:
            try:
                self.backend.set_position_seconds(0.0)
            except Exception:
                self.logger.exception("Failed to rewind audio backend")
            self._session = replace(self._session, elapsed=0.0)
        try:
            self.backend.play()
        except Exception:
            self.logger.exception("Failed to start playback")
        self._start_poll()

    def _pause_playback(self) -> None:
        self._cancel_poll()
        if not self._loaded:
            return
        assert self.backend is not None
        try:
            self.backend.pause()
        except Exception:
            self.logger.exception("Failed to pause playback")

    def _start_poll(self) -> None:
        self._cancel_poll()
        self._poll = self.scheduler.call_every(self.poll_interval_ms, self._on_poll_tick)

    def _cancel_poll(self) -> None:
        if self._poll is None:
            return
        self._poll.cancel()
        self._poll = None

    def _on_poll_tick(self) -> None:
        if self._disposed or not self._loaded or not self._session.is_playing:
            self._cancel_poll()
            return
        assert self.backend is not None
        try:
            position = float(self.backend.position_seconds())
            ended = bool(self.backend.has_ended())
        except Exception:
            self.logger.exception("Failed to read playback position")
            return
        duration = self._session.duration
        if ended or position >= duration - END_OF_MEDIA_EPSILON_SECONDS:
            self._cancel_poll()
            # The backend may still be running inside the epsilon window.
            try:
                self.backend.pause()
            except Exception:
                self.logger.exception("Failed to pause audio backend at end of media")
            self._publish(PlaybackSession(is_playing=False, elapsed=duration, duration=duration))
            self.logger.info("Playback complete: %s", os.path.basename(self.resource_path))
            return
        self._publish(replace(self._session, elapsed=clamp(position, 0.0, duration)))

    def _publish(self, session: PlaybackSession) -> None:
        if self._disposed or session == self._session:
            return
        self._session = session
        for listener in list(self._listeners):
            try:
                listener(session)
            except Exception:
                self.logger.exception("Playback listener failed")
