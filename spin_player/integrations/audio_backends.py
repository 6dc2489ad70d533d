"""Audio backend wrappers implementing the playback port."""

from __future__ import annotations

import os
import sys
import time

import numpy as np

try:
    import vlc as _vlc
except Exception:  # pragma: no cover - dependency optional at import time
    _vlc = None

try:
    import sounddevice as _sd
except Exception:  # pragma: no cover - dependency optional at import time
    _sd = None

try:
    import soundfile as _sf
except Exception:  # pragma: no cover - dependency optional at import time
    _sf = None

# VLC may ignore a seek until its playback thread is ready; pending seeks are re-applied.
_VLC_SEEK_RETRY_LIMIT = 5
_VLC_SEEK_TOLERANCE_MS = 500


class VlcAudioBackend:
    """Thin libVLC wrapper for audio-only playback."""

    def __init__(self, *, vlc_module=None, platform_name: str | None = None) -> None:
        self._vlc = vlc_module if vlc_module is not None else _vlc
        if self._vlc is None:
            raise RuntimeError("python-vlc is not available")
        platform_value = platform_name if platform_name is not None else sys.platform
        args = ["--no-xlib"] if str(platform_value).startswith("linux") else []
        self.instance = self._vlc.Instance(args)
        if self.instance is None:
            raise RuntimeError("libVLC could not be initialized")
        self.player = self.instance.media_player_new()
        self.media = None
        self._length_ms = 0
        self._pending_ms: int | None = None
        self._seek_retries = 0

    def load(self, path: str) -> None:
        if not os.path.isfile(path):
            raise FileNotFoundError(path)
        self._release_media()
        media = self.instance.media_new(os.path.abspath(path))
        # Synchronous local parse so the length is known before playback starts.
        media.parse()
        self.player.set_media(media)
        self.media = media
        self._length_ms = int(media.get_duration() or 0)
        self._pending_ms = None

    def length_seconds(self) -> float:
        if self._length_ms <= 0:
            self._length_ms = max(0, int(self.player.get_length() or 0))
        return float(self._length_ms) / 1000.0

    def play(self) -> None:
        if self.get_state() in self._ended_states():
            self.player.stop()
        rc = int(self.player.play())
        if rc == -1:
            raise RuntimeError("VLC failed to start playback.")
        if self._pending_ms is not None:
            self.player.set_time(int(self._pending_ms))

    def pause(self) -> None:
        self.player.set_pause(1)

    def stop(self) -> None:
        self.player.stop()

    def position_seconds(self) -> float:
        current_ms = int(self.player.get_time() or 0)
        if self._pending_ms is not None:
            pending = self._pending_ms
            if bool(self.player.is_playing()) and current_ms >= 0:
                drift = abs(current_ms - pending)
                if drift <= _VLC_SEEK_TOLERANCE_MS or self._seek_retries >= _VLC_SEEK_RETRY_LIMIT:
                    self._pending_ms = None
                    return float(max(0, current_ms)) / 1000.0
                self._seek_retries += 1
                self.player.set_time(int(pending))
            return float(pending) / 1000.0
        return float(max(0, current_ms)) / 1000.0

    def set_position_seconds(self, seconds: float) -> None:
        target_ms = int(round(max(0.0, float(seconds)) * 1000.0))
        self._pending_ms = target_ms
        self._seek_retries = 0
        self.player.set_time(target_ms)

    def has_ended(self) -> bool:
        return self.get_state() in self._ended_states()

    def get_state(self):
        return self.player.get_state()

    def _ended_states(self) -> set:
        state = getattr(self._vlc, "State", None)
        if state is None:
            return set()
        return {state.Ended, state.Error}

    def _release_media(self) -> None:
        if self.media is None:
            return
        try:
            self.media.release()
        except Exception:
            pass
        self.media = None

    def release(self) -> None:
        try:
            self.player.stop()
        except Exception:
            pass
        self._release_media()
        try:
            self.player.release()
        except Exception:
            pass
        try:
            self.instance.release()
        except Exception:
            pass


class SoundDeviceAudioBackend:
    """Decode with soundfile and play PCM through sounddevice.

    Position is derived from the monotonic clock since playback started,
    the same way a non-blocking ``sd.play`` stream is tracked.
    """

    def __init__(self, *, sd_module=None, sf_module=None, clock=time.monotonic) -> None:
        self._sd = sd_module if sd_module is not None else _sd
        self._sf = sf_module if sf_module is not None else _sf
        if self._sd is None or self._sf is None:
            raise RuntimeError("sounddevice and soundfile are required for PCM playback")
        self._clock = clock
        self.pcm_data: np.ndarray | None = None
        self.sample_rate = 0
        self.total_frames = 0
        self.start_frame = 0
        self.started_at = 0.0
        self.is_playing = False

    def load(self, path: str) -> None:
        if not os.path.isfile(path):
            raise FileNotFoundError(path)
        audio, sr = self._sf.read(str(path), dtype="float32", always_2d=False)
        audio_np = np.asarray(audio, dtype=np.float32)
        if audio_np.ndim not in (1, 2):
            raise RuntimeError("Unsupported audio shape.")
        if audio_np.size == 0 or int(sr) <= 0:
            raise RuntimeError("Audio resource is empty.")
        self.stop()
        self.pcm_data = audio_np
        self.sample_rate = int(sr)
        self.total_frames = int(audio_np.shape[0])
        self.start_frame = 0

    def length_seconds(self) -> float:
        if self.sample_rate <= 0:
            return 0.0
        return float(self.total_frames) / float(self.sample_rate)

    def play(self) -> None:
        if self.pcm_data is None:
            raise RuntimeError("No audio loaded.")
        frame = int(max(0, min(self.total_frames, self.start_frame)))
        if frame >= self.total_frames:
            frame = 0
        chunk = self.pcm_data[frame:] if self.pcm_data.ndim == 1 else self.pcm_data[frame:, :]
        self._sd.play(chunk, samplerate=int(self.sample_rate), blocking=False)
        self.start_frame = frame
        self.started_at = self._clock()
        self.is_playing = True

    def pause(self) -> None:
        if not self.is_playing:
            return
        self.start_frame = self._current_frame()
        self._sd.stop()
        self.is_playing = False
        self.started_at = 0.0

    def stop(self) -> None:
        if self.is_playing:
            self._sd.stop()
        self.is_playing = False
        self.started_at = 0.0

    def position_seconds(self) -> float:
        if self.sample_rate <= 0:
            return 0.0
        return float(self._current_frame()) / float(self.sample_rate)

    def set_position_seconds(self, seconds: float) -> None:
        frame = int(max(0.0, float(seconds)) * float(max(self.sample_rate, 1)))
        frame = min(self.total_frames, frame)
        was_playing = self.is_playing
        if was_playing:
            self._sd.stop()
            self.is_playing = False
            self.started_at = 0.0
        self.start_frame = frame
        # A seek to the end leaves the stream stopped so has_ended() reports it.
        if was_playing and frame < self.total_frames:
            self.play()

    def has_ended(self) -> bool:
        return self.total_frames > 0 and self._current_frame() >= self.total_frames

    def _current_frame(self) -> int:
        if not self.is_playing or self.sample_rate <= 0:
            return self.start_frame
        elapsed = max(0.0, self._clock() - self.started_at)
        frame = self.start_frame + int(elapsed * float(self.sample_rate))
        return min(self.total_frames, frame)

    def release(self) -> None:
        self.stop()
        self.pcm_data = None
        self.sample_rate = 0
        self.total_frames = 0
        self.start_frame = 0


def create_audio_backend(
    name: str,
    logger,
    *,
    vlc_module=None,
    sd_module=None,
    sf_module=None,
):
    """Create the configured backend; "auto" prefers VLC and falls back to sounddevice.

    Returns None when no backend can be created.
    """
    choice = str(name or "auto").strip().lower()
    if choice in ("auto", "vlc"):
        try:
            backend = VlcAudioBackend(vlc_module=vlc_module)
            logger.debug("Using VLC audio backend")
            return backend
        except Exception:
            logger.exception("Failed to create VLC backend")
            if choice == "vlc":
                return None
    try:
        backend = SoundDeviceAudioBackend(sd_module=sd_module, sf_module=sf_module)
        logger.debug("Using sounddevice audio backend")
        return backend
    except Exception:
        logger.exception("Failed to create sounddevice backend")
    return None
