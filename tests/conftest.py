"""Shared fakes for controller, backend and UI tests.

Fakes are plain classes handed out through fixtures so that tests inject them
through constructor arguments, never through ``sys.modules``.
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from spin_player.application.playback import PlaybackController

VLC_STATE = SimpleNamespace(Playing="playing", Paused="paused", Ended="ended", Error="error")


class RecordingLogger:
    def __init__(self):
        self.debugs = []
        self.infos = []
        self.warnings = []
        self.errors = []
        self.exceptions = []

    @staticmethod
    def _render(message, args):
        return message % args if args else message

    def debug(self, message, *args):
        self.debugs.append(self._render(message, args))

    def info(self, message, *args):
        self.infos.append(self._render(message, args))

    def warning(self, message, *args):
        self.warnings.append(self._render(message, args))

    def error(self, message, *args):
        self.errors.append(self._render(message, args))

    def exception(self, message, *args):
        self.exceptions.append(self._render(message, args))


class FakeBackend:
    def __init__(self, length=100.0, load_error=None):
        self.length = length
        self.load_error = load_error
        self.position = 0.0
        self.ended = False
        self.calls = []

    def load(self, path):
        self.calls.append(("load", path))
        if self.load_error is not None:
            raise self.load_error

    def length_seconds(self):
        return self.length

    def play(self):
        self.calls.append(("play",))

    def pause(self):
        self.calls.append(("pause",))

    def stop(self):
        self.calls.append(("stop",))

    def position_seconds(self):
        return self.position

    def set_position_seconds(self, seconds):
        self.calls.append(("seek", seconds))
        self.position = seconds

    def has_ended(self):
        return self.ended

    def release(self):
        self.calls.append(("release",))


class ManualTask:
    def __init__(self, interval_ms, callback):
        self.interval_ms = interval_ms
        self.callback = callback
        self.active = True

    def cancel(self):
        self.active = False


class ManualScheduler:
    """Scheduler whose tasks only run when ``tick`` is called."""

    def __init__(self):
        self.root = None
        self.tasks = []

    def bind(self, root):
        self.root = root

    def call_every(self, interval_ms, callback):
        task = ManualTask(interval_ms, callback)
        self.tasks.append(task)
        return task

    def tick(self):
        for task in list(self.tasks):
            if task.active:
                task.callback()

    @property
    def active_tasks(self):
        return [task for task in self.tasks if task.active]


class ManualClock:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeSoundDevice:
    def __init__(self):
        self.play_calls = []
        self.stop_calls = 0

    def play(self, audio, samplerate, blocking):
        self.play_calls.append((len(audio), samplerate, blocking))

    def stop(self):
        self.stop_calls += 1


class FakeSoundFile:
    def __init__(self, audio, sample_rate):
        self.audio = audio
        self.sample_rate = sample_rate
        self.reads = []

    def read(self, path, dtype, always_2d):
        self.reads.append((path, dtype, always_2d))
        return self.audio, self.sample_rate


class FakeVlcMedia:
    def __init__(self, path, duration_ms):
        self.path = path
        self.duration_ms = duration_ms
        self.parsed = False
        self.released = False

    def parse(self):
        self.parsed = True

    def get_duration(self):
        return self.duration_ms

    def release(self):
        self.released = True


class FakeVlcPlayer:
    def __init__(self):
        self.media = None
        self.play_rc = 0
        self.time_ms = 0
        self.length_ms = 0
        self.playing = False
        self.state = VLC_STATE.Paused
        self.set_time_calls = []
        self.stop_calls = 0
        self.pause_calls = []
        self.released = False

    def set_media(self, media):
        self.media = media

    def play(self):
        self.playing = True
        self.state = VLC_STATE.Playing
        return self.play_rc

    def stop(self):
        self.stop_calls += 1
        self.playing = False

    def set_pause(self, value):
        self.pause_calls.append(value)
        self.playing = False
        self.state = VLC_STATE.Paused

    def set_time(self, value):
        self.set_time_calls.append(value)

    def get_time(self):
        return self.time_ms

    def get_length(self):
        return self.length_ms

    def is_playing(self):
        return int(self.playing)

    def get_state(self):
        return self.state

    def release(self):
        self.released = True


class FakeVlcInstance:
    def __init__(self, args, duration_ms):
        self.args = args
        self.duration_ms = duration_ms
        self.player = FakeVlcPlayer()
        self.media = []
        self.released = False

    def media_player_new(self):
        return self.player

    def media_new(self, path):
        media = FakeVlcMedia(path, self.duration_ms)
        self.media.append(media)
        return media

    def release(self):
        self.released = True


class FakeVlcModule:
    """Stands in for the ``vlc`` module passed as ``vlc_module=``."""

    State = VLC_STATE

    def __init__(self, duration_ms=100000):
        self.duration_ms = duration_ms
        self.created = []

    def Instance(self, args):
        instance = FakeVlcInstance(args, self.duration_ms)
        self.created.append(instance)
        return instance


@pytest.fixture
def make_controller(tmp_path):
    """Build a controller with a fresh recording logger and manual scheduler."""

    def _make(backend, *, resource_path=None, poll_interval_ms=100):
        logger = RecordingLogger()
        scheduler = ManualScheduler()
        controller = PlaybackController(
            backend=backend,
            scheduler=scheduler,
            resource_path=resource_path or str(tmp_path / "Test Music.mp3"),
            logger=logger,
            poll_interval_ms=poll_interval_ms,
        )
        return controller, scheduler, logger

    return _make


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture
def manual_scheduler():
    return ManualScheduler()


@pytest.fixture
def manual_clock():
    return ManualClock()


@pytest.fixture
def fake_backend_type():
    return FakeBackend


@pytest.fixture
def fake_sd():
    return FakeSoundDevice()


@pytest.fixture
def make_fake_sf():
    return FakeSoundFile


@pytest.fixture
def make_fake_vlc():
    return FakeVlcModule


@pytest.fixture
def track_file(tmp_path):
    path = tmp_path / "Test Music.mp3"
    path.write_bytes(b"ID3")
    return str(path)
