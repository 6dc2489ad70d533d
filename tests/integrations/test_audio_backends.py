from types import SimpleNamespace

import numpy as np
import pytest

import spin_player.integrations.audio_backends as backends_mod
from spin_player.integrations.audio_backends import (
    SoundDeviceAudioBackend,
    VlcAudioBackend,
    create_audio_backend,
)


def test_vlc_backend_load_play_pause_and_release(track_file, make_fake_vlc):
    vlc = make_fake_vlc(duration_ms=100000)
    backend = VlcAudioBackend(vlc_module=vlc, platform_name="linux")
    instance = vlc.created[0]
    player = instance.player

    assert instance.args == ["--no-xlib"]

    backend.load(track_file)
    assert instance.media[0].parsed is True
    assert player.media is instance.media[0]
    assert backend.length_seconds() == 100.0

    backend.play()
    player.time_ms = 2500
    assert backend.position_seconds() == 2.5
    backend.pause()
    assert player.pause_calls == [1]

    backend.load(track_file)
    assert instance.media[0].released is True

    backend.release()
    assert player.released is True
    assert instance.released is True
    assert instance.media[1].released is True


def test_vlc_backend_non_linux_args_and_length_fallback(track_file, make_fake_vlc):
    vlc = make_fake_vlc(duration_ms=0)
    backend = VlcAudioBackend(vlc_module=vlc, platform_name="win32")
    assert vlc.created[0].args == []

    backend.load(track_file)
    vlc.created[0].player.length_ms = 4200
    assert backend.length_seconds() == pytest.approx(4.2)


def test_vlc_backend_reapplies_pending_seek_until_position_catches_up(track_file, make_fake_vlc):
    vlc = make_fake_vlc()
    backend = VlcAudioBackend(vlc_module=vlc, platform_name="linux")
    player = vlc.created[0].player
    backend.load(track_file)

    backend.set_position_seconds(42.0)
    assert player.set_time_calls == [42000]
    assert backend.position_seconds() == 42.0

    backend.play()
    assert player.set_time_calls[-1] == 42000

    player.time_ms = 0
    assert backend.position_seconds() == 42.0
    assert len(player.set_time_calls) == 3

    player.time_ms = 42100
    assert backend.position_seconds() == pytest.approx(42.1)
    player.time_ms = 43000
    assert backend.position_seconds() == pytest.approx(43.0)


def test_vlc_backend_restarts_after_end_and_reports_failures(track_file, make_fake_vlc):
    vlc = make_fake_vlc()
    backend = VlcAudioBackend(vlc_module=vlc, platform_name="linux")
    player = vlc.created[0].player
    backend.load(track_file)

    player.state = vlc.State.Ended
    assert backend.has_ended() is True
    backend.play()
    assert player.stop_calls == 1
    assert backend.has_ended() is False

    player.play_rc = -1
    with pytest.raises(RuntimeError):
        backend.play()

    with pytest.raises(FileNotFoundError):
        backend.load(track_file + ".missing")


def test_vlc_backend_requires_module():
    with pytest.raises(RuntimeError):
        VlcAudioBackend(vlc_module=SimpleNamespace(Instance=lambda _args: None))


def test_sounddevice_backend_tracks_position_with_clock(track_file, fake_sd, make_fake_sf, manual_clock):
    sf = make_fake_sf(np.zeros(1000, dtype=np.float32), 100)
    backend = SoundDeviceAudioBackend(sd_module=fake_sd, sf_module=sf, clock=manual_clock)

    backend.load(track_file)
    assert sf.reads == [(track_file, "float32", False)]
    assert backend.length_seconds() == 10.0
    assert backend.position_seconds() == 0.0

    backend.play()
    assert fake_sd.play_calls == [(1000, 100, False)]
    manual_clock.advance(2.5)
    assert backend.position_seconds() == pytest.approx(2.5)

    backend.pause()
    assert fake_sd.stop_calls == 1
    manual_clock.advance(5.0)
    assert backend.position_seconds() == pytest.approx(2.5)

    backend.play()
    assert fake_sd.play_calls[-1] == (750, 100, False)

    backend.set_position_seconds(9.0)
    assert fake_sd.play_calls[-1] == (100, 100, False)
    manual_clock.advance(1.5)
    assert backend.has_ended() is True
    assert backend.position_seconds() == 10.0

    backend.release()
    assert backend.pcm_data is None
    assert backend.length_seconds() == 0.0


def test_sounddevice_backend_seek_to_end_while_playing_stops(track_file, fake_sd, make_fake_sf, manual_clock):
    backend = SoundDeviceAudioBackend(
        sd_module=fake_sd,
        sf_module=make_fake_sf(np.zeros(1000, dtype=np.float32), 100),
        clock=manual_clock,
    )
    backend.load(track_file)
    backend.play()
    manual_clock.advance(2.0)

    backend.set_position_seconds(10.0)

    assert fake_sd.play_calls == [(1000, 100, False)]
    assert fake_sd.stop_calls == 1
    assert backend.is_playing is False
    assert backend.has_ended() is True
    manual_clock.advance(1.0)
    assert backend.position_seconds() == 10.0


def test_sounddevice_backend_seek_while_paused_and_replay_from_end(
    track_file, fake_sd, make_fake_sf, manual_clock
):
    sf = make_fake_sf(np.zeros((400, 2), dtype=np.float32), 100)
    backend = SoundDeviceAudioBackend(sd_module=fake_sd, sf_module=sf, clock=manual_clock)
    backend.load(track_file)

    backend.set_position_seconds(1.0)
    assert fake_sd.play_calls == []
    assert backend.position_seconds() == 1.0

    backend.set_position_seconds(99.0)
    assert backend.has_ended() is True
    backend.play()
    assert fake_sd.play_calls[-1] == (400, 100, False)


def test_sounddevice_backend_rejects_bad_input(track_file, fake_sd, make_fake_sf, monkeypatch):
    monkeypatch.setattr(backends_mod, "_sf", None)
    with pytest.raises(RuntimeError):
        SoundDeviceAudioBackend(sd_module=fake_sd)

    backend = SoundDeviceAudioBackend(
        sd_module=fake_sd,
        sf_module=make_fake_sf(np.zeros(0, dtype=np.float32), 100),
    )
    with pytest.raises(RuntimeError):
        backend.load(track_file)
    with pytest.raises(FileNotFoundError):
        backend.load(track_file + ".missing")
    with pytest.raises(RuntimeError):
        backend.play()


def test_create_audio_backend_prefers_vlc_and_falls_back(
    monkeypatch, recording_logger, make_fake_vlc, fake_sd, make_fake_sf
):
    backend = create_audio_backend("auto", recording_logger, vlc_module=make_fake_vlc())
    assert isinstance(backend, VlcAudioBackend)
    assert "Using VLC audio backend" in recording_logger.debugs

    monkeypatch.setattr(backends_mod, "_vlc", None)
    recording_logger.debugs.clear()
    backend = create_audio_backend(
        "auto",
        recording_logger,
        sd_module=fake_sd,
        sf_module=make_fake_sf(np.zeros(10, dtype=np.float32), 10),
    )
    assert isinstance(backend, SoundDeviceAudioBackend)
    assert "Failed to create VLC backend" in recording_logger.exceptions
    assert "Using sounddevice audio backend" in recording_logger.debugs


@pytest.mark.parametrize(
    ("choice", "expected"),
    [
        ("vlc", ["Failed to create VLC backend"]),
        ("auto", ["Failed to create VLC backend", "Failed to create sounddevice backend"]),
        ("sounddevice", ["Failed to create sounddevice backend"]),
    ],
)
def test_create_audio_backend_returns_none_when_nothing_works(
    monkeypatch, recording_logger, choice, expected
):
    monkeypatch.setattr(backends_mod, "_vlc", None)
    monkeypatch.setattr(backends_mod, "_sd", None)
    monkeypatch.setattr(backends_mod, "_sf", None)

    assert create_audio_backend(choice, recording_logger) is None
    assert recording_logger.exceptions == expected
