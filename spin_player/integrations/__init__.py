"""Integrations for external audio libraries."""

from .audio_backends import SoundDeviceAudioBackend, VlcAudioBackend, create_audio_backend

__all__ = [
    "SoundDeviceAudioBackend",
    "VlcAudioBackend",
    "create_audio_backend",
]
