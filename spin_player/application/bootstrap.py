"""Application bootstrap assembly for audio, playback and UI services."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ..config import AppConfig
from ..integrations.audio_backends import create_audio_backend
from ..ui.desktop_types import DesktopApp
from ..ui.scheduler import TkScheduler
from ..ui.tkinter_app import create_tkinter_app
from .playback import PlaybackController
from .ports import AudioBackend

BackendFactory = Callable[..., "AudioBackend | None"]


@dataclass(frozen=True)
class AppServices:
    audio_backend: AudioBackend | None
    scheduler: TkScheduler
    controller: PlaybackController
    app: DesktopApp


def initialize_app_services(
    *,
    config: AppConfig,
    logger,
    backend_factory: BackendFactory = create_audio_backend,
    app_factory=create_tkinter_app,
) -> AppServices:
    """Create the backend, load the bundled track and build the player window object."""
    audio_backend = backend_factory(config.audio_backend, logger)
    scheduler = TkScheduler(logger)
    controller = PlaybackController(
        backend=audio_backend,
        scheduler=scheduler,
        resource_path=config.track_path,
        logger=logger,
        poll_interval_ms=config.poll_interval_ms,
    )
    session = controller.initialize()
    if controller.is_loaded:
        logger.info("Track ready: %s (%s)", config.track_title, controller.format_time(session.duration))
    else:
        logger.warning("Track unavailable; player controls are inert")
    app = app_factory(
        config=config,
        logger=logger,
        controller=controller,
        scheduler=scheduler,
    )
    return AppServices(
        audio_backend=audio_backend,
        scheduler=scheduler,
        controller=controller,
        app=app,
    )
