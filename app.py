"""Desktop entrypoint for Spin Player."""

from __future__ import annotations

import atexit
import platform
import sys

from spin_player.config import load_config, skip_app_init
from spin_player.logging_config import setup_logging
from spin_player.application.bootstrap import initialize_app_services

CONFIG = load_config()
logger = setup_logging(CONFIG)

SKIP_APP_INIT = skip_app_init()

logger.info("Starting app")
logger.info("Log file: %s", CONFIG.log_file)
logger.debug(
    "Log config: LOG_LEVEL=%s FILE_LOG_LEVEL=%s LOG_DIR=%s ASSET_DIR=%s TRACK_RESOURCE=%s "
    "COVER_RESOURCE=%s AUDIO_BACKEND=%s POLL_INTERVAL_MS=%s ROTATION_PERIOD_SECONDS=%s "
    "ROTATION_FRAME_MS=%s SEEK_STEP_SECONDS=%s UI_SIZE=%s",
    CONFIG.log_level,
    CONFIG.file_log_level,
    CONFIG.log_dir,
    CONFIG.asset_dir,
    CONFIG.track_resource,
    CONFIG.cover_resource,
    CONFIG.audio_backend,
    CONFIG.poll_interval_ms,
    CONFIG.rotation_period_seconds,
    CONFIG.rotation_frame_ms,
    CONFIG.seek_step_seconds,
    CONFIG.ui_size,
)
logger.debug("Python version: %s", sys.version.replace("\n", " "))
logger.debug("Platform: %s", platform.platform())

SERVICES = None
app = None

if not SKIP_APP_INIT:
    SERVICES = initialize_app_services(config=CONFIG, logger=logger)
    app = SERVICES.app
else:
    logger.info("SPIN_SKIP_APP_INIT enabled; skipping audio and UI initialization")


def _shutdown_runtime() -> None:
    if SERVICES is None:
        return
    try:
        SERVICES.controller.dispose()
    except Exception:
        logger.exception("Runtime shutdown failed")


atexit.register(_shutdown_runtime)


def launch() -> None:
    if SKIP_APP_INIT:
        logger.info("SPIN_SKIP_APP_INIT enabled; launch skipped")
        return
    if app is None:
        raise RuntimeError("Desktop app is not initialized.")
    logger.info("Launching desktop app")
    app.launch()


if __name__ == "__main__":
    launch()
