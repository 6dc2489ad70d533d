"""Console and file logging for the player."""

from __future__ import annotations

import logging

from .config import AppConfig

LOGGER_NAME = "spin_player"
CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
FILE_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | %(module)s:%(lineno)d | "
    "%(funcName)s | %(message)s"
)


def _reset(target: logging.Logger, *handlers: logging.Handler) -> None:
    target.setLevel(logging.DEBUG)
    target.propagate = False
    for handler in list(target.handlers):
        target.removeHandler(handler)
        handler.close()
    for handler in handlers:
        target.addHandler(handler)


def setup_logging(config: AppConfig) -> logging.Logger:
    """Configure the app logger; safe to call again, old handlers are replaced.

    Python warnings are captured into the file log only.
    """
    console_handler = logging.StreamHandler()
    console_handler.setLevel(config.log_level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
    file_handler.setLevel(config.file_log_level)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))

    logger = logging.getLogger(LOGGER_NAME)
    _reset(logger, console_handler, file_handler)

    logging.captureWarnings(True)
    _reset(logging.getLogger("py.warnings"), file_handler)
    return logger
