"""Repeating callbacks on the Tk event loop."""

from __future__ import annotations

import tkinter as tk
from typing import Callable


class TkRepeatingTask:
    """A callback re-armed with ``root.after`` until cancelled."""

    def __init__(self, root: tk.Misc, interval_ms: int, callback: Callable[[], None], logger) -> None:
        self._root = root
        self._interval_ms = max(1, int(interval_ms))
        self._callback = callback
        self._logger = logger
        self._job: str | None = None
        self._cancelled = False

    @property
    def active(self) -> bool:
        return not self._cancelled

    def start(self) -> None:
        self._job = self._root.after(self._interval_ms, self._fire)

    def _fire(self) -> None:
        self._job = None
        if self._cancelled:
            return
        try:
            self._callback()
        except Exception:
            self._logger.exception("Scheduled callback failed")
        # The callback may have cancelled this task.
        if not self._cancelled:
            self._job = self._root.after(self._interval_ms, self._fire)

    def cancel(self) -> None:
        self._cancelled = True
        if self._job is None:
            return
        try:
            self._root.after_cancel(self._job)
        except tk.TclError:
            pass
        self._job = None


class TkScheduler:
    """Scheduler bound to a Tk root once the UI has created it."""

    def __init__(self, logger, root: tk.Misc | None = None) -> None:
        self.logger = logger
        self.root = root

    def bind(self, root: tk.Misc) -> None:
        self.root = root

    def call_every(self, interval_ms: int, callback: Callable[[], None]) -> TkRepeatingTask:
        if self.root is None:
            raise RuntimeError("Scheduler is not bound to a Tk root.")
        task = TkRepeatingTask(self.root, interval_ms, callback, self.logger)
        task.start()
        return task
