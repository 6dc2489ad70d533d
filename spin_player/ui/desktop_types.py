"""Desktop UI interfaces."""

from __future__ import annotations

from typing import Protocol


class DesktopApp(Protocol):
    """Desktop player window contract."""

    title: str

    def launch(self) -> None:
        """Build the window and enter the UI main loop."""

    def close(self) -> None:
        """Dispose playback and destroy the window."""
