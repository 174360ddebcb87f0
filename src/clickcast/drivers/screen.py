# -*- coding: utf-8 -*-
"""Screenshot and pointer drivers backed by mss, Pillow and pynput."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from PIL import Image

from clickcast.utils.file_utils import ensure_dir

try:  # Optional runtime dependency, needs a display
    import mss  # type: ignore[import-not-found]
except Exception:  # pragma: no cover - depends on local environment
    mss = None  # type: ignore[assignment]

try:  # Optional runtime dependency, needs a display
    from pynput import mouse as pmouse  # type: ignore[import-not-found]
except Exception:  # pragma: no cover - depends on local environment
    pmouse = None  # type: ignore[assignment]

logger = logging.getLogger(__name__)


def _monitor(sct: Any, monitor_index: int) -> dict[str, int]:
    monitors = sct.monitors
    if monitor_index >= len(monitors):
        monitor_index = 1 if len(monitors) > 1 else 0
    return dict(monitors[monitor_index])


def normalize_position(x: float, y: float, bounds: dict[str, int]) -> tuple[float, float]:
    """Pointer position as fractions of the monitor. Not clamped."""
    width = max(1, int(bounds["width"]))
    height = max(1, int(bounds["height"]))
    return (x - bounds["left"]) / width, (y - bounds["top"]) / height


class MssScreenGrabber:
    """Grab one monitor and save it as ``<slide_id>.png``."""

    def __init__(self, monitor_index: int = 1) -> None:
        self.monitor_index = int(monitor_index)

    @staticmethod
    def is_available() -> bool:
        return mss is not None

    def monitor_bounds(self) -> dict[str, int]:
        if mss is None:
            raise RuntimeError("mss is not installed; screen capture is unavailable.")
        with mss.mss() as sct:
            return _monitor(sct, self.monitor_index)

    def take_screen(self, image_dir: Path, slide_id: str) -> str:
        if mss is None:
            raise RuntimeError("mss is not installed; screen capture is unavailable.")
        target_dir = ensure_dir(image_dir)
        with mss.mss() as sct:
            shot = sct.grab(_monitor(sct, self.monitor_index))
        image = Image.frombytes("RGB", shot.size, shot.bgra, "raw", "BGRX")
        file_name = f"{slide_id}.png"
        image.save(target_dir / file_name, format="PNG")
        logger.debug("Saved screenshot %s (%dx%d)", target_dir / file_name, shot.width, shot.height)
        return file_name


class PynputPointer:
    """Report the mouse position relative to the captured monitor."""

    def __init__(self, grabber: MssScreenGrabber | None = None, controller: Any = None) -> None:
        self.grabber = grabber or MssScreenGrabber()
        self._controller = controller

    def _get_controller(self) -> Any:
        if self._controller is None:
            if pmouse is None:
                raise RuntimeError("pynput is not installed; the pointer position is unavailable.")
            self._controller = pmouse.Controller()
        return self._controller

    def get_pointer(self) -> tuple[float, float]:
        x, y = self._get_controller().position
        return normalize_position(x, y, self.grabber.monitor_bounds())
