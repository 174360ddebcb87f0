# -*- coding: utf-8 -*-
"""Global key listener backed by pynput."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

try:  # Optional runtime dependency, needs a display
    from pynput import keyboard as pkeyboard  # type: ignore[import-not-found]
except Exception:  # pragma: no cover - depends on local environment
    pkeyboard = None  # type: ignore[assignment]

logger = logging.getLogger(__name__)

KeyCallback = Callable[[str], None]

KEY_ALIASES = {
    "esc": "escape",
    "return": "enter",
    "cmd": "meta",
}


def normalize_key_name(key: Any) -> str | None:
    """Lower-case name of a pynput key (``f7``, ``escape``, ``a``)."""
    if key is None:
        return None
    name = getattr(key, "name", None)
    if isinstance(name, str) and name:
        name = name.lower()
        return KEY_ALIASES.get(name, name)
    char = getattr(key, "char", None)
    if isinstance(char, str) and char:
        return char.lower()
    vk = getattr(key, "vk", None)
    if vk is not None:
        return f"vk{vk}"
    return None


class PynputKeyListenerHub:
    """Fan key presses out to registered callbacks.

    The pynput listener runs only while at least one callback is registered.
    Callbacks are invoked on the listener thread.
    """

    def __init__(self) -> None:
        self._callbacks: list[KeyCallback] = []
        self._listener: Any = None
        self._lock = threading.Lock()

    @staticmethod
    def is_available() -> bool:
        return pkeyboard is not None

    def add_key_listener(self, callback: KeyCallback) -> None:
        with self._lock:
            if self._listener is None:
                self._start()
            self._callbacks.append(callback)

    def remove_key_listener(self, callback: KeyCallback) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)
            if not self._callbacks:
                self._stop()

    def dispatch(self, key_name: str) -> None:
        with self._lock:
            callbacks = list(self._callbacks)
        for callback in callbacks:
            callback(key_name)

    def _on_press(self, key: Any) -> None:
        name = normalize_key_name(key)
        if name is not None:
            self.dispatch(name)

    def _start(self) -> None:
        if pkeyboard is None:
            raise RuntimeError("pynput is not installed; global key capture is unavailable.")
        self._listener = pkeyboard.Listener(on_press=self._on_press)
        self._listener.start()
        logger.debug("Key listener started")

    def _stop(self) -> None:
        if self._listener is not None:
            self._listener.stop()
            self._listener = None
            logger.debug("Key listener stopped")
