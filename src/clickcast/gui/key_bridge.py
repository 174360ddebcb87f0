# -*- coding: utf-8 -*-
"""Move global key presses onto the Qt main thread."""

from __future__ import annotations

import logging
from collections.abc import Callable

from PyQt6.QtCore import QObject, Qt, pyqtSignal

from clickcast.drivers.keyboard import PynputKeyListenerHub

logger = logging.getLogger(__name__)


class QtKeyBridge(QObject):
    """Key listener hub whose callbacks always run on the GUI thread.

    The pynput hub reports keys from its own thread; the queued signal hands
    them to the event loop so editor state is only touched from one thread.
    """

    key_pressed = pyqtSignal(str)
    error = pyqtSignal(str)

    def __init__(self, hub: PynputKeyListenerHub | None = None, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.hub = hub or PynputKeyListenerHub()
        self._callbacks: list[Callable[[str], object]] = []
        self.key_pressed.connect(self._deliver, Qt.ConnectionType.QueuedConnection)

    def add_key_listener(self, callback: Callable[[str], object]) -> None:
        if not self._callbacks:
            self.hub.add_key_listener(self._on_hub_key)
        self._callbacks.append(callback)

    def remove_key_listener(self, callback: Callable[[str], object]) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)
        if not self._callbacks:
            self.hub.remove_key_listener(self._on_hub_key)

    def _on_hub_key(self, key_name: str) -> None:
        self.key_pressed.emit(key_name)

    def _deliver(self, key_name: str) -> None:
        for callback in list(self._callbacks):
            try:
                callback(key_name)
            except Exception as exc:
                logger.exception("Key handler failed for %s", key_name)
                self.error.emit(str(exc))
