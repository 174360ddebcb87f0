# -*- coding: utf-8 -*-
"""Capture mode: turn a keypress into a new slide."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from pathlib import Path
from typing import Protocol

from clickcast.constants import DEFAULT_CAPTURE_KEY, DEFAULT_SPEED, ESCAPE_KEY, IMG_DIR_NAME
from clickcast.core.events import CaptureModeChanged, SelectionChanged
from clickcast.core.identifiers import generate_slide_id
from clickcast.core.session import EditorSession
from clickcast.core.slide_store import SlideStore
from clickcast.models.presentation import Slide
from clickcast.utils.file_utils import ensure_dir

logger = logging.getLogger(__name__)

KeyCallback = Callable[[str], None]


class ScreenGrabber(Protocol):
    def take_screen(self, image_dir: Path, slide_id: str) -> str:
        """Write a screenshot into ``image_dir`` and return its file name."""


class PointerProvider(Protocol):
    def get_pointer(self) -> tuple[float, float]:
        """Return the pointer position as fractions of the screen."""


class KeyListenerHub(Protocol):
    def add_key_listener(self, callback: KeyCallback) -> None: ...

    def remove_key_listener(self, callback: KeyCallback) -> None: ...


class CaptureState(str, Enum):
    IDLE = "idle"
    CAPTURING = "capturing"


class CaptureController:
    """Two-state machine (IDLE, CAPTURING) driven by toggles and key events.

    Only the state flag is exposed; callers decide which other editor
    operations are allowed while capturing.
    """

    def __init__(
        self,
        store: SlideStore,
        session: EditorSession,
        grabber: ScreenGrabber,
        pointer: PointerProvider,
        keyboard: KeyListenerHub,
        capture_key: str = DEFAULT_CAPTURE_KEY,
        default_speed: float = DEFAULT_SPEED,
        id_factory: Callable[[], str] = generate_slide_id,
    ) -> None:
        self.store = store
        self.session = session
        self.grabber = grabber
        self.pointer = pointer
        self.keyboard = keyboard
        self.capture_key = capture_key
        self.default_speed = float(default_speed)
        self.id_factory = id_factory
        self._state = CaptureState.IDLE

    @property
    def state(self) -> CaptureState:
        return self._state

    def is_capturing(self) -> bool:
        return self._state is CaptureState.CAPTURING

    def toggle(self) -> CaptureState:
        if self._state is CaptureState.IDLE:
            self.keyboard.add_key_listener(self.handle_key)
            self._state = CaptureState.CAPTURING
            logger.info("Capture mode on (%s to capture, escape to leave)", self.capture_key.upper())
        else:
            self.keyboard.remove_key_listener(self.handle_key)
            self._state = CaptureState.IDLE
            logger.info("Capture mode off")
        self.store.bus.publish(CaptureModeChanged(active=self.is_capturing()))
        return self._state

    def handle_key(self, key_name: str) -> Slide | None:
        """Process one key event. Returns the new slide on a capture."""
        if self._state is not CaptureState.CAPTURING:
            return None
        key = key_name.strip().lower()
        if key == self.capture_key.strip().lower():
            return self._capture()
        if key == ESCAPE_KEY:
            self.toggle()
        return None

    def _capture(self) -> Slide:
        session = self.session
        image_dir = ensure_dir(session.image_dir)
        slide_id = self.id_factory()
        file_name = self.grabber.take_screen(image_dir, slide_id)
        x, y = self.pointer.get_pointer()
        position = session.selected_slide + 1
        slide = self.store.add_slide(
            position,
            slide_id,
            f"{IMG_DIR_NAME}/{file_name}",
            x,
            y,
            self.default_speed,
        )
        session.selected_slide = position
        session.selected_action = -1
        session.unsaved_changes = True
        logger.info("Captured slide %s at position %d (pointer %.3f, %.3f)", slide_id, position, x, y)
        self.store.bus.publish(SelectionChanged(index=position))
        return slide
