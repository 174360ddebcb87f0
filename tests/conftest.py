# -*- coding: utf-8 -*-
"""Shared pytest fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from PIL import Image


SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


def write_png(path: Path, size: tuple[int, int] = (160, 120), color: tuple[int, int, int] = (30, 120, 200)) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", size, color).save(path, format="PNG")
    return path


class FakeGrabber:
    """Writes a small PNG instead of grabbing the screen."""

    def __init__(self, size: tuple[int, int] = (160, 120)) -> None:
        self.size = size
        self.calls: list[tuple[Path, str]] = []

    def take_screen(self, image_dir: Path, slide_id: str) -> str:
        self.calls.append((image_dir, slide_id))
        name = f"{slide_id}.png"
        write_png(image_dir / name, self.size)
        return name


class FakePointer:
    def __init__(self, x: float = 0.25, y: float = 0.75) -> None:
        self.position = (x, y)

    def get_pointer(self) -> tuple[float, float]:
        return self.position


class FakeKeyboard:
    def __init__(self) -> None:
        self.listeners: list = []
        self.added = 0
        self.removed = 0

    def add_key_listener(self, callback) -> None:
        self.added += 1
        self.listeners.append(callback)

    def remove_key_listener(self, callback) -> None:
        self.removed += 1
        self.listeners.remove(callback)

    def press(self, key_name: str) -> None:
        for callback in list(self.listeners):
            callback(key_name)


class EventRecorder:
    def __init__(self) -> None:
        self.events: list = []

    def __call__(self, event) -> None:
        self.events.append(event)

    def types(self) -> list[str]:
        return [type(event).__name__ for event in self.events]


@pytest.fixture
def grabber() -> FakeGrabber:
    return FakeGrabber()


@pytest.fixture
def pointer() -> FakePointer:
    return FakePointer()


@pytest.fixture
def keyboard() -> FakeKeyboard:
    return FakeKeyboard()


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()


@pytest.fixture
def sample_presentation():
    from clickcast.models.presentation import Action, Presentation, Slide

    return Presentation(
        output_width=800,
        output_height=600,
        slides=[
            Slide(
                id="a1b2",
                image_path="img/a1b2.png",
                actions=[Action(target="mouse-cursor", final_abs=0.5, final_ord=0.5, speed=0.8)],
            ),
            Slide(
                id="c3d4",
                image_path="img/c3d4.png",
                actions=[Action(target="mouse-cursor", final_abs=0.1, final_ord=0.9, speed=1.25)],
            ),
        ],
    )


@pytest.fixture
def sample_project_dir(tmp_path: Path, sample_presentation) -> Path:
    from clickcast.core import codec

    project_dir = tmp_path / "demo"
    for slide in sample_presentation.slides:
        write_png(project_dir / slide.image_path, (320, 240))
    codec.write_project(project_dir / "presentation.cast", sample_presentation)
    return project_dir


@pytest.fixture
def default_settings() -> dict:
    from clickcast.config import get_default_settings

    return get_default_settings()
