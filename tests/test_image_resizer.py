# -*- coding: utf-8 -*-
"""Tests for screenshot resizing."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from PIL import Image

from clickcast.pipeline.image_resizer import compute_dimensions, get_resized_dimensions, resize_image
from conftest import write_png


@pytest.mark.parametrize(
    ("requested", "expected"),
    [
        ((0, 0), (1600, 900)),
        ((800, 0), (800, 450)),
        ((0, 450), (800, 450)),
        ((800, 800), (800, 800)),
        ((1, 0), (1, 1)),
    ],
)
def test_compute_dimensions(requested: tuple[int, int], expected: tuple[int, int]) -> None:
    assert compute_dimensions((1600, 900), *requested) == expected


def test_get_resized_dimensions_reads_the_file(tmp_path: Path) -> None:
    image = write_png(tmp_path / "shot.png", (320, 240))
    assert get_resized_dimensions(image, 0, 120) == (160, 120)


def test_resize_writes_requested_size(tmp_path: Path) -> None:
    source = write_png(tmp_path / "shot.png", (320, 240))
    target = tmp_path / "out" / "shot.png"
    assert resize_image(source, target, 160, 0) == (160, 120)
    with Image.open(target) as image:
        assert image.size == (160, 120)
        assert image.format == "PNG"


def test_unchanged_size_copies_bytes(tmp_path: Path) -> None:
    source = write_png(tmp_path / "shot.png", (320, 240))
    target = tmp_path / "out" / "shot.png"
    resize_image(source, target, 320, 240)
    assert target.read_bytes() == source.read_bytes()


def test_distortion_is_logged(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    source = write_png(tmp_path / "shot.png", (320, 240))
    with caplog.at_level(logging.INFO, logger="clickcast.pipeline.image_resizer"):
        assert resize_image(source, tmp_path / "wide.png", 400, 100) == (400, 100)
    assert "aspect ratio" in caplog.text
