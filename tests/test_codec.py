# -*- coding: utf-8 -*-
"""Tests for project file encoding and decoding."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from clickcast.core import codec
from clickcast.core.codec import ProjectParseError
from clickcast.models.presentation import Action, Presentation, Slide


def test_round_trip_preserves_every_field(sample_presentation: Presentation) -> None:
    assert codec.load(codec.save(sample_presentation)) == sample_presentation


def test_round_trip_keeps_awkward_floats() -> None:
    presentation = Presentation(
        output_width=1024,
        output_height=0,
        slides=[
            Slide(
                id="x",
                image_path="img/x.png",
                actions=[Action("mouse-cursor", 0.1 + 0.2, 1 / 3, 2.000000000000001)],
            )
        ],
    )
    loaded = codec.load(codec.save(presentation))
    action = loaded.slides[0].actions[0]
    assert action.final_abs == 0.1 + 0.2
    assert action.final_ord == 1 / 3
    assert action.speed == 2.000000000000001


def test_save_is_deterministic(sample_presentation: Presentation) -> None:
    assert codec.save(sample_presentation) == codec.save(sample_presentation)


def test_save_uses_wire_key_names(sample_presentation: Presentation) -> None:
    data = json.loads(codec.save(sample_presentation))
    assert list(data) == ["version", "outputWidth", "outputHeight", "slides"]
    assert list(data["slides"][0]) == ["id", "imagePath", "actions"]
    assert list(data["slides"][0]["actions"][0]) == ["target", "finalAbs", "finalOrd", "speed"]


def test_load_ignores_key_order() -> None:
    text = json.dumps(
        {
            "slides": [
                {
                    "actions": [{"speed": 0.8, "finalOrd": 0.2, "target": "mouse-cursor", "finalAbs": 0.7}],
                    "imagePath": "img/q.png",
                    "id": "q",
                }
            ],
            "outputHeight": 600,
            "outputWidth": 800,
        }
    )
    presentation = codec.load(text)
    assert presentation.output_width == 800
    assert presentation.slides[0].actions[0].final_abs == 0.7


def test_missing_version_reads_as_first_version() -> None:
    presentation = codec.load('{"outputWidth": 10, "outputHeight": 20, "slides": []}')
    assert presentation == Presentation(output_width=10, output_height=20)


def test_newer_version_is_rejected() -> None:
    with pytest.raises(ProjectParseError, match="unsupported project version"):
        codec.load('{"version": 99, "outputWidth": 10, "outputHeight": 20, "slides": []}')


def test_syntax_error_names_source_and_suggests_linter() -> None:
    with pytest.raises(ProjectParseError) as info:
        codec.load('{"outputWidth": 800,', source="/tmp/p/presentation.cast")
    assert info.value.source == "/tmp/p/presentation.cast"
    assert info.value.diagnostic
    assert "/tmp/p/presentation.cast" in str(info.value)
    assert "JSON linter" in str(info.value)


@pytest.mark.parametrize(
    "slide",
    [
        {"imagePath": "img/a.png", "actions": []},
        {"id": "a", "actions": []},
        {"id": "a", "imagePath": "img/a.png", "actions": [{"target": "laser", "finalAbs": 0, "finalOrd": 0, "speed": 1}]},
        {"id": "a", "imagePath": "img/a.png", "actions": [{"target": "mouse-cursor", "finalAbs": "0", "finalOrd": 0, "speed": 1}]},
        {"id": "a", "imagePath": "img/a.png", "actions": [{"target": "mouse-cursor", "finalAbs": 0, "finalOrd": 0, "speed": 0}]},
    ],
)
def test_invalid_slides_are_rejected(slide: dict) -> None:
    text = json.dumps({"outputWidth": 800, "outputHeight": 600, "slides": [slide]})
    with pytest.raises(ProjectParseError):
        codec.load(text)


def test_duplicate_slide_ids_are_rejected() -> None:
    slide = {"id": "a", "imagePath": "img/a.png", "actions": []}
    text = json.dumps({"outputWidth": 800, "outputHeight": 600, "slides": [slide, dict(slide)]})
    with pytest.raises(ProjectParseError, match="duplicate slide id"):
        codec.load(text)


def test_coordinates_outside_unit_range_are_kept() -> None:
    text = json.dumps(
        {
            "outputWidth": 800,
            "outputHeight": 600,
            "slides": [
                {
                    "id": "a",
                    "imagePath": "img/a.png",
                    "actions": [{"target": "mouse-cursor", "finalAbs": 1.5, "finalOrd": -0.2, "speed": 1}],
                }
            ],
        }
    )
    action = codec.load(text).slides[0].actions[0]
    assert (action.final_abs, action.final_ord) == (1.5, -0.2)


def test_write_and_read_project_file(tmp_path: Path, sample_presentation: Presentation) -> None:
    target = tmp_path / "nested" / "presentation.cast"
    codec.write_project(target, sample_presentation)
    assert target.read_text(encoding="utf-8").endswith("\n")
    assert codec.read_project(target) == sample_presentation


def test_read_project_error_carries_file_path(tmp_path: Path) -> None:
    target = tmp_path / "presentation.cast"
    target.write_text("not json", encoding="utf-8")
    with pytest.raises(ProjectParseError) as info:
        codec.read_project(target)
    assert info.value.source == str(target)


def test_non_utf8_project_file_names_the_file(tmp_path: Path) -> None:
    target = tmp_path / "presentation.cast"
    target.write_bytes(b'{"slides": [], "x": "\xff\xfe"}')
    with pytest.raises(ProjectParseError) as info:
        codec.read_project(target)
    assert info.value.source == str(target)
    assert "JSON linter" in str(info.value)
