# -*- coding: utf-8 -*-
"""Tests for state, stylesheet and page generation."""

from __future__ import annotations

import json

import pytest

from clickcast.models.presentation import Action, Presentation, Slide
from clickcast.pipeline import generator


def test_build_image_path_keeps_only_the_file_name() -> None:
    assert generator.build_image_path("img/a.png") == "img/a.png"
    assert generator.build_image_path("shots\\b.png") == "img/b.png"


def test_state_describes_every_slide(sample_presentation: Presentation) -> None:
    state = generator.generate_state(sample_presentation, (640, 480))
    assert state["metaData"] == {
        "imageWidth": 640,
        "imageHeight": 480,
        "initialBackgroundId": "a1b2",
        "initialMouseX": 0.5,
        "initialMouseY": 0.5,
    }
    assert len(state["data"]) == 2
    second = state["data"][1]
    assert second["object"][0] == {"id": "c3d4", "type": "background", "img": "img/c3d4.png"}
    assert second["object"][1] == {"id": "mouse-cursor", "type": "mouse"}
    assert second["action"] == [
        {
            "id": "c3d4-0",
            "type": "move",
            "trigger": "afterPrevious",
            "target": "mouse-cursor",
            "finalAbs": 0.1,
            "finalOrd": 0.9,
            "speed": 1.25,
        }
    ]


def test_state_of_empty_presentation() -> None:
    state = generator.generate_state(Presentation(800, 600), (800, 600))
    assert state["data"] == []
    assert state["metaData"]["initialBackgroundId"] == ""


def test_css_uses_canvas_size() -> None:
    css = generator.generate_css_string(640, 480)
    assert "width: 640px;" in css
    assert "height: 480px;" in css
    assert f"#{generator.PRESENTATION_ELEMENT_ID}" in css


def test_html_inlines_state_and_styles(sample_presentation: Presentation) -> None:
    state_json = generator.generate_json_string(sample_presentation, (640, 480))
    css = generator.generate_css_string(640, 480)
    document = generator.generate_html_string(sample_presentation, state_json, css, title="Demo")
    assert "<title>Demo</title>" in document
    assert css in document
    for name in ("parse-search.js", "dahuapp.js", "dahuapp.viewer.js", "dahuapp.viewer.css"):
        assert name in document
    assert generator.extract_state(document) == json.loads(state_json)


def test_html_escapes_closing_script_in_state() -> None:
    presentation = Presentation(
        output_width=100,
        output_height=100,
        slides=[Slide(id="</script>", image_path="img/x.png", actions=[Action("mouse-cursor", 0.5, 0.5, 1.0)])],
    )
    state_json = generator.generate_json_string(presentation, (100, 100))
    document = generator.generate_html_string(presentation, state_json, "")
    state = generator.extract_state(document)
    assert state["data"][0]["object"][0]["id"] == "</script>"


def test_extract_state_requires_the_blob() -> None:
    with pytest.raises(ValueError):
        generator.extract_state("<html></html>")
