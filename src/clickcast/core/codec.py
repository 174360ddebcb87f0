# -*- coding: utf-8 -*-
"""Project file encoding and decoding.

The project file is a JSON object::

    {
      "version": 1,
      "outputWidth": 800,
      "outputHeight": 600,
      "slides": [
        {"id": "...", "imagePath": "img/....png",
         "actions": [{"target": "mouse-cursor", "finalAbs": 0.5,
                      "finalOrd": 0.5, "speed": 0.8}]}
      ]
    }

Files written before the ``version`` key existed are read as version 1.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any

from clickcast.constants import ACTION_TARGETS, PROJECT_SCHEMA_VERSION
from clickcast.models.presentation import Action, Presentation, Slide
from clickcast.utils.file_utils import read_text_file, write_text_file

logger = logging.getLogger(__name__)


class ProjectParseError(ValueError):
    """Raised when a project file cannot be decoded."""

    def __init__(self, source: str | Path | None, diagnostic: str) -> None:
        self.source = str(source) if source is not None else "<string>"
        self.diagnostic = diagnostic
        super().__init__(
            f"Cannot parse {self.source}: {diagnostic}\n"
            "If you edited the file manually, validate it with a JSON linter "
            "for a more precise syntax error."
        )


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ValueError(message)


def _number(value: Any, where: str) -> float:
    _require(
        isinstance(value, (int, float)) and not isinstance(value, bool),
        f"{where} must be a number",
    )
    _require(math.isfinite(value), f"{where} must be finite")
    return float(value)


def _dimension(value: Any, where: str) -> int:
    _require(isinstance(value, int) and not isinstance(value, bool), f"{where} must be an integer")
    _require(value >= 0, f"{where} must be >= 0")
    return int(value)


def _decode_action(data: Any, where: str) -> Action:
    _require(isinstance(data, dict), f"{where} must be an object")
    target = data.get("target")
    _require(target in ACTION_TARGETS, f"{where}.target must be one of {list(ACTION_TARGETS)}")
    speed = _number(data.get("speed"), f"{where}.speed")
    _require(speed > 0, f"{where}.speed must be > 0")
    return Action(
        target=str(target),
        final_abs=_number(data.get("finalAbs"), f"{where}.finalAbs"),
        final_ord=_number(data.get("finalOrd"), f"{where}.finalOrd"),
        speed=speed,
    )


def _decode_slide(data: Any, where: str) -> Slide:
    _require(isinstance(data, dict), f"{where} must be an object")
    slide_id = data.get("id")
    image_path = data.get("imagePath")
    actions = data.get("actions", [])
    _require(isinstance(slide_id, str) and bool(slide_id), f"{where}.id must be a non-empty string")
    _require(isinstance(image_path, str) and bool(image_path), f"{where}.imagePath must be a non-empty string")
    _require(isinstance(actions, list), f"{where}.actions must be an array")
    return Slide(
        id=slide_id,
        image_path=image_path,
        actions=[_decode_action(item, f"{where}.actions[{index}]") for index, item in enumerate(actions)],
    )


def decode_presentation(data: Any) -> Presentation:
    """Validate a decoded JSON value and build a Presentation from it."""
    _require(isinstance(data, dict), "top-level value must be an object")
    version = data.get("version", 1)
    _require(isinstance(version, int) and not isinstance(version, bool), "version must be an integer")
    _require(
        1 <= version <= PROJECT_SCHEMA_VERSION,
        f"unsupported project version {version} (this editor reads up to {PROJECT_SCHEMA_VERSION})",
    )
    slides_data = data.get("slides", [])
    _require(isinstance(slides_data, list), "slides must be an array")

    slides = [_decode_slide(item, f"slides[{index}]") for index, item in enumerate(slides_data)]
    seen: set[str] = set()
    for slide in slides:
        _require(slide.id not in seen, f"duplicate slide id {slide.id!r}")
        seen.add(slide.id)

    return Presentation(
        output_width=_dimension(data.get("outputWidth", 0), "outputWidth"),
        output_height=_dimension(data.get("outputHeight", 0), "outputHeight"),
        slides=slides,
    )


def encode_presentation(presentation: Presentation) -> dict[str, Any]:
    """Return the JSON-ready form of a Presentation, keys in a fixed order."""
    return {
        "version": PROJECT_SCHEMA_VERSION,
        "outputWidth": presentation.output_width,
        "outputHeight": presentation.output_height,
        "slides": [
            {
                "id": slide.id,
                "imagePath": slide.image_path,
                "actions": [
                    {
                        "target": action.target,
                        "finalAbs": action.final_abs,
                        "finalOrd": action.final_ord,
                        "speed": action.speed,
                    }
                    for action in slide.actions
                ],
            }
            for slide in presentation.slides
        ],
    }


def load(text: str, source: str | Path | None = None) -> Presentation:
    """Parse project text. Raises ProjectParseError naming ``source``."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ProjectParseError(source, str(exc)) from exc
    try:
        return decode_presentation(data)
    except ValueError as exc:
        raise ProjectParseError(source, str(exc)) from exc


def save(presentation: Presentation) -> str:
    """Serialize deterministically; unchanged input gives identical text."""
    return json.dumps(encode_presentation(presentation), indent=2, ensure_ascii=True) + "\n"


def read_project(path: str | Path) -> Presentation:
    project_path = Path(path)
    try:
        text = read_text_file(project_path)
    except UnicodeDecodeError as exc:
        raise ProjectParseError(project_path, str(exc)) from exc
    presentation = load(text, source=project_path)
    logger.info("Loaded %d slides from %s", len(presentation.slides), project_path)
    return presentation


def write_project(path: str | Path, presentation: Presentation) -> Path:
    project_path = write_text_file(path, save(presentation))
    logger.info("Saved %d slides to %s", len(presentation.slides), project_path)
    return project_path
