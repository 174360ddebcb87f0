# -*- coding: utf-8 -*-
"""Generate the state blob, stylesheet and HTML page of a build."""

from __future__ import annotations

import html
import json
import re
from pathlib import PurePosixPath
from typing import Any

from clickcast.constants import (
    APP_NAME,
    APP_SCRIPT,
    CURSOR_IMAGE,
    IMG_DIR_NAME,
    MOUSE_CURSOR_TARGET,
    SEARCH_HELPER_SCRIPT,
    VIEWER_SCRIPT,
    VIEWER_STYLESHEET,
)
from clickcast.models.presentation import Presentation

PRESENTATION_ELEMENT_ID = "clickcast-presentation"
STATE_ELEMENT_ID = "presentation-state"

_STATE_PATTERN = re.compile(
    r'<script type="application/json" id="' + STATE_ELEMENT_ID + r'">(.*?)</script>',
    re.DOTALL,
)


def build_image_path(image_path: str) -> str:
    """Path of a slide image inside the build, relative to ``index.html``."""
    name = PurePosixPath(image_path.replace("\\", "/")).name
    return f"{IMG_DIR_NAME}/{name}"


def generate_state(presentation: Presentation, image_size: tuple[int, int]) -> dict[str, Any]:
    """Describe slides and actions in the shape the viewer engine reads."""
    width, height = image_size
    data: list[dict[str, Any]] = []
    for slide in presentation.slides:
        actions = []
        for index, action in enumerate(slide.actions):
            actions.append(
                {
                    "id": f"{slide.id}-{index}",
                    "type": "move",
                    "trigger": "afterPrevious",
                    "target": action.target,
                    "finalAbs": action.final_abs,
                    "finalOrd": action.final_ord,
                    "speed": action.speed,
                }
            )
        data.append(
            {
                "object": [
                    {"id": slide.id, "type": "background", "img": build_image_path(slide.image_path)},
                    {"id": MOUSE_CURSOR_TARGET, "type": "mouse"},
                ],
                "action": actions,
            }
        )

    first_cursor = next(
        (slide.actions[0] for slide in presentation.slides if slide.actions),
        None,
    )
    return {
        "metaData": {
            "imageWidth": width,
            "imageHeight": height,
            "initialBackgroundId": presentation.slides[0].id if presentation.slides else "",
            "initialMouseX": first_cursor.final_abs if first_cursor else 0.0,
            "initialMouseY": first_cursor.final_ord if first_cursor else 0.0,
        },
        "data": data,
    }


def generate_json_string(presentation: Presentation, image_size: tuple[int, int]) -> str:
    return json.dumps(generate_state(presentation, image_size), indent=2, ensure_ascii=True)


def generate_css_string(width: int, height: int) -> str:
    return (
        f"#{PRESENTATION_ELEMENT_ID} .image-container {{\n"
        "    position: relative;\n"
        "    overflow: hidden;\n"
        f"    width: {width}px;\n"
        f"    height: {height}px;\n"
        "}\n"
        f"#{PRESENTATION_ELEMENT_ID} .image-container img.background {{\n"
        "    position: absolute;\n"
        "    top: 0;\n"
        "    left: 0;\n"
        f"    width: {width}px;\n"
        f"    height: {height}px;\n"
        "}\n"
        f"#{PRESENTATION_ELEMENT_ID} .control {{\n"
        f"    width: {width}px;\n"
        "}\n"
    )


def _script_safe(text: str) -> str:
    # A literal "</" would close the inline script element early.
    return text.replace("</", "<\\/")


def generate_html_string(
    presentation: Presentation,
    state_json: str,
    css: str,
    title: str = "Presentation",
) -> str:
    """HTML page with the state blob and stylesheet inlined."""
    backgrounds = "\n".join(
        f'      <img class="background" id="{html.escape(slide.id)}" '
        f'src="{html.escape(build_image_path(slide.image_path))}" alt="">'
        for slide in presentation.slides
    )
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="generator" content="{APP_NAME}">
  <title>{html.escape(title)}</title>
  <link rel="stylesheet" href="{VIEWER_STYLESHEET}">
  <style>
{css}  </style>
</head>
<body>
  <section id="{PRESENTATION_ELEMENT_ID}" class="presentation">
    <div class="image-container">
{backgrounds}
      <img class="{MOUSE_CURSOR_TARGET}" src="{IMG_DIR_NAME}/{CURSOR_IMAGE}" alt="">
    </div>
    <div class="control">
      <button class="previous" type="button">Previous</button>
      <button class="next" type="button">Next</button>
    </div>
  </section>
  <script type="application/json" id="{STATE_ELEMENT_ID}">{_script_safe(state_json)}</script>
  <script src="{SEARCH_HELPER_SCRIPT}"></script>
  <script src="{APP_SCRIPT}"></script>
  <script src="{VIEWER_SCRIPT}"></script>
  <script>dahuapp.start("#{PRESENTATION_ELEMENT_ID}", "{STATE_ELEMENT_ID}");</script>
</body>
</html>
"""


def extract_state(document: str) -> dict[str, Any]:
    """Decode the state blob inlined in a generated HTML page."""
    match = _STATE_PATTERN.search(document)
    if match is None:
        raise ValueError("No inlined presentation state found")
    return json.loads(match.group(1))
