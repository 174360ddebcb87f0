# -*- coding: utf-8 -*-
"""Presentation, slide and action data model."""

from __future__ import annotations

from dataclasses import dataclass, field

from clickcast.constants import MOUSE_CURSOR_TARGET


@dataclass
class Action:
    """Overlay event on a slide, in canvas fractions (0..1)."""

    target: str
    final_abs: float
    final_ord: float
    speed: float


@dataclass
class Slide:
    """One presentation step anchored to a single screenshot."""

    id: str
    image_path: str
    actions: list[Action] = field(default_factory=list)

    @classmethod
    def with_cursor(cls, slide_id: str, image_path: str, x: float, y: float, speed: float) -> Slide:
        """Build a slide whose first action places the mouse cursor."""
        return cls(
            id=slide_id,
            image_path=image_path,
            actions=[Action(target=MOUSE_CURSOR_TARGET, final_abs=x, final_ord=y, speed=speed)],
        )


@dataclass
class Presentation:
    """Output canvas size plus the ordered slide sequence."""

    output_width: int = 0
    output_height: int = 0
    slides: list[Slide] = field(default_factory=list)
