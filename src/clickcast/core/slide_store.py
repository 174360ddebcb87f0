# -*- coding: utf-8 -*-
"""Owner of the live Presentation and its structural mutations."""

from __future__ import annotations

import logging

from clickcast.core import codec
from clickcast.core.events import (
    ActionEdited,
    CanvasResized,
    EventBus,
    PresentationReplaced,
    SlideAdded,
    SlideRemoved,
    SlidesSwapped,
)
from clickcast.models.presentation import Action, Presentation, Slide

logger = logging.getLogger(__name__)


class SlideIndexError(IndexError):
    """Raised when a slide or action position is out of range."""


class DuplicateSlideError(ValueError):
    """Raised when a slide id is already used in the presentation."""


class SlideStore:
    """Hold exactly one Presentation and funnel every change through here.

    Each mutation publishes its event on the bus once the change is complete.
    """

    def __init__(self, bus: EventBus | None = None) -> None:
        self.bus = bus or EventBus()
        self._presentation = Presentation()

    @property
    def presentation(self) -> Presentation:
        return self._presentation

    def create_presentation(self, width: int, height: int) -> None:
        self._presentation = Presentation(output_width=int(width), output_height=int(height))
        logger.info("Created presentation %dx%d", width, height)
        self.bus.publish(PresentationReplaced(slide_count=0))

    def load_presentation(self, presentation: Presentation) -> None:
        self._presentation = presentation
        self.bus.publish(PresentationReplaced(slide_count=len(presentation.slides)))

    def add_slide(
        self,
        position: int,
        slide_id: str,
        image_path: str,
        cursor_x: float,
        cursor_y: float,
        speed: float,
    ) -> Slide:
        slides = self._presentation.slides
        if position < 0 or position > len(slides):
            raise SlideIndexError(f"Invalid insert position {position} (slide count {len(slides)})")
        if any(slide.id == slide_id for slide in slides):
            raise DuplicateSlideError(f"Slide id already used: {slide_id}")
        slide = Slide.with_cursor(slide_id, image_path, cursor_x, cursor_y, speed)
        slides.insert(position, slide)
        logger.debug("Inserted slide %s at %d", slide_id, position)
        self.bus.publish(SlideAdded(index=position))
        return slide

    def remove_slide(self, position: int) -> Slide:
        self._check_index(position)
        slide = self._presentation.slides.pop(position)
        logger.debug("Removed slide %s from %d", slide.id, position)
        self.bus.publish(SlideRemoved(index=position, slide=slide))
        return slide

    def invert_slides(self, first: int, second: int) -> None:
        self._check_index(first)
        self._check_index(second)
        slides = self._presentation.slides
        slides[first], slides[second] = slides[second], slides[first]
        self.bus.publish(SlidesSwapped(first=first, second=second))

    def edit_mouse_action(self, slide_index: int, action_index: int, x: float, y: float) -> None:
        """Move an action in place. Coordinates are stored as given."""
        actions = self.get_action_list(slide_index)
        if action_index < 0 or action_index >= len(actions):
            raise SlideIndexError(f"Invalid action index {action_index} on slide {slide_index}")
        action = actions[action_index]
        action.final_abs = x
        action.final_ord = y
        self.bus.publish(ActionEdited(slide_index=slide_index, action_index=action_index, x=x, y=y))

    def set_image_size(self, width: int, height: int) -> None:
        self._presentation.output_width = int(width)
        self._presentation.output_height = int(height)
        self.bus.publish(CanvasResized(width=int(width), height=int(height)))

    def get_slide(self, index: int) -> Slide:
        self._check_index(index)
        return self._presentation.slides[index]

    def get_action_list(self, index: int) -> list[Action]:
        return self.get_slide(index).actions

    def get_nb_slide(self) -> int:
        return len(self._presentation.slides)

    def get_image_list(self) -> list[str]:
        return [slide.image_path for slide in self._presentation.slides]

    def get_a_background_image(self) -> str | None:
        if not self._presentation.slides:
            return None
        return self._presentation.slides[0].image_path

    def get_image_width(self) -> int:
        return self._presentation.output_width

    def get_image_height(self) -> int:
        return self._presentation.output_height

    def to_json(self) -> str:
        return codec.save(self._presentation)

    @classmethod
    def from_json(cls, text: str, bus: EventBus | None = None) -> SlideStore:
        store = cls(bus)
        store._presentation = codec.load(text)
        return store

    def _check_index(self, index: int) -> None:
        count = len(self._presentation.slides)
        if index < 0 or index >= count:
            raise SlideIndexError(f"Invalid slide index {index} (slide count {count})")
