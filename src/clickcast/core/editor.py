# -*- coding: utf-8 -*-
"""Top-level editor controller: project lifecycle, gating and slide editing."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from clickcast.config import get_default_settings
from clickcast.constants import PROJECT_FILE_NAME
from clickcast.core import codec
from clickcast.core.capture import CaptureController, KeyListenerHub, PointerProvider, ScreenGrabber
from clickcast.core.events import ActionSelected, EventBus, SelectionChanged
from clickcast.core.identifiers import generate_slide_id
from clickcast.core.session import EditorSession
from clickcast.core.slide_store import SlideStore
from clickcast.models.presentation import Slide
from clickcast.pipeline.builder import BuildPipeline, BuildResult
from clickcast.pipeline.image_resizer import get_resized_dimensions
from clickcast.utils.file_utils import ensure_dir

logger = logging.getLogger(__name__)


class EditorStateError(RuntimeError):
    """Raised when an operation is not allowed in the current editor state."""


class EditorController:
    """
    Central controller for the editor.
    Owns the session, the slide store and the capture controller, and refuses
    structural edits while no project is open or capture mode is on.
    """

    def __init__(
        self,
        settings: dict[str, Any] | None,
        grabber: ScreenGrabber,
        pointer: PointerProvider,
        keyboard: KeyListenerHub,
        bus: EventBus | None = None,
        pipeline: BuildPipeline | None = None,
        id_factory: Callable[[], str] = generate_slide_id,
    ) -> None:
        self.settings = settings or get_default_settings()
        self.bus = bus or EventBus()
        self.store = SlideStore(self.bus)
        self.grabber = grabber
        self.pointer = pointer
        self.keyboard = keyboard
        self.pipeline = pipeline or BuildPipeline()
        self.id_factory = id_factory
        self.session: EditorSession | None = None
        self.capture: CaptureController | None = None

    # -- state -----------------------------------------------------------

    @property
    def has_project(self) -> bool:
        return self.session is not None

    @property
    def is_capturing(self) -> bool:
        return self.capture is not None and self.capture.is_capturing()

    @property
    def has_unsaved_changes(self) -> bool:
        return self.session is not None and self.session.unsaved_changes

    def _require_project(self) -> EditorSession:
        if self.session is None:
            raise EditorStateError("Please open or create a project before doing that.")
        return self.session

    def _require_idle(self) -> None:
        if self.is_capturing:
            raise EditorStateError("Please turn capture mode off before doing that.")

    def _require_editable(self) -> EditorSession:
        self._require_idle()
        return self._require_project()

    def _require_selected_slide(self) -> EditorSession:
        session = self._require_editable()
        if session.selected_slide < 0:
            raise EditorStateError("No slide is selected.")
        return session

    def _start_session(self, project_dir: Path) -> EditorSession:
        session = EditorSession(project_dir=project_dir)
        self.session = session
        self.capture = CaptureController(
            self.store,
            session,
            self.grabber,
            self.pointer,
            self.keyboard,
            capture_key=str(self.settings.get("captureKey", "f7")),
            default_speed=float(self.settings.get("defaultSpeed", 0.8)),
            id_factory=self.id_factory,
        )
        return session

    def apply_settings(self, settings: dict[str, Any]) -> None:
        self._require_idle()
        self.settings = settings
        if self.capture is not None:
            self.capture.capture_key = str(settings.get("captureKey", self.capture.capture_key))
            self.capture.default_speed = float(settings.get("defaultSpeed", self.capture.default_speed))

    # -- project lifecycle ---------------------------------------------

    def new_project(self, project_dir: str | Path, width: int | None = None, height: int | None = None) -> EditorSession:
        self._require_idle()
        root = ensure_dir(project_dir)
        if (root / PROJECT_FILE_NAME).exists():
            logger.warning("Creating a new project over an existing one in %s", root)
        session = self._start_session(root)
        self.store.create_presentation(
            int(self.settings.get("defaultWidth", 800)) if width is None else width,
            int(self.settings.get("defaultHeight", 600)) if height is None else height,
        )
        logger.info("Project created in %s", root)
        return session

    def open_project(self, project_dir: str | Path) -> EditorSession:
        """Load a project. On failure the current project stays as it was."""
        self._require_idle()
        root = Path(project_dir)
        if root.exists() and not root.is_dir():
            raise NotADirectoryError(f"Not a directory: {root}")
        presentation = codec.read_project(root / PROJECT_FILE_NAME)
        session = self._start_session(root)
        self.store.load_presentation(presentation)
        session.selected_slide = len(presentation.slides) - 1
        self.bus.publish(SelectionChanged(index=session.selected_slide))
        logger.info("Project loaded from %s", root)
        return session

    def open_or_create_project(self, project_dir: str | Path) -> EditorSession:
        root = Path(project_dir)
        if (root / PROJECT_FILE_NAME).exists():
            return self.open_project(root)
        return self.new_project(root)

    def reload_project(self) -> EditorSession:
        session = self._require_editable()
        return self.open_project(session.project_dir)

    def save_project(self) -> Path:
        session = self._require_editable()
        path = codec.write_project(session.project_file, self.store.presentation)
        session.unsaved_changes = False
        return path

    def close_project(self) -> None:
        self._require_idle()
        self.session = None
        self.capture = None
        self.store.create_presentation(0, 0)

    # -- capture -------------------------------------------------------

    def toggle_capture(self) -> bool:
        self._require_project()
        capture = self.capture
        if capture is None:
            raise EditorStateError("Capture is not available for this project.")
        capture.toggle()
        return capture.is_capturing()

    def handle_key(self, key_name: str) -> Slide | None:
        if self.capture is None:
            return None
        return self.capture.handle_key(key_name)

    # -- selection -----------------------------------------------------

    def select_slide(self, index: int) -> None:
        session = self._require_project()
        if index != -1:
            self.store.get_slide(index)
        if session.selected_slide != index:
            session.selected_slide = index
            session.selected_action = -1
            self.bus.publish(SelectionChanged(index=index))

    def select_action(self, index: int) -> None:
        session = self._require_project()
        if session.selected_action != index:
            session.selected_action = index
            self.bus.publish(ActionSelected(index=index))

    # -- slide editing -------------------------------------------------

    def remove_selected_slide(self) -> Slide:
        """Remove the selected slide and delete its image once unreferenced."""
        session = self._require_selected_slide()
        removed = self.store.remove_slide(session.selected_slide)
        if removed.image_path not in self.store.get_image_list():
            image_file = session.resolve(removed.image_path)
            if image_file.exists():
                image_file.unlink()
                logger.info("Deleted orphaned image %s", image_file)
        if self.store.get_nb_slide() == session.selected_slide:
            session.selected_slide -= 1
        session.selected_action = -1
        session.unsaved_changes = True
        self.bus.publish(SelectionChanged(index=session.selected_slide))
        return removed

    def move_selected_slide_up(self) -> bool:
        session = self._require_selected_slide()
        if session.selected_slide <= 0:
            return False
        self.store.invert_slides(session.selected_slide, session.selected_slide - 1)
        session.selected_slide -= 1
        session.unsaved_changes = True
        self.bus.publish(SelectionChanged(index=session.selected_slide))
        return True

    def move_selected_slide_down(self) -> bool:
        session = self._require_selected_slide()
        if session.selected_slide >= self.store.get_nb_slide() - 1:
            return False
        self.store.invert_slides(session.selected_slide, session.selected_slide + 1)
        session.selected_slide += 1
        session.unsaved_changes = True
        self.bus.publish(SelectionChanged(index=session.selected_slide))
        return True

    def move_action(self, action_index: int, x: float, y: float) -> None:
        """Intermediate drag position; writes through to the action."""
        session = self._require_selected_slide()
        self.store.edit_mouse_action(session.selected_slide, action_index, x, y)
        session.unsaved_changes = True

    def commit_action_move(self, action_index: int, x: float, y: float) -> None:
        """Final drag position."""
        self.move_action(action_index, x, y)
        logger.info(
            "Slide %d action %d moved to %.4f, %.4f",
            self.session.selected_slide if self.session else -1, action_index, x, y,
        )

    def set_output_size(self, width: int, height: int) -> tuple[int, int]:
        """Set the build canvas; a 0 dimension follows the screenshots' ratio."""
        session = self._require_editable()
        size = (int(width), int(height))
        background = self.store.get_a_background_image()
        if background is not None and session.resolve(background).is_file():
            size = get_resized_dimensions(session.resolve(background), size[0], size[1])
        self.store.set_image_size(*size)
        session.unsaved_changes = True
        return size

    # -- build ---------------------------------------------------------

    def clean_build(self) -> bool:
        session = self._require_editable()
        return self.pipeline.clean_build(session.build_dir)

    def generate(self) -> BuildResult:
        session = self._require_editable()
        if session.unsaved_changes:
            raise EditorStateError("Please save your project before generating it.")
        self.pipeline.clean_build(session.build_dir)
        return self.pipeline.generate_build(
            self.store.presentation,
            session.project_dir,
            session.build_dir,
            title=session.project_dir.name or "Presentation",
        )
