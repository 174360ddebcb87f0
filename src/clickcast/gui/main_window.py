# -*- coding: utf-8 -*-
"""Main editor window."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from PyQt6.QtCore import QSize, Qt, QUrl
from PyQt6.QtGui import QCloseEvent, QDesktopServices, QIcon
from PyQt6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QInputDialog,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSplitter,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from clickcast.config import ConfigError, save_settings
from clickcast.constants import APP_NAME, APP_VERSION, GENERATED_HTML_NAME
from clickcast.core.codec import ProjectParseError
from clickcast.core.editor import EditorController, EditorStateError
from clickcast.core.events import (
    ActionEdited,
    ActionSelected,
    CaptureModeChanged,
    PresentationReplaced,
    SelectionChanged,
    SlideAdded,
    SlideRemoved,
    SlidesSwapped,
)
from clickcast.gui.key_bridge import QtKeyBridge
from clickcast.gui.preview_widget import PreviewWidget

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Slide list on the left, preview on the right, actions in a toolbar row."""

    def __init__(self, controller: EditorController, key_bridge: QtKeyBridge, settings_path: Path | None = None) -> None:
        super().__init__()
        self.controller = controller
        self.key_bridge = key_bridge
        self.settings_path = settings_path
        self.setWindowTitle(f"{APP_NAME} {APP_VERSION}")
        self.setMinimumSize(720, 520)

        self.slide_list = QListWidget()
        self.slide_list.setIconSize(QSize(160, 100))
        self.slide_list.setMaximumWidth(220)
        self.slide_list.currentRowChanged.connect(self._on_row_changed)
        self.preview = PreviewWidget()
        self.preview.action_selected.connect(lambda index: self._run(self.controller.select_action, index))
        self.preview.action_moved.connect(self._on_action_moved)
        self.preview.action_committed.connect(self._on_action_committed)

        self.buttons: dict[str, QPushButton] = {}
        toolbar = QHBoxLayout()
        for key, label, handler in (
            ("new", "New", self.new_project),
            ("open", "Open", self.open_project),
            ("save", "Save", self.save_project),
            ("reload", "Reload", self.reload_project),
            ("capture", "Capture mode", self.toggle_capture),
            ("up", "Slide up", lambda: self._run(self.controller.move_selected_slide_up)),
            ("down", "Slide down", lambda: self._run(self.controller.move_selected_slide_down)),
            ("remove", "Remove slide", lambda: self._run(self.controller.remove_selected_slide)),
            ("size", "Output size", self.set_output_size),
            ("clean", "Clean build", self.clean_build),
            ("generate", "Generate", self.generate),
            ("preview", "Preview", self.open_preview),
            ("prefs", "Preferences", self.edit_preferences),
        ):
            button = QPushButton(label)
            button.clicked.connect(handler)
            toolbar.addWidget(button)
            self.buttons[key] = button
        toolbar.addStretch(1)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.addWidget(self.slide_list)
        splitter.addWidget(self.preview)
        splitter.setStretchFactor(1, 1)

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.addLayout(toolbar)
        layout.addWidget(splitter, 1)
        self.setCentralWidget(central)
        self.setStatusBar(QStatusBar())

        bus = self.controller.bus
        bus.subscribe(PresentationReplaced, self._on_presentation_replaced)
        bus.subscribe(SlideAdded, self._on_slide_added)
        bus.subscribe(SlideRemoved, self._on_slide_removed)
        bus.subscribe(SlidesSwapped, self._on_slides_swapped)
        bus.subscribe(SelectionChanged, self._on_selection_changed)
        bus.subscribe(ActionSelected, lambda event: self.preview.set_selected_action(event.index))
        bus.subscribe(ActionEdited, lambda event: self.preview.update())
        bus.subscribe(CaptureModeChanged, self._on_capture_mode_changed)
        self.key_bridge.error.connect(lambda message: self._show_error("Capture failed", message))

        self._syncing_list = False
        self._refresh_buttons()
        self.statusBar().showMessage("Create or open a project to start.")

    # -- helpers -------------------------------------------------------

    def _show_error(self, title: str, message: str) -> None:
        QMessageBox.warning(self, title, message)

    def _run(self, operation: Callable[..., Any], *args: Any) -> Any:
        """Call a controller operation and report expected failures."""
        try:
            result = operation(*args)
        except EditorStateError as exc:
            self._show_error("Not now", str(exc))
            return None
        except ProjectParseError as exc:
            self._show_error("Could not load project", str(exc))
            self.statusBar().showMessage("Could not load project.")
            return None
        except (OSError, ValueError, IndexError) as exc:
            logger.exception("Operation %s failed", getattr(operation, "__name__", operation))
            self._show_error("Error", str(exc))
            return None
        self._refresh_buttons()
        return result

    def _confirm_discard(self) -> bool:
        if not self.controller.has_unsaved_changes:
            return True
        answer = QMessageBox.question(self, APP_NAME, "There are unsaved changes.\nDiscard them?")
        return answer == QMessageBox.StandardButton.Yes

    def _refresh_buttons(self) -> None:
        has_project = self.controller.has_project
        capturing = self.controller.is_capturing
        selected = self.controller.session.selected_slide if self.controller.session else -1
        for key in ("new", "open", "prefs"):
            self.buttons[key].setEnabled(not capturing)
        for key in ("save", "reload", "size", "clean", "generate", "preview"):
            self.buttons[key].setEnabled(has_project and not capturing)
        for key in ("up", "down", "remove"):
            self.buttons[key].setEnabled(has_project and not capturing and selected >= 0)
        self.buttons["capture"].setEnabled(has_project)
        self.buttons["capture"].setText("Stop capture" if capturing else "Capture mode")

    def _slide_item(self, index: int) -> QListWidgetItem:
        slide = self.controller.store.get_slide(index)
        path = self.controller.session.resolve(slide.image_path) if self.controller.session else Path(slide.image_path)
        item = QListWidgetItem(QIcon(str(path)), f"{index + 1}")
        item.setToolTip(slide.image_path)
        return item

    def _renumber(self) -> None:
        for row in range(self.slide_list.count()):
            self.slide_list.item(row).setText(f"{row + 1}")

    # -- bus handlers --------------------------------------------------

    def _on_presentation_replaced(self, event: PresentationReplaced) -> None:
        self._syncing_list = True
        self.slide_list.clear()
        for index in range(event.slide_count):
            self.slide_list.addItem(self._slide_item(index))
        self._syncing_list = False
        self.preview.clear()
        if self.controller.session is not None:
            self.setWindowTitle(f"{APP_NAME} - {self.controller.session.project_dir}")
        self._refresh_buttons()

    def _on_slide_added(self, event: SlideAdded) -> None:
        self._syncing_list = True
        self.slide_list.insertItem(event.index, self._slide_item(event.index))
        self._renumber()
        self._syncing_list = False

    def _on_slide_removed(self, event: SlideRemoved) -> None:
        self._syncing_list = True
        self.slide_list.takeItem(event.index)
        self._renumber()
        self._syncing_list = False

    def _on_slides_swapped(self, event: SlidesSwapped) -> None:
        self._syncing_list = True
        for index in (event.first, event.second):
            self.slide_list.takeItem(index)
            self.slide_list.insertItem(index, self._slide_item(index))
        self._syncing_list = False

    def _on_selection_changed(self, event: SelectionChanged) -> None:
        self._syncing_list = True
        self.slide_list.setCurrentRow(event.index)
        self._syncing_list = False
        session = self.controller.session
        if event.index < 0 or session is None:
            self.preview.clear()
        else:
            slide = self.controller.store.get_slide(event.index)
            self.preview.show_slide(session.resolve(slide.image_path), slide.actions)
        self._refresh_buttons()

    def _on_capture_mode_changed(self, event: CaptureModeChanged) -> None:
        if event.active:
            key = str(self.controller.settings.get("captureKey", "f7")).upper()
            self.statusBar().showMessage(f"Capture mode ON ({key} to take a screenshot / ESC to exit capture mode)")
        else:
            self.statusBar().showMessage("Capture mode OFF")
        self._refresh_buttons()

    # -- widget handlers -----------------------------------------------

    def _on_row_changed(self, row: int) -> None:
        if self._syncing_list or not self.controller.has_project or self.controller.is_capturing:
            return
        self._run(self.controller.select_slide, row)

    def _on_action_moved(self, index: int, x: float, y: float) -> None:
        self._run(self.controller.move_action, index, x, y)
        self.statusBar().showMessage(f"x : {x * 100:.1f}%, y : {y * 100:.1f}%")

    def _on_action_committed(self, index: int, x: float, y: float) -> None:
        self._run(self.controller.commit_action_move, index, x, y)

    # -- toolbar actions -----------------------------------------------

    def load_project(self, project_dir: Path) -> None:
        if self._run(self.controller.open_or_create_project, project_dir) is not None:
            self.statusBar().showMessage(f"Project {project_dir} ready.")

    def new_project(self) -> None:
        if not self._confirm_discard():
            return
        choice = QFileDialog.getExistingDirectory(self, "Project directory")
        if choice and self._run(self.controller.new_project, Path(choice)) is not None:
            self.statusBar().showMessage("New project created. Click 'Capture mode' to start adding slides.")

    def open_project(self) -> None:
        if not self._confirm_discard():
            return
        choice = QFileDialog.getExistingDirectory(self, "Open project directory")
        if choice and self._run(self.controller.open_project, Path(choice)) is not None:
            self.statusBar().showMessage("Project successfully loaded.")

    def reload_project(self) -> None:
        if self._confirm_discard() and self._run(self.controller.reload_project) is not None:
            self.statusBar().showMessage("Project reloaded.")

    def save_project(self) -> None:
        path = self._run(self.controller.save_project)
        if path is not None:
            self.statusBar().showMessage(f"Saved in {path.parent} successfully")

    def toggle_capture(self) -> None:
        self._run(self.controller.toggle_capture)

    def set_output_size(self) -> None:
        store = self.controller.store
        width, ok = QInputDialog.getInt(self, "Output size", "Width (0 = keep ratio):", store.get_image_width(), 0, 10000)
        if not ok:
            return
        height, ok = QInputDialog.getInt(self, "Output size", "Height (0 = keep ratio):", store.get_image_height(), 0, 10000)
        if ok:
            size = self._run(self.controller.set_output_size, width, height)
            if size is not None:
                self.statusBar().showMessage(f"Output size set to {size[0]}x{size[1]}")

    def clean_build(self) -> None:
        if self._run(self.controller.clean_build) is not None:
            self.statusBar().showMessage("Build directory cleaned")

    def generate(self) -> None:
        result = self._run(self.controller.generate)
        if result is not None:
            self.statusBar().showMessage(f"Project successfully built ({len(result.images)} images)")

    def open_preview(self) -> None:
        session = self.controller.session
        if session is None:
            return
        target = session.build_dir / GENERATED_HTML_NAME
        if not target.exists():
            self._show_error("Preview", "Please generate your project first.")
            return
        QDesktopServices.openUrl(QUrl.fromLocalFile(str(target)))

    def edit_preferences(self) -> None:
        settings = dict(self.controller.settings)
        key, ok = QInputDialog.getText(self, "Preferences", "Capture key:", text=str(settings["captureKey"]))
        if not ok:
            return
        width, ok = QInputDialog.getInt(self, "Preferences", "Default width:", int(settings["defaultWidth"]), 0, 10000)
        if not ok:
            return
        height, ok = QInputDialog.getInt(self, "Preferences", "Default height:", int(settings["defaultHeight"]), 0, 10000)
        if not ok:
            return
        speed, ok = QInputDialog.getDouble(self, "Preferences", "Default speed:", float(settings["defaultSpeed"]), 0.01, 100.0, 2)
        if not ok:
            return
        settings.update(captureKey=key.strip().lower(), defaultWidth=width, defaultHeight=height, defaultSpeed=speed)
        try:
            save_settings(settings, self.settings_path)
        except (ConfigError, OSError) as exc:
            self._show_error("Preferences", str(exc))
            return
        self._run(self.controller.apply_settings, settings)

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802
        if self.controller.is_capturing:
            self.controller.toggle_capture()
        if self._confirm_discard():
            event.accept()
        else:
            event.ignore()
