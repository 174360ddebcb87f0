# -*- coding: utf-8 -*-
"""Tests for the main window wiring."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

pytest.importorskip("PyQt6")

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from clickcast.core.editor import EditorController
from clickcast.gui.key_bridge import QtKeyBridge
from clickcast.gui.main_window import MainWindow


@pytest.fixture(scope="module")
def qt_app():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def window(qt_app, default_settings, grabber, pointer, keyboard):
    bridge = QtKeyBridge(hub=keyboard)
    controller = EditorController(default_settings, grabber, pointer, bridge)
    main_window = MainWindow(controller, bridge)
    yield main_window
    main_window.deleteLater()


def test_buttons_need_a_project(window: MainWindow) -> None:
    assert window.buttons["new"].isEnabled()
    assert not window.buttons["capture"].isEnabled()
    assert not window.buttons["generate"].isEnabled()


def test_loading_fills_slide_list(window: MainWindow, sample_project_dir: Path) -> None:
    window.load_project(sample_project_dir)
    assert window.slide_list.count() == 2
    assert window.slide_list.currentRow() == 1
    assert window.buttons["remove"].isEnabled()


def test_capture_through_key_bridge(window: MainWindow, sample_project_dir: Path, keyboard, qt_app) -> None:
    window.load_project(sample_project_dir)
    window.toggle_capture()
    assert window.buttons["capture"].text() == "Stop capture"
    assert not window.buttons["save"].isEnabled()

    keyboard.press("f7")
    qt_app.processEvents()
    assert window.slide_list.count() == 3
    assert window.slide_list.currentRow() == 2

    keyboard.press("escape")
    qt_app.processEvents()
    assert not window.controller.is_capturing
    assert window.buttons["save"].isEnabled()
    assert keyboard.listeners == []


def test_slide_moves_keep_list_in_sync(window: MainWindow, sample_project_dir: Path) -> None:
    window.load_project(sample_project_dir)
    window.buttons["up"].click()
    assert window.slide_list.currentRow() == 0
    assert window.slide_list.item(0).toolTip() == "img/c3d4.png"
    window.buttons["remove"].click()
    assert window.slide_list.count() == 1
    assert window.slide_list.item(0).text() == "1"
