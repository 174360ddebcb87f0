# -*- coding: utf-8 -*-
"""Application entry point."""

from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path

from PyQt6.QtWidgets import QApplication, QMessageBox

from clickcast.config import ConfigError, get_default_settings, load_settings
from clickcast.constants import APP_NAME, DEFAULT_SETTINGS_FILE
from clickcast.core.editor import EditorController
from clickcast.drivers.screen import MssScreenGrabber, PynputPointer
from clickcast.gui.key_bridge import QtKeyBridge
from clickcast.gui.main_window import MainWindow
from clickcast.utils.logger import setup_session_logging


def global_exception_handler(exc_type, exc_value, exc_traceback):
    """Log fatal errors and keep a copy of the last one on disk."""
    error_msg = "".join(traceback.format_exception(exc_type, exc_value, exc_traceback))
    logging.getLogger().critical("FATAL CRASH:\n%s", error_msg)

    crash_path = Path.cwd() / "logs" / "LAST_CRASH.log"
    crash_path.parent.mkdir(parents=True, exist_ok=True)
    crash_path.write_text(error_msg, encoding="utf-8")

    if QApplication.instance():
        QMessageBox.critical(None, "Application Crash", f"A fatal error occurred.\nDetails saved to: {crash_path}")

    sys.__excepthook__(exc_type, exc_value, exc_traceback)


def main() -> int:
    """Start the GUI application."""
    sys.excepthook = global_exception_handler
    session_log_path = setup_session_logging(Path.cwd(), APP_NAME)
    logger = logging.getLogger(__name__)
    app = QApplication(sys.argv)
    if session_log_path is not None:
        logger.info("Session log file: %s", session_log_path)

    settings_path = Path(DEFAULT_SETTINGS_FILE)
    try:
        settings = load_settings(settings_path)
    except ConfigError as exc:
        QMessageBox.warning(None, "Settings", f"{exc}\nUsing default settings.")
        settings = get_default_settings()

    grabber = MssScreenGrabber()
    if not grabber.is_available():
        logger.warning("mss is not installed: capture mode will fail")
    key_bridge = QtKeyBridge()
    controller = EditorController(settings, grabber, PynputPointer(grabber), key_bridge)
    window = MainWindow(controller, key_bridge, settings_path=settings_path)

    if len(sys.argv) > 1:
        window.load_project(Path(sys.argv[1]))

    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
