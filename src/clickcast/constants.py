# -*- coding: utf-8 -*-
"""Application constants."""

APP_NAME = "clickcast"
APP_VERSION = "0.1.0"

DEFAULT_SETTINGS_FILE = "settings.json"

# Project layout
PROJECT_FILE_NAME = "presentation.cast"
IMG_DIR_NAME = "img"
BUILD_DIR_NAME = "build"

# Build output names, consumed by the playback engine as-is
GENERATED_HTML_NAME = "index.html"
GENERATED_STATE_NAME = "presentation.json"
VIEWER_SCRIPT = "dahuapp.viewer.js"
VIEWER_STYLESHEET = "dahuapp.viewer.css"
APP_SCRIPT = "dahuapp.js"
SEARCH_HELPER_SCRIPT = "parse-search.js"
CURSOR_IMAGE = "cursor.png"
CURSOR_PAUSE_IMAGE = "cursor-pause.png"

RUNTIME_SCRIPTS = (VIEWER_SCRIPT, VIEWER_STYLESHEET, APP_SCRIPT, SEARCH_HELPER_SCRIPT)
RUNTIME_IMAGES = (CURSOR_IMAGE, CURSOR_PAUSE_IMAGE)

MOUSE_CURSOR_TARGET = "mouse-cursor"
ACTION_TARGETS = (MOUSE_CURSOR_TARGET,)

ESCAPE_KEY = "escape"

PROJECT_SCHEMA_VERSION = 1
SETTINGS_SCHEMA_VERSION = 1

DEFAULT_CAPTURE_KEY = "f7"
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
DEFAULT_SPEED = 0.8
