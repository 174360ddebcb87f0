# -*- coding: utf-8 -*-
"""Settings persistence and validation."""

from __future__ import annotations

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any

from clickcast.constants import (
    DEFAULT_CAPTURE_KEY,
    DEFAULT_HEIGHT,
    DEFAULT_SETTINGS_FILE,
    DEFAULT_SPEED,
    DEFAULT_WIDTH,
    SETTINGS_SCHEMA_VERSION,
)
from clickcast.utils.file_utils import read_json_file, write_json_file

logger = logging.getLogger(__name__)


DEFAULT_SETTINGS: dict[str, Any] = {
    "version": SETTINGS_SCHEMA_VERSION,
    "captureKey": DEFAULT_CAPTURE_KEY,
    "defaultWidth": DEFAULT_WIDTH,
    "defaultHeight": DEFAULT_HEIGHT,
    "defaultSpeed": DEFAULT_SPEED,
}


class ConfigError(ValueError):
    """Raised when settings are invalid."""


def get_default_settings() -> dict[str, Any]:
    """Return a deep copy of the default settings."""
    return deepcopy(DEFAULT_SETTINGS)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def validate_settings(settings: dict[str, Any]) -> None:
    """Validate the fields the editor relies on."""
    version = settings.get("version")
    if not isinstance(version, int) or not (1 <= version <= SETTINGS_SCHEMA_VERSION):
        raise ConfigError(f"version must be an int in range 1..{SETTINGS_SCHEMA_VERSION}")

    capture_key = settings.get("captureKey")
    if not isinstance(capture_key, str) or not capture_key.strip():
        raise ConfigError("captureKey must be a non-empty string")
    if capture_key.strip().lower() in {"escape", "esc"}:
        raise ConfigError("captureKey cannot be escape, which leaves capture mode")

    for key in ("defaultWidth", "defaultHeight"):
        value = settings.get(key)
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            raise ConfigError(f"{key} must be an int >= 0")

    speed = settings.get("defaultSpeed")
    if not isinstance(speed, (float, int)) or isinstance(speed, bool) or float(speed) <= 0:
        raise ConfigError("defaultSpeed must be a number > 0")


def load_settings(path: str | Path | None = None) -> dict[str, Any]:
    """Load settings from JSON and merge them into the defaults."""
    settings_path = Path(path or DEFAULT_SETTINGS_FILE)
    if not settings_path.exists():
        logger.debug("No settings file at %s, using defaults", settings_path)
        return get_default_settings()

    try:
        loaded = read_json_file(settings_path)
    except ValueError as exc:
        raise ConfigError(f"Cannot read settings {settings_path}: {exc}") from exc
    merged = _deep_merge(get_default_settings(), loaded)
    validate_settings(merged)
    return merged


def save_settings(settings: dict[str, Any], path: str | Path | None = None) -> Path:
    """Validate and save settings as JSON."""
    validate_settings(settings)
    settings_path = Path(path or DEFAULT_SETTINGS_FILE)
    write_json_file(settings_path, settings)
    return settings_path
