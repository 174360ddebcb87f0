# -*- coding: utf-8 -*-
"""Screenshot resizing for the build output."""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image

from clickcast.utils.file_utils import copy_file, ensure_dir

logger = logging.getLogger(__name__)


def compute_dimensions(source_size: tuple[int, int], width: int = 0, height: int = 0) -> tuple[int, int]:
    """Return the output size for a requested width/height.

    A zero dimension is inferred from the source aspect ratio. When both are
    given they are used as-is, even if that distorts the image.
    """
    source_width, source_height = source_size
    if width <= 0 and height <= 0:
        return source_width, source_height
    if height <= 0:
        return width, max(1, round(source_height * width / source_width))
    if width <= 0:
        return max(1, round(source_width * height / source_height)), height
    return width, height


def get_resized_dimensions(path: str | Path, width: int = 0, height: int = 0) -> tuple[int, int]:
    """Dimensions that ``resize_image`` would produce for ``path``."""
    with Image.open(path) as image:
        return compute_dimensions(image.size, width, height)


def resize_image(source: str | Path, target: str | Path, width: int = 0, height: int = 0) -> tuple[int, int]:
    """Write a resized copy of ``source`` to ``target`` and return its size."""
    source_path = Path(source)
    target_path = Path(target)
    ensure_dir(target_path.parent)
    with Image.open(source_path) as image:
        size = compute_dimensions(image.size, width, height)
        if size == image.size:
            copy_file(source_path, target_path)
            return size
        if width > 0 and height > 0:
            source_ratio = image.size[0] / image.size[1]
            if abs(source_ratio - width / height) > 0.01:
                logger.info(
                    "Resizing %s from %dx%d to %dx%d changes its aspect ratio",
                    source_path.name, image.size[0], image.size[1], width, height,
                )
        resized = image.resize(size, Image.Resampling.LANCZOS)
        resized.save(target_path, format=image.format or "PNG")
    logger.debug("Resized %s -> %s (%dx%d)", source_path, target_path, size[0], size[1])
    return size
