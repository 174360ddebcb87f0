# -*- coding: utf-8 -*-
"""Write a playable static bundle from a presentation and its screenshots."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from clickcast.constants import (
    GENERATED_HTML_NAME,
    GENERATED_STATE_NAME,
    IMG_DIR_NAME,
    RUNTIME_IMAGES,
    RUNTIME_SCRIPTS,
)
from clickcast.models.presentation import Presentation
from clickcast.pipeline import generator
from clickcast.pipeline.image_resizer import resize_image
from clickcast.utils.file_utils import copy_file, ensure_dir, remove_tree, write_text_file

logger = logging.getLogger(__name__)

RESOURCES_DIR = Path(__file__).resolve().parents[1] / "resources"


class BuildError(OSError):
    """Raised when a build step cannot read or write a file."""

    def __init__(self, message: str, path: str | Path) -> None:
        super().__init__(f"{message}: {path}")
        self.path = Path(path)


@dataclass
class BuildResult:
    """Files written by one build."""

    output_dir: Path
    html_path: Path
    image_size: tuple[int, int]
    images: list[Path] = field(default_factory=list)
    runtime_files: list[Path] = field(default_factory=list)
    state_path: Path | None = None


class BuildPipeline:
    """Generate ``index.html``, resized images and runtime assets.

    Steps abort on the first failure; files already written stay in place.
    """

    def __init__(self, resources_dir: Path | None = None) -> None:
        self.resources_dir = Path(resources_dir or RESOURCES_DIR)

    def generate_build(
        self,
        presentation: Presentation,
        project_dir: str | Path,
        output_dir: str | Path,
        write_state_file: bool = False,
        title: str = "Presentation",
    ) -> BuildResult:
        project_root = Path(project_dir)
        out_dir = Path(output_dir)
        logger.info("Building %d slides into %s", len(presentation.slides), out_dir)

        try:
            ensure_dir(out_dir)
            img_dir = ensure_dir(out_dir / IMG_DIR_NAME)
        except OSError as exc:
            raise BuildError(f"Cannot create build directory ({exc.strerror or exc})", out_dir) from exc

        images, image_size = self._resize_images(presentation, project_root, img_dir)

        state_json = generator.generate_json_string(presentation, image_size)
        css = generator.generate_css_string(*image_size)
        document = generator.generate_html_string(presentation, state_json, css, title=title)

        html_path = self._write(out_dir / GENERATED_HTML_NAME, document)
        state_path = None
        if write_state_file:
            state_path = self._write(out_dir / GENERATED_STATE_NAME, state_json + "\n")

        runtime_files = [self._copy_resource(name, out_dir / name) for name in RUNTIME_SCRIPTS]
        runtime_files += [self._copy_resource(name, img_dir / name) for name in RUNTIME_IMAGES]

        logger.info("Build finished: %s (%d images)", html_path, len(images))
        return BuildResult(
            output_dir=out_dir,
            html_path=html_path,
            image_size=image_size,
            images=images,
            runtime_files=runtime_files,
            state_path=state_path,
        )

    def clean_build(self, build_dir: str | Path) -> bool:
        """Remove a previous build. Returns False when there was none."""
        try:
            removed = remove_tree(build_dir)
        except OSError as exc:
            raise BuildError("Cannot remove build directory", build_dir) from exc
        if removed:
            logger.info("Removed build directory %s", build_dir)
        return removed

    def _resize_images(
        self,
        presentation: Presentation,
        project_root: Path,
        img_dir: Path,
    ) -> tuple[list[Path], tuple[int, int]]:
        width = presentation.output_width
        height = presentation.output_height
        written: list[Path] = []
        image_size: tuple[int, int] | None = None
        claimed: dict[str, str] = {}
        for image_path in dict.fromkeys(slide.image_path for slide in presentation.slides):
            source = project_root / image_path
            name = generator.build_image_path(image_path).split("/")[-1]
            if claimed.setdefault(name, image_path) != image_path:
                raise BuildError(f"Slide images {claimed[name]} and {image_path} share the build name {name}", source)
            target = img_dir / name
            if not source.is_file():
                raise BuildError("Slide image not found", source)
            try:
                size = resize_image(source, target, width, height)
            except OSError as exc:
                raise BuildError(f"Cannot resize image ({exc})", source) from exc
            if image_size is None:
                image_size = size
            written.append(target)
        return written, image_size or (width, height)

    def _write(self, path: Path, content: str) -> Path:
        try:
            return write_text_file(path, content)
        except OSError as exc:
            raise BuildError("Cannot write file", path) from exc

    def _copy_resource(self, name: str, target: Path) -> Path:
        source = self.resources_dir / name
        try:
            return copy_file(source, target)
        except OSError as exc:
            raise BuildError(f"Cannot copy runtime asset {name}", source) from exc


def generate_build(
    presentation: Presentation,
    project_dir: str | Path,
    output_dir: str | Path,
) -> BuildResult:
    return BuildPipeline().generate_build(presentation, project_dir, output_dir)
