# -*- coding: utf-8 -*-
"""Per-project editor session state."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from clickcast.constants import BUILD_DIR_NAME, IMG_DIR_NAME, PROJECT_FILE_NAME


@dataclass
class EditorSession:
    """Mutable state of one open project.

    Created when a project is opened or created and dropped when another
    one replaces it. Selection indices use -1 for "nothing selected".
    """

    project_dir: Path
    selected_slide: int = -1
    selected_action: int = -1
    unsaved_changes: bool = False

    @property
    def project_file(self) -> Path:
        return self.project_dir / PROJECT_FILE_NAME

    @property
    def image_dir(self) -> Path:
        return self.project_dir / IMG_DIR_NAME

    @property
    def build_dir(self) -> Path:
        return self.project_dir / BUILD_DIR_NAME

    def resolve(self, relative_path: str) -> Path:
        """Absolute path of a project-relative path such as ``img/x.png``."""
        return self.project_dir / relative_path
