# -*- coding: utf-8 -*-
"""CLI commands for inspecting and building projects without the GUI."""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from clickcast.config import ConfigError, load_settings
from clickcast.constants import APP_NAME, BUILD_DIR_NAME, PROJECT_FILE_NAME
from clickcast.core import codec
from clickcast.core.codec import ProjectParseError
from clickcast.models.presentation import Presentation
from clickcast.pipeline.builder import BuildError, BuildPipeline
from clickcast.utils.logger import get_logger

app = typer.Typer(help="Build and inspect click-through screencast projects")
logger = logging.getLogger(__name__)


def _read(project_dir: Path) -> Presentation:
    try:
        return codec.read_project(project_dir / PROJECT_FILE_NAME)
    except ProjectParseError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
    except OSError as e:
        typer.echo(f"Cannot read project: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def new(
    project_dir: Path = typer.Argument(..., help="Project directory (created if missing)"),
    width: int = typer.Option(None, help="Output width (default from settings)"),
    height: int = typer.Option(None, help="Output height (default from settings)"),
    settings_file: Path = typer.Option(None, "--settings", help="Settings JSON file"),
    force: bool = typer.Option(False, help="Overwrite an existing project file"),
) -> None:
    """Create an empty project."""
    target = project_dir / PROJECT_FILE_NAME
    if target.exists() and not force:
        typer.echo(f"A project already exists: {target} (use --force to overwrite)", err=True)
        raise typer.Exit(1)
    try:
        settings = load_settings(settings_file)
    except ConfigError as e:
        typer.echo(f"Invalid settings: {e}", err=True)
        raise typer.Exit(1)
    presentation = Presentation(
        output_width=settings["defaultWidth"] if width is None else width,
        output_height=settings["defaultHeight"] if height is None else height,
    )
    codec.write_project(target, presentation)
    typer.echo(f"Created {target} ({presentation.output_width}x{presentation.output_height})")


@app.command()
def show(
    project_dir: Path = typer.Argument(..., help="Project directory"),
) -> None:
    """List the slides of a project."""
    presentation = _read(project_dir)
    typer.echo(f"Canvas: {presentation.output_width}x{presentation.output_height}")
    typer.echo(f"Slides: {len(presentation.slides)}")
    for index, slide in enumerate(presentation.slides, start=1):
        missing = "" if (project_dir / slide.image_path).is_file() else "  [missing image]"
        typer.echo(f"  {index:3d}. {slide.id}  {slide.image_path}{missing}")
        for action in slide.actions:
            typer.echo(
                f"       {action.target} -> ({action.final_abs:.3f}, {action.final_ord:.3f}) speed {action.speed}"
            )


@app.command()
def build(
    project_dir: Path = typer.Argument(..., help="Project directory"),
    output: Path = typer.Option(None, help="Output directory (default: <project>/build)"),
    clean: bool = typer.Option(True, help="Remove the previous build first"),
    state_file: bool = typer.Option(False, help="Also write presentation.json"),
    verbose: bool = typer.Option(False, help="Verbose output"),
) -> None:
    """Generate the static presentation bundle."""
    if verbose:
        get_logger(APP_NAME)
    presentation = _read(project_dir)
    output_dir = output or project_dir / BUILD_DIR_NAME
    pipeline = BuildPipeline()
    try:
        if clean:
            pipeline.clean_build(output_dir)
        result = pipeline.generate_build(
            presentation,
            project_dir,
            output_dir,
            write_state_file=state_file,
            title=project_dir.resolve().name,
        )
    except BuildError as e:
        logger.error("Build of %s failed: %s", project_dir, e)
        typer.echo(f"Build failed: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Built {len(result.images)} images into {result.output_dir}")
    typer.echo(f"Open {result.html_path}")


@app.command(name="clean")
def clean_command(
    project_dir: Path = typer.Argument(..., help="Project directory"),
) -> None:
    """Remove the build directory of a project."""
    try:
        removed = BuildPipeline().clean_build(project_dir / BUILD_DIR_NAME)
    except BuildError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
    typer.echo("Build directory cleaned" if removed else "Nothing to clean")


if __name__ == "__main__":
    app()
