# -*- coding: utf-8 -*-
"""Tests for the build CLI."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from clickcast.cli.build_cli import app
from clickcast.core import codec
from clickcast.pipeline.generator import extract_state

runner = CliRunner()


def test_new_creates_empty_project(tmp_path: Path) -> None:
    project_dir = tmp_path / "demo"
    result = runner.invoke(app, ["new", str(project_dir), "--width", "1024", "--height", "0"])
    assert result.exit_code == 0
    presentation = codec.read_project(project_dir / "presentation.cast")
    assert (presentation.output_width, presentation.output_height) == (1024, 0)
    assert presentation.slides == []


def test_new_refuses_to_overwrite(sample_project_dir: Path) -> None:
    result = runner.invoke(app, ["new", str(sample_project_dir)])
    assert result.exit_code == 1
    assert codec.read_project(sample_project_dir / "presentation.cast").slides


def test_new_reads_settings_defaults(tmp_path: Path) -> None:
    settings = tmp_path / "settings.json"
    settings.write_text(json.dumps({"defaultWidth": 640, "defaultHeight": 360}), encoding="utf-8")
    result = runner.invoke(app, ["new", str(tmp_path / "demo"), "--settings", str(settings)])
    assert result.exit_code == 0
    assert "640x360" in result.output


def test_show_lists_slides(sample_project_dir: Path) -> None:
    result = runner.invoke(app, ["show", str(sample_project_dir)])
    assert result.exit_code == 0
    assert "Slides: 2" in result.output
    assert "a1b2" in result.output
    assert "[missing image]" not in result.output


def test_show_reports_parse_error(tmp_path: Path) -> None:
    (tmp_path / "presentation.cast").write_text("{", encoding="utf-8")
    result = runner.invoke(app, ["show", str(tmp_path)])
    assert result.exit_code == 1


def test_build_and_clean(sample_project_dir: Path) -> None:
    result = runner.invoke(app, ["build", str(sample_project_dir), "--state-file"])
    assert result.exit_code == 0
    build_dir = sample_project_dir / "build"
    state = extract_state((build_dir / "index.html").read_text(encoding="utf-8"))
    assert len(state["data"]) == 2
    assert (build_dir / "presentation.json").is_file()

    result = runner.invoke(app, ["clean", str(sample_project_dir)])
    assert result.exit_code == 0
    assert not build_dir.exists()


def test_build_fails_on_missing_image(sample_project_dir: Path) -> None:
    (sample_project_dir / "img" / "a1b2.png").unlink()
    result = runner.invoke(app, ["build", str(sample_project_dir)])
    assert result.exit_code == 1


def test_verbose_build_into_custom_output(sample_project_dir: Path, tmp_path: Path) -> None:
    output = tmp_path / "site"
    result = runner.invoke(app, ["build", str(sample_project_dir), "--output", str(output), "--verbose"])
    assert result.exit_code == 0
    assert (output / "index.html").is_file()
    assert not (sample_project_dir / "build").exists()


def test_show_reports_undecodable_project(tmp_path: Path) -> None:
    (tmp_path / "presentation.cast").write_bytes(b'{"slides": [], "x": "\xff\xfe"}')
    result = runner.invoke(app, ["show", str(tmp_path)])
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "presentation.cast" in result.output
