"""Core test fixtures for the godot-ci project."""

import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from godot_ci.config import ENV_PREFIX, PipelineConfig
from godot_ci.models import BuildArtifact, ExportPreset
from tests.fakes import (
    EXECUTABLE_URL,
    TEMPLATES_URL,
    FakeArchiver,
    FakeProcessRunner,
)


# ---- Base Fixtures ----


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep GODOT_CI_* variables of the host out of the tests."""
    for key in list(os.environ):
        if key.upper().startswith(ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def fake_runner() -> FakeProcessRunner:
    return FakeProcessRunner()


@pytest.fixture
def fake_archiver() -> FakeArchiver:
    return FakeArchiver()


# ---- Project Fixtures ----


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    project = tmp_path / "project"
    project.mkdir()
    (project / "project.godot").write_text("config_version=5\n")
    return project


@pytest.fixture
def make_config(tmp_path: Path, project_dir: Path) -> Callable[..., PipelineConfig]:
    """Factory for configs whose directories all live under ``tmp_path``."""

    def _make(**overrides: Any) -> PipelineConfig:
        values: dict[str, Any] = {
            "godot_executable_download_url": EXECUTABLE_URL,
            "godot_export_templates_download_url": TEMPLATES_URL,
            "relative_project_path": project_dir,
            "relative_export_path": tmp_path / "exports",
            "working_path": tmp_path / "work",
            "config_path": tmp_path / "config",
        }
        values.update(overrides)
        return PipelineConfig(**values)

    return _make


@pytest.fixture
def make_artifact() -> Callable[..., BuildArtifact]:
    """Factory for artifacts whose build directory already holds the export."""

    def _make(
        config: PipelineConfig,
        name: str,
        platform: str,
        export_path: str,
        files: dict[str, bytes] | None = None,
        sanitized_name: str | None = None,
    ) -> BuildArtifact:
        preset = ExportPreset(
            index=0, name=name, platform=platform, export_path=export_path
        )
        build_dir = config.builds_path / (sanitized_name or name)
        build_dir.mkdir(parents=True, exist_ok=True)
        for relative, content in (files or {}).items():
            target = build_dir / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        return BuildArtifact(
            preset=preset,
            sanitized_name=sanitized_name or name,
            directory=build_dir,
            executable_path=build_dir / preset.export_filename,
            directory_entry_count=len(list(build_dir.iterdir())),
        )

    return _make
