"""Tests for ExportExecutor."""

from pathlib import Path

import pytest

from godot_ci.core.errors import ExportFailed
from godot_ci.export.executor import ExportExecutor
from godot_ci.models import ExportPreset, Toolchain
from tests.fakes import FakeProcessRunner


@pytest.fixture
def toolchain(tmp_path):
    bin_dir = tmp_path / "work" / "godot_executable"
    return Toolchain(
        executable=bin_dir / "godot",
        bin_dir=bin_dir,
        version="4.2.1.stable",
        templates_dir=tmp_path / "work" / "export_templates" / "4.2.1.stable",
        editor_settings_path=tmp_path / "config" / "editor_settings-4.tres",
    )


def writes_output(args: list[str]):
    """Behave like the engine: write the file named by the output argument."""
    Path(args[-1]).write_bytes(b"exported")
    return None


def preset(index: int, name: str, platform: str, export_path: str) -> ExportPreset:
    return ExportPreset(
        index=index, name=name, platform=platform, export_path=export_path
    )


class TestExportExecutor:
    """Test ExportExecutor class."""

    def test_exports_each_preset(self, make_config, toolchain):
        config = make_config(use_godot_4=True)
        runner = FakeProcessRunner(writes_output)
        executor = ExportExecutor(config, runner)

        artifacts = executor.run(
            [
                preset(0, "Windows Desktop", "Windows Desktop", "exports/game.exe"),
                preset(1, "Linux/X11", "Linux/X11", "exports/game.x86_64"),
            ],
            toolchain,
        )

        assert [a.name for a in artifacts] == ["Windows Desktop", "Linux/X11"]
        windows, linux = artifacts
        assert windows.directory == config.builds_path / "Windows Desktop"
        assert windows.executable_path == windows.directory / "game.exe"
        assert windows.directory_entry_count == 1
        assert windows.archive_path is None
        assert linux.sanitized_name == "Linux_X11"
        assert linux.executable_path == config.builds_path / "Linux_X11" / "game.x86_64"

        assert runner.calls[0] == [
            "godot",
            str(config.project_file),
            "--headless",
            "--export-release",
            "Windows Desktop",
            str(windows.executable_path),
        ]

    def test_preset_without_export_path_is_skipped(self, make_config, toolchain):
        config = make_config()
        runner = FakeProcessRunner(writes_output)
        executor = ExportExecutor(config, runner)

        artifacts = executor.run(
            [
                preset(0, "Windows", "Windows Desktop", "game.exe"),
                preset(1, "No Path", "Linux/X11", ""),
                preset(2, "Linux", "Linux/X11", "game.x86_64"),
            ],
            toolchain,
        )

        assert [a.name for a in artifacts] == ["Windows", "Linux"]
        assert executor.skipped_presets == ["No Path"]
        assert len(runner.calls) == 2
        assert all("No Path" not in call for call in runner.calls)
        assert not (config.builds_path / "No Path").exists()

    def test_failed_export_aborts_remaining_presets(self, make_config, toolchain):
        def handler(args: list[str]):
            if "Broken" in args:
                return (1, [], [])
            return writes_output(args)

        config = make_config()
        runner = FakeProcessRunner(handler)
        executor = ExportExecutor(config, runner)

        with pytest.raises(ExportFailed, match="'Broken' failed with exit code 1"):
            executor.run(
                [
                    preset(0, "Windows", "Windows Desktop", "game.exe"),
                    preset(1, "Broken", "Linux/X11", "game.x86_64"),
                    preset(2, "Never", "Linux/X11", "never.x86_64"),
                ],
                toolchain,
            )
        assert len(runner.calls) == 2

    def test_colliding_names_get_distinct_build_dirs(self, make_config, toolchain):
        config = make_config()
        executor = ExportExecutor(config, FakeProcessRunner(writes_output))

        artifacts = executor.run(
            [
                preset(0, "Linux/X11", "Linux/X11", "a.x86_64"),
                preset(1, "Linux:X11", "Linux/X11", "b.x86_64"),
            ],
            toolchain,
        )

        dirs = [a.directory for a in artifacts]
        assert dirs == [
            config.builds_path / "Linux_X11",
            config.builds_path / "Linux_X11_2",
        ]

    def test_pack_only_current_engine_appends_pck(self, make_config, toolchain):
        config = make_config(use_godot_4=True, export_as_pack=True, verbose=True)
        runner = FakeProcessRunner()
        executor = ExportExecutor(config, runner)

        (artifact,) = executor.run(
            [preset(0, "Web", "Web", "web/index.html")], toolchain
        )

        assert artifact.executable_path.name == "index.html.pck"
        assert runner.calls[0][-2:] == [str(artifact.executable_path), "--verbose"]

    def test_empty_output_is_only_a_warning(self, make_config, toolchain, caplog):
        config = make_config()
        executor = ExportExecutor(config, FakeProcessRunner())

        with caplog.at_level("WARNING"):
            (artifact,) = executor.run(
                [preset(0, "Windows", "Windows Desktop", "game.exe")], toolchain
            )

        assert artifact.directory_entry_count == 0
        assert "empty" in caplog.text
