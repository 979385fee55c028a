"""Tests for ToolchainProvisioner."""

from pathlib import Path

import pytest

from godot_ci.core.errors import DownloadError, ToolchainAcquisitionFailed
from godot_ci.toolchain.provisioner import ToolchainProvisioner
from tests.fakes import FakeArchiver, FakeDownloader, FakeProcessRunner, make_zip


LINUX_BINARY = "Godot_v4.2.1-stable_linux.x86_64"


def _version_handler(version: str):
    def handler(args: list[str]):
        if args[1:] == ["--version"]:
            return (0, [version], [])
        return None

    return handler


@pytest.fixture
def toolchain_archives(tmp_path):
    """Executable and template archives as served by the download site."""
    executable_zip = make_zip(
        tmp_path / "remote" / "godot.zip",
        {
            "README.txt": b"read me",
            f"Godot_v4.2.1/bin/{LINUX_BINARY}": b"\x7fELF",
        },
    )
    templates_zip = make_zip(
        tmp_path / "remote" / "templates.tpz",
        {
            "templates/version.txt": b"4.2.1.stable",
            "templates/linux_release.x86_64": b"template",
        },
    )
    return executable_zip, templates_zip


@pytest.fixture
def make_provisioner(make_config, toolchain_archives):
    executable_zip, templates_zip = toolchain_archives

    def _make(version="4.2.1.stable.official.b09f793f5", runner=None, **overrides):
        config = make_config(**overrides)
        downloader = FakeDownloader(
            {
                str(config.godot_executable_download_url): executable_zip,
                str(config.godot_export_templates_download_url): templates_zip,
            }
        )
        runner = runner or FakeProcessRunner(_version_handler(version))
        provisioner = ToolchainProvisioner(
            config, runner, downloader=downloader, archiver=FakeArchiver()
        )
        return provisioner, config, runner, downloader

    return _make


class TestToolchainProvisioner:
    """Test ToolchainProvisioner class."""

    def test_provision_current_engine(self, make_provisioner):
        provisioner, config, runner, downloader = make_provisioner(use_godot_4=True)

        toolchain = provisioner.provision()

        bin_dir = config.working_path / "godot_executable" / "Godot_v4.2.1" / "bin"
        assert toolchain.executable == bin_dir / "godot"
        assert toolchain.executable.is_file()
        assert not (bin_dir / LINUX_BINARY).exists()
        assert toolchain.command == "godot"
        assert runner.search_paths == [bin_dir]
        assert toolchain.version == "4.2.1.stable"

        templates = config.working_path / "export_templates" / "4.2.1.stable"
        assert toolchain.templates_dir == templates
        assert (templates / "linux_release.x86_64").read_bytes() == b"template"
        assert not (config.working_path / "templates").exists()

        assert toolchain.editor_settings_path == (
            config.config_path / "editor_settings-4.tres"
        )
        assert toolchain.editor_settings_path.is_file()
        assert len(downloader.calls) == 2

    def test_current_engine_imports_project(self, make_provisioner):
        provisioner, config, runner, _ = make_provisioner(use_godot_4=True)

        provisioner.provision()

        assert runner.calls == [
            ["godot", "--version"],
            ["godot", str(config.project_file), "--headless", "-e", "--quit"],
        ]

    def test_provision_legacy_engine(self, make_provisioner):
        provisioner, config, runner, _ = make_provisioner(
            version="3.5.3.stable.official.6c814135b"
        )

        toolchain = provisioner.provision()

        templates = config.working_path / "templates" / "3.5.3.stable"
        assert toolchain.templates_dir == templates
        assert (templates / "version.txt").is_file()
        assert not (templates / "templates").exists()
        assert not (config.working_path / "tmp").exists()
        assert toolchain.editor_settings_path.name == "editor_settings-3.tres"
        # No import step for 3.x
        assert runner.calls == [["godot", "--version"]]

    def test_reprovision_replaces_templates(self, make_provisioner):
        provisioner, config, _, _ = make_provisioner(use_godot_4=True)
        provisioner.provision()
        stale = config.working_path / "export_templates" / "4.2.1.stable" / "stale"
        stale.write_text("old")

        provisioner.provision()

        assert not stale.exists()

    def test_keeps_existing_editor_settings(self, make_provisioner):
        provisioner, config, _, _ = make_provisioner()
        settings = config.config_path / "editor_settings-3.tres"
        settings.parent.mkdir(parents=True)
        settings.write_text("mine\n")

        provisioner.provision()

        assert settings.read_text() == "mine\n"

    def test_wine_settings_appended(self, make_provisioner, tmp_path):
        wine = tmp_path / "bin" / "wine"
        provisioner, config, _, _ = make_provisioner(wine_path=wine)

        provisioner.provision()

        content = (config.config_path / "editor_settings-3.tres").read_text()
        rcedit = config.working_path / "rcedit-x64.exe"
        assert f'export/windows/rcedit = "{rcedit}"' in content
        assert f'export/windows/wine = "{wine}"' in content

    def test_no_wine_settings_without_wine_path(self, make_provisioner):
        provisioner, config, _, _ = make_provisioner()

        provisioner.provision()

        content = (config.config_path / "editor_settings-3.tres").read_text()
        assert "export/windows/wine" not in content

    def test_missing_executable_is_fatal(self, make_provisioner, tmp_path):
        provisioner, config, _, downloader = make_provisioner()
        empty = make_zip(tmp_path / "remote" / "empty.zip", {"docs/readme.md": b""})
        downloader.files[str(config.godot_executable_download_url)] = empty

        with pytest.raises(ToolchainAcquisitionFailed, match="Could not find Godot"):
            provisioner.provision()

    def test_download_failure_is_fatal(self, make_provisioner):
        provisioner, _, _, _ = make_provisioner()

        def fail(url: str, destination: Path) -> Path:
            raise DownloadError(f"Failed to download {url}: 404")

        provisioner.downloader.download = fail

        with pytest.raises(ToolchainAcquisitionFailed, match="Failed to download"):
            provisioner.provision()

    def test_failed_import_is_fatal(self, make_provisioner):
        def handler(args: list[str]):
            if args[1:] == ["--version"]:
                return (0, ["4.2.1.stable.official.b09f793f5"], [])
            return (1, [], ["import error"])

        provisioner, _, _, _ = make_provisioner(
            use_godot_4=True, runner=FakeProcessRunner(handler)
        )

        with pytest.raises(ToolchainAcquisitionFailed, match="import failed"):
            provisioner.provision()

    def test_unknown_version_is_fatal(self, make_provisioner):
        provisioner, _, _, _ = make_provisioner(version="")

        with pytest.raises(ToolchainAcquisitionFailed, match="could not be determined"):
            provisioner.provision()
