"""Toolchain provisioning: fetch, unpack and register the engine."""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from godot_ci.adapters import (
    create_archiver,
    create_downloader,
    create_file_adapter,
    create_process_runner,
)
from godot_ci.config.models import PipelineConfig
from godot_ci.core.errors import GodotCIError, ToolchainAcquisitionFailed
from godot_ci.models.toolchain import Toolchain
from godot_ci.protocols import (
    ArchiverProtocol,
    DownloaderProtocol,
    FileAdapterProtocol,
    ProcessRunnerProtocol,
)
from godot_ci.toolchain.discovery import find_executable
from godot_ci.toolchain.editor_settings import (
    append_windows_export_settings,
    install_editor_settings,
)
from godot_ci.toolchain.version import normalize_version


EXECUTABLE_ARCHIVE = "godot.zip"
TEMPLATES_ARCHIVE = "godot_templates.tpz"
EXECUTABLE_DIR = "godot_executable"
EXECUTABLE_NAME = "godot"


class ToolchainProvisioner:
    """Prepare the engine for headless exports.

    The provisioner downloads the executable and the export templates,
    unpacks both, puts the binary on the runner's search path, places the
    templates where the detected engine version expects them and writes the
    editor settings. Nothing is retried; a failing step raises
    :class:`ToolchainAcquisitionFailed`.
    """

    def __init__(
        self,
        config: PipelineConfig,
        runner: ProcessRunnerProtocol,
        downloader: DownloaderProtocol | None = None,
        archiver: ArchiverProtocol | None = None,
        file_adapter: FileAdapterProtocol | None = None,
    ) -> None:
        self.config = config
        self.runner = runner
        self.downloader = downloader or create_downloader()
        self.archiver = archiver or create_archiver(runner)
        self.file_adapter = file_adapter or create_file_adapter()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def working_path(self) -> Path:
        return self.config.working_path

    def provision(self) -> Toolchain:
        """Run every provisioning step and return the ready toolchain."""
        try:
            self.setup_working_path()
            self.download()
            executable = self.prepare_executable()
            version = self.query_version(executable.name)
            if self.config.use_godot_4:
                templates_dir = self.prepare_templates_current(version)
            else:
                templates_dir = self.prepare_templates_legacy(version)
            settings_path = self.prepare_editor_settings()

            toolchain = Toolchain(
                executable=executable,
                bin_dir=executable.parent,
                version=version,
                templates_dir=templates_dir,
                editor_settings_path=settings_path,
            )
            if self.config.use_godot_4:
                self.import_project(toolchain)
        except ToolchainAcquisitionFailed:
            raise
        except GodotCIError as e:
            raise ToolchainAcquisitionFailed(
                f"Toolchain setup failed: {e}", e.context
            ) from e

        self.logger.info("Toolchain ready: Godot %s at %s", version, executable)
        return toolchain

    def setup_working_path(self) -> None:
        self.file_adapter.mkdir(self.working_path)
        self.logger.info("Working path created %s", self.working_path)

    def download(self) -> None:
        """Fetch the executable and the templates concurrently."""
        jobs = {
            "executable": (
                str(self.config.godot_executable_download_url),
                self.working_path / EXECUTABLE_ARCHIVE,
            ),
            "templates": (
                str(self.config.godot_export_templates_download_url),
                self.working_path / TEMPLATES_ARCHIVE,
            ),
        }
        with ThreadPoolExecutor(max_workers=len(jobs)) as executor:
            futures = {
                name: executor.submit(self.downloader.download, url, destination)
                for name, (url, destination) in jobs.items()
            }
            errors = {}
            for name, future in futures.items():
                try:
                    future.result()
                except GodotCIError as e:
                    errors[name] = e

        if errors:
            first = next(iter(errors.values()))
            raise ToolchainAcquisitionFailed(
                f"Failed to download Godot {', '.join(errors)}: {first}",
                {name: str(e) for name, e in errors.items()},
            ) from first

    def prepare_executable(self) -> Path:
        """Unpack the executable archive and make the binary invocable."""
        archive = self.working_path / EXECUTABLE_ARCHIVE
        unpack_dir = self.working_path / EXECUTABLE_DIR
        self.logger.info("Looking for executable in %s", archive)
        self.archiver.extract(archive, unpack_dir)

        found = find_executable(unpack_dir)
        if found is None:
            raise ToolchainAcquisitionFailed(
                "Could not find Godot executable",
                {"search_root": str(unpack_dir)},
            )

        executable = found.parent / EXECUTABLE_NAME
        if found != executable:
            self.file_adapter.move(found, executable)
        self.file_adapter.make_executable(executable)
        self.runner.add_search_path(executable.parent)
        return executable

    def query_version(self, command: str) -> str:
        """Ask the engine for its version and normalize it."""
        return_code, stdout, _ = self.runner.run(
            [command, "--version"], capture_output=True
        )
        if return_code != 0:
            self.logger.warning(
                "'%s --version' exited with code %d", command, return_code
            )
        version = normalize_version("\n".join(stdout))
        self.logger.info("Detected Godot version %s", version)
        return version

    def prepare_templates_legacy(self, version: str) -> Path:
        """Place 3.x templates under ``templates/<version>``.

        The bundle's root folder is called ``templates``; extracting it into
        a staging folder and renaming it avoids ending up with
        ``templates/<version>/templates``.
        """
        archive = self.working_path / TEMPLATES_ARCHIVE
        staging = self.working_path / "tmp"
        templates_path = self.working_path / "templates" / version

        self.file_adapter.remove_dir(staging)
        self.archiver.extract(archive, staging)
        extracted = staging / "templates"
        if not self.file_adapter.is_dir(extracted):
            extracted = staging

        self.logger.info("Moving templates into %s", templates_path)
        self.file_adapter.move(extracted, templates_path)
        self.file_adapter.remove_dir(staging)
        return templates_path

    def prepare_templates_current(self, version: str) -> Path:
        """Place 4.x templates under ``export_templates/<version>``."""
        archive = self.working_path / TEMPLATES_ARCHIVE
        extracted = self.working_path / "templates"
        export_templates = self.working_path / "export_templates"
        templates_path = export_templates / version

        self.file_adapter.remove_dir(extracted)
        self.archiver.extract(archive, self.working_path)
        if not self.file_adapter.is_dir(extracted):
            raise ToolchainAcquisitionFailed(
                "Export templates archive has no 'templates' folder",
                {"archive": str(archive)},
            )

        self.file_adapter.mkdir(export_templates)
        self.logger.info("Moving templates into %s", templates_path)
        self.file_adapter.move(extracted, templates_path)
        return templates_path

    def prepare_editor_settings(self) -> Path:
        """Install editor settings and, if configured, the Wine settings."""
        settings_path = self.config.editor_settings_path
        self.file_adapter.mkdir(settings_path.parent)
        install_editor_settings(settings_path, self.file_adapter)

        if self.config.wine_path:
            append_windows_export_settings(
                settings_path,
                self.config.resolved_rcedit_path,
                self.config.wine_path,
                self.file_adapter,
            )
        return settings_path

    def import_project(self, toolchain: Toolchain) -> None:
        """Open the editor headless once so 4.x imports the project assets."""
        self.logger.info("Importing project %s", self.config.project_file)
        return_code, _, _ = self.runner.run(
            [
                toolchain.command,
                str(self.config.project_file),
                "--headless",
                "-e",
                "--quit",
            ]
        )
        if return_code != 0:
            raise ToolchainAcquisitionFailed(
                f"Project import failed with exit code {return_code}",
                {"project_file": str(self.config.project_file)},
            )


def create_toolchain_provisioner(
    config: PipelineConfig, runner: ProcessRunnerProtocol | None = None
) -> ToolchainProvisioner:
    """Create a provisioner with default adapters."""
    return ToolchainProvisioner(config, runner or create_process_runner())
