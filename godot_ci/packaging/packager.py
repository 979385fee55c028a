"""Compress exported builds into one zip archive per preset."""

import logging
from collections.abc import Sequence
from pathlib import Path

from godot_ci.adapters import create_archiver, create_file_adapter
from godot_ci.config.models import PipelineConfig
from godot_ci.core.errors import PackagingFailed
from godot_ci.models import BuildArtifact, DesktopPlatform
from godot_ci.packaging.sdk import APP_SUFFIX, add_sdk_library, rebuild_macos_bundle
from godot_ci.protocols import (
    ArchiverProtocol,
    FileAdapterProtocol,
    ProcessRunnerProtocol,
)
from godot_ci.utils.fan_out import run_all


class ArtifactPackager:
    """Archive build artifacts concurrently.

    Every artifact is packaged on its own thread. All tasks are allowed to
    finish; if any of them failed a single :class:`PackagingFailed` naming
    every failed preset is raised afterwards. Artifacts that were packaged
    successfully keep their ``archive_path`` either way.
    """

    def __init__(
        self,
        config: PipelineConfig,
        archiver: ArchiverProtocol,
        file_adapter: FileAdapterProtocol | None = None,
    ) -> None:
        self.config = config
        self.archiver = archiver
        self.file_adapter = file_adapter or create_file_adapter()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def archive_path_for(self, artifact: BuildArtifact) -> Path:
        return self.config.archives_path / f"{artifact.sanitized_name}.zip"

    def package_all(self, artifacts: Sequence[BuildArtifact]) -> None:
        """Package every artifact, then report all failures together.

        Raises:
            PackagingFailed: If packaging failed for at least one artifact
        """
        self.logger.info("Zipping %d build(s)", len(artifacts))
        outcomes = run_all(self.package, artifacts)

        failures = [
            (artifact, outcome.error)
            for artifact, outcome in zip(artifacts, outcomes, strict=True)
            if outcome.error is not None
        ]
        if not failures:
            return

        for artifact, error in failures:
            self.logger.error("Packaging '%s' failed: %s", artifact.name, error)
        names = [artifact.name for artifact, _ in failures]
        raise PackagingFailed(
            f"Packaging failed for {len(names)} preset(s): {', '.join(names)}",
            {"failed_presets": names, "errors": [str(e) for _, e in failures]},
        ) from failures[0][1]

    def package(self, artifact: BuildArtifact) -> Path:
        """Package a single artifact and record its archive path.

        Re-running on an artifact whose archive already exists does not touch
        the archiver.
        """
        self.file_adapter.mkdir(self.config.archives_path)
        target = self.archive_path_for(artifact)

        if self.file_adapter.exists(target):
            self.logger.info("Archive %s already exists, skipping", target)
            artifact.archive_path = target
            return target

        self.check_build_directory(artifact)
        platform = artifact.preset.desktop_platform
        sdk_library = self.config.sdk_library_for(platform)

        if artifact.preset.is_macos and not artifact.preset.export_path.endswith(
            APP_SUFFIX
        ):
            exported = artifact.executable_path
            if sdk_library is not None:
                exported = rebuild_macos_bundle(
                    artifact,
                    sdk_library,
                    self.config.steam_appid_path,
                    self.archiver,
                    self.file_adapter,
                )
            self.logger.info("Copying macOS archive %s to %s", exported, target)
            self.file_adapter.copy_file(exported, target)
        else:
            if sdk_library is not None and platform in (
                DesktopPlatform.WINDOWS,
                DesktopPlatform.LINUX,
            ):
                add_sdk_library(artifact, sdk_library, self.file_adapter)
            self.logger.info(
                "Zipping %s for %s", artifact.directory, artifact.preset.platform
            )
            self.archiver.compress(
                artifact.directory,
                target,
                include_root=self.config.archive_root_folder,
            )

        artifact.archive_path = target
        return target

    def check_build_directory(self, artifact: BuildArtifact) -> None:
        directory = artifact.directory
        if not self.file_adapter.is_dir(directory):
            raise PackagingFailed(
                f"Build directory of '{artifact.name}' does not exist: {directory}",
                {"preset": artifact.name, "directory": str(directory)},
            )
        if not self.file_adapter.list_directory(directory):
            raise PackagingFailed(
                f"Build directory of '{artifact.name}' is empty: {directory}",
                {"preset": artifact.name, "directory": str(directory)},
            )


def create_artifact_packager(
    config: PipelineConfig, runner: ProcessRunnerProtocol
) -> ArtifactPackager:
    """Create a packager that archives with 7z through ``runner``."""
    return ArtifactPackager(config, create_archiver(runner))
