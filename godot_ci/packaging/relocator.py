"""Copy finished artifacts from the scratch area to their destination."""

import logging
from collections.abc import Sequence
from pathlib import Path

from godot_ci.adapters import create_file_adapter
from godot_ci.config.models import PipelineConfig
from godot_ci.core.errors import RelocationFailed, RelocationSkipped
from godot_ci.models import BuildArtifact
from godot_ci.protocols import FileAdapterProtocol
from godot_ci.utils.fan_out import run_all


class ArtifactRelocator:
    """Copy artifacts into the export directory, one thread per artifact.

    In archived mode only the zip is copied; an artifact that was never
    archived is skipped with a warning. In raw mode the whole build directory
    is copied and the artifact's paths are updated to the new location.
    Failures are reported together once every copy has finished.
    """

    def __init__(
        self, config: PipelineConfig, file_adapter: FileAdapterProtocol | None = None
    ) -> None:
        self.config = config
        self.file_adapter = file_adapter or create_file_adapter()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def destination_for(self, artifact: BuildArtifact) -> Path:
        if self.config.use_preset_export_path:
            return self.config.project_path / artifact.preset.export_dirname
        return self.config.export_path

    def relocate(
        self, artifacts: Sequence[BuildArtifact], move_archived: bool
    ) -> list[str]:
        """Relocate every artifact.

        Returns:
            Names of presets that were skipped because they had no archive

        Raises:
            RelocationFailed: If copying failed for at least one artifact
        """
        mode = "archives" if move_archived else "builds"
        self.logger.info("Moving %d export(s) (%s)", len(artifacts), mode)

        def task(artifact: BuildArtifact) -> None:
            if move_archived:
                self.relocate_archive(artifact)
            else:
                self.relocate_directory(artifact)

        outcomes = run_all(task, artifacts)

        skipped: list[str] = []
        failures: list[tuple[str, Exception]] = []
        for artifact, outcome in zip(artifacts, outcomes, strict=True):
            if isinstance(outcome.error, RelocationSkipped):
                skipped.append(artifact.name)
            elif outcome.error is not None:
                self.logger.error(
                    "Moving '%s' failed: %s", artifact.name, outcome.error
                )
                failures.append((artifact.name, outcome.error))

        if failures:
            names = [name for name, _ in failures]
            raise RelocationFailed(
                f"Moving exports failed for {len(names)} preset(s): {', '.join(names)}",
                {
                    "failed_presets": names,
                    "errors": [str(e) for _, e in failures],
                    "skipped_presets": skipped,
                },
            ) from failures[0][1]
        return skipped

    def relocate_archive(self, artifact: BuildArtifact) -> Path:
        """Copy the artifact's archive and point ``archive_path`` at the copy.

        Raises:
            RelocationSkipped: If the artifact has no archive
        """
        if artifact.archive_path is None:
            self.logger.warning(
                "Attempted to move export output of '%s' that was not archived. "
                "Skipping",
                artifact.name,
            )
            raise RelocationSkipped(
                f"Preset '{artifact.name}' was not archived",
                {"preset": artifact.name},
            )

        destination = self.destination_for(artifact)
        self.file_adapter.mkdir(destination)
        new_path = destination / artifact.archive_path.name
        self.logger.info("Copying %s to %s", artifact.archive_path, new_path)
        self.file_adapter.copy_file(artifact.archive_path, new_path)
        artifact.archive_path = new_path
        return new_path

    def relocate_directory(self, artifact: BuildArtifact) -> Path:
        """Copy the build directory and update the artifact's paths."""
        destination = self.destination_for(artifact)
        self.file_adapter.mkdir(destination)
        new_directory = destination / artifact.directory.name
        self.logger.info("Copying %s to %s", artifact.directory, destination)
        self.file_adapter.copy_tree(artifact.directory, new_directory)
        artifact.directory = new_directory
        artifact.executable_path = new_directory / artifact.executable_path.name
        return new_directory


def create_artifact_relocator(config: PipelineConfig) -> ArtifactRelocator:
    """Create a relocator with the default file adapter."""
    return ArtifactRelocator(config)
