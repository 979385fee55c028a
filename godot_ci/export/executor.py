"""Run the engine's headless export once per preset."""

import logging
from collections.abc import Sequence

from godot_ci.adapters import create_file_adapter, create_process_runner
from godot_ci.config.models import PipelineConfig
from godot_ci.core.errors import ExportFailed
from godot_ci.export.flags import build_export_args, export_output_name
from godot_ci.models import BuildArtifact, ExportPreset, Toolchain
from godot_ci.protocols import FileAdapterProtocol, ProcessRunnerProtocol
from godot_ci.utils.naming import unique_sanitized_names


class ExportExecutor:
    """Export presets one after the other.

    The engine is a single external process, so invocations never overlap.
    A preset without an export path is skipped with a warning and recorded
    in :attr:`skipped_presets`; a failing export aborts the whole run.
    """

    def __init__(
        self,
        config: PipelineConfig,
        runner: ProcessRunnerProtocol,
        file_adapter: FileAdapterProtocol | None = None,
    ) -> None:
        self.config = config
        self.runner = runner
        self.file_adapter = file_adapter or create_file_adapter()
        self.skipped_presets: list[str] = []
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def run(
        self, presets: Sequence[ExportPreset], toolchain: Toolchain
    ) -> list[BuildArtifact]:
        """Export every preset and return one artifact per successful export.

        Raises:
            ExportFailed: If any engine invocation exits with a non-zero status
        """
        self.skipped_presets = []
        sanitized = unique_sanitized_names(preset.name for preset in presets)
        artifacts: list[BuildArtifact] = []

        for preset in presets:
            if not preset.export_path:
                self.logger.warning(
                    "No file path set for preset '%s'. Skipping export!", preset.name
                )
                self.skipped_presets.append(preset.name)
                continue
            artifacts.append(
                self.export_preset(preset, sanitized[preset.name], toolchain)
            )

        self.logger.info("Exported %d of %d presets", len(artifacts), len(presets))
        return artifacts

    def export_preset(
        self, preset: ExportPreset, sanitized_name: str, toolchain: Toolchain
    ) -> BuildArtifact:
        """Run the engine for a single preset."""
        build_dir = self.config.builds_path / sanitized_name
        self.file_adapter.mkdir(build_dir)

        output_path = build_dir / export_output_name(
            preset.export_filename,
            self.config.use_godot_4,
            self.config.export_as_pack,
        )
        args = build_export_args(
            self.config.project_file,
            preset.name,
            output_path,
            use_godot_4=self.config.use_godot_4,
            pack_only=self.config.export_as_pack,
            debug=self.config.export_debug,
            verbose=self.config.verbose,
        )

        self.logger.info("Exporting preset '%s' to %s", preset.name, output_path)
        return_code, _, _ = self.runner.run([toolchain.command, *args])
        if return_code != 0:
            raise ExportFailed(
                f"Export of preset '{preset.name}' failed with exit code {return_code}",
                {
                    "preset": preset.name,
                    "return_code": return_code,
                    "output_path": str(output_path),
                },
            )

        entry_count = len(self.file_adapter.list_directory(build_dir))
        if entry_count == 0:
            self.logger.warning(
                "Export of preset '%s' left %s empty", preset.name, build_dir
            )
        return BuildArtifact(
            preset=preset,
            sanitized_name=sanitized_name,
            directory=build_dir,
            executable_path=output_path,
            directory_entry_count=entry_count,
        )


def create_export_executor(
    config: PipelineConfig, runner: ProcessRunnerProtocol | None = None
) -> ExportExecutor:
    """Create an export executor with default adapters."""
    return ExportExecutor(config, runner or create_process_runner())
