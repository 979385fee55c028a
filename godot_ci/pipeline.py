"""End-to-end build pipeline."""

from godot_ci.adapters import (
    create_archiver,
    create_file_adapter,
    create_process_runner,
)
from godot_ci.config.models import PipelineConfig
from godot_ci.core.errors import ConfigNotFound
from godot_ci.core.structlog_logger import get_struct_logger
from godot_ci.export import ExportExecutor, PresetCatalog, create_export_executor
from godot_ci.models import PipelineResult
from godot_ci.packaging import (
    ArtifactPackager,
    ArtifactRelocator,
    create_artifact_packager,
    create_artifact_relocator,
)
from godot_ci.protocols import FileAdapterProtocol, ProcessRunnerProtocol
from godot_ci.toolchain import ToolchainProvisioner, create_toolchain_provisioner


class BuildPipeline:
    """Provision the engine, export every preset and package the results.

    Components are built from ``config`` unless injected. The first fatal
    error stops the pipeline; no later stage starts.
    """

    def __init__(
        self,
        config: PipelineConfig,
        runner: ProcessRunnerProtocol | None = None,
        file_adapter: FileAdapterProtocol | None = None,
        provisioner: ToolchainProvisioner | None = None,
        catalog: PresetCatalog | None = None,
        executor: ExportExecutor | None = None,
        packager: ArtifactPackager | None = None,
        relocator: ArtifactRelocator | None = None,
    ) -> None:
        self.config = config
        self.runner = runner or create_process_runner()
        self.file_adapter = file_adapter or create_file_adapter()
        self.provisioner = provisioner or ToolchainProvisioner(
            config, self.runner, file_adapter=self.file_adapter
        )
        self.catalog = catalog or PresetCatalog(self.file_adapter)
        self.executor = executor or ExportExecutor(
            config, self.runner, self.file_adapter
        )
        self.packager = packager or ArtifactPackager(
            config, create_archiver(self.runner), self.file_adapter
        )
        self.relocator = relocator or ArtifactRelocator(config, self.file_adapter)
        self.events = get_struct_logger(__name__)

    def check_preconditions(self) -> None:
        """Fail before downloading anything if the project has no presets."""
        if not self.catalog.has_presets(self.config.project_path):
            raise ConfigNotFound(
                f"No export_presets.cfg found in {self.config.project_path}. "
                "Please ensure you have defined at least one export via the "
                "Godot editor.",
                {"project_path": str(self.config.project_path)},
            )

    def run(self) -> PipelineResult:
        """Run every stage in order.

        Raises:
            ConfigNotFound: If the project has no preset file
            ToolchainAcquisitionFailed: If the engine cannot be prepared
            ExportFailed: If an export invocation fails
            PackagingFailed: If archiving failed for any artifact
            RelocationFailed: If copying failed for any artifact
        """
        self.check_preconditions()
        self.events.info("pipeline_started", project=str(self.config.project_path))

        toolchain = self.provisioner.provision()
        presets = self.catalog.load(self.config.project_path)
        artifacts = self.executor.run(presets, toolchain)
        self.events.info(
            "exports_finished",
            artifacts=len(artifacts),
            skipped=len(self.executor.skipped_presets),
        )

        if self.config.archive_output:
            self.packager.package_all(artifacts)
            relocation_skipped = self.relocator.relocate(artifacts, move_archived=True)
        else:
            relocation_skipped = self.relocator.relocate(
                artifacts, move_archived=False
            )

        result = PipelineResult(
            artifacts=artifacts,
            skipped_presets=list(self.executor.skipped_presets),
            relocation_skipped=relocation_skipped,
        )
        self.events.info(
            "pipeline_finished",
            artifacts=len(result.artifacts),
            relocation_skipped=len(result.relocation_skipped),
        )
        return result


def create_build_pipeline(config: PipelineConfig) -> BuildPipeline:
    """Create a pipeline whose stages share one process runner."""
    runner = create_process_runner()
    return BuildPipeline(
        config,
        runner=runner,
        provisioner=create_toolchain_provisioner(config, runner),
        executor=create_export_executor(config, runner),
        packager=create_artifact_packager(config, runner),
        relocator=create_artifact_relocator(config),
    )
