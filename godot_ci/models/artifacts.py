"""Build artifact and pipeline result models."""

from pathlib import Path

from pydantic import Field

from godot_ci.models.base import GodotCIBaseModel
from godot_ci.models.presets import ExportPreset


class BuildArtifact(GodotCIBaseModel):
    """Output of exporting one preset, before and after packaging.

    The artifact is mutated in place as it moves through the pipeline:
    the packager fills in ``archive_path`` and the relocator rewrites
    ``directory``, ``executable_path`` and ``archive_path`` to point at the
    final destination.
    """

    preset: ExportPreset
    sanitized_name: str
    directory: Path
    executable_path: Path
    directory_entry_count: int = 0
    archive_path: Path | None = None

    @property
    def name(self) -> str:
        return self.preset.name


class PipelineResult(GodotCIBaseModel):
    """Summary of a pipeline run."""

    artifacts: list[BuildArtifact] = Field(default_factory=list)
    skipped_presets: list[str] = Field(default_factory=list)
    relocation_skipped: list[str] = Field(default_factory=list)
