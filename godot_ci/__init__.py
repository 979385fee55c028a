"""godot-ci - headless export and packaging pipeline for Godot projects."""

from importlib.metadata import distribution

from .models import BuildArtifact, ExportPreset, PipelineResult, Toolchain


__version__ = distribution("godot-ci").version

__all__ = [
    "BuildArtifact",
    "ExportPreset",
    "PipelineResult",
    "Toolchain",
    "__version__",
]

# Import the pipeline after setting __version__ to avoid circular imports
from .pipeline import BuildPipeline, create_build_pipeline


__all__ += ["BuildPipeline", "create_build_pipeline"]
