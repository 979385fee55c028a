"""Domain models for godot-ci."""

from .artifacts import BuildArtifact, PipelineResult
from .base import GodotCIBaseModel
from .presets import PLATFORM_NAMES, DesktopPlatform, ExportPreset
from .toolchain import Toolchain


__all__ = [
    "BuildArtifact",
    "DesktopPlatform",
    "ExportPreset",
    "GodotCIBaseModel",
    "PLATFORM_NAMES",
    "PipelineResult",
    "Toolchain",
]
