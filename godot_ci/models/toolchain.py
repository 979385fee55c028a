"""Toolchain model."""

from pathlib import Path

from pydantic import ConfigDict

from godot_ci.models.base import GodotCIBaseModel


class Toolchain(GodotCIBaseModel):
    """Engine executable and export templates prepared for headless use.

    Created once by the provisioner and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    executable: Path
    bin_dir: Path
    version: str
    templates_dir: Path
    editor_settings_path: Path

    @property
    def command(self) -> str:
        """Short name the engine is invoked by once ``bin_dir`` is on the path."""
        return self.executable.name
