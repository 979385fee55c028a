"""Export preset models."""

from enum import Enum
from pathlib import PurePosixPath
from typing import Any

from pydantic import ConfigDict, Field

from godot_ci.models.base import GodotCIBaseModel


class DesktopPlatform(str, Enum):
    """Desktop platforms that can carry third-party SDK content."""

    WINDOWS = "windows"
    LINUX = "linux"
    MACOS = "macos"


# Platform names as written by the Godot 3 and Godot 4 editors
PLATFORM_NAMES: dict[str, DesktopPlatform] = {
    "windows desktop": DesktopPlatform.WINDOWS,
    "linux/x11": DesktopPlatform.LINUX,
    "linux": DesktopPlatform.LINUX,
    "mac osx": DesktopPlatform.MACOS,
    "macos": DesktopPlatform.MACOS,
}


class ExportPreset(GodotCIBaseModel):
    """One export target read from ``export_presets.cfg``.

    Attributes:
        index: Numeric id of the ``[preset.N]`` group
        name: User-defined preset name, unique within a project
        platform: Engine platform name (``"Windows Desktop"``, ``"Mac OSX"``...)
        export_path: Project-relative output path, empty when unset
        runnable: Whether the preset is marked runnable in the editor
        options: Contents of the ``[preset.N.options]`` group
        extra: Remaining keys of the ``[preset.N]`` group
    """

    # Names are passed to the engine verbatim
    model_config = ConfigDict(frozen=True, str_strip_whitespace=False)

    index: int
    name: str
    platform: str
    export_path: str = ""
    runnable: bool = False
    options: dict[str, Any] = Field(default_factory=dict)
    extra: dict[str, Any] = Field(default_factory=dict)

    @property
    def desktop_platform(self) -> DesktopPlatform | None:
        """Desktop platform of this preset, None for mobile/web targets."""
        return PLATFORM_NAMES.get(self.platform.strip().lower())

    @property
    def is_macos(self) -> bool:
        return self.desktop_platform is DesktopPlatform.MACOS

    @property
    def export_filename(self) -> str:
        """Final path component of the export path."""
        return PurePosixPath(self.export_path).name

    @property
    def export_dirname(self) -> str:
        """Directory part of the export path, relative to the project."""
        return str(PurePosixPath(self.export_path).parent)
