"""Pipeline configuration model."""

from pathlib import Path
from typing import Any

from pydantic import Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from godot_ci.models.presets import DesktopPlatform


ENV_PREFIX = "GODOT_CI_"

PRESETS_FILENAME = "export_presets.cfg"
PROJECT_FILENAME = "project.godot"
STEAM_APPID_FILENAME = "steam_appid.txt"


class PipelineConfig(BaseSettings):
    """Immutable configuration for one pipeline run.

    Values come from the constructor (usually a YAML file) and from
    ``GODOT_CI_*`` environment variables. Environment variables take
    precedence over constructor arguments.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: Any,
        env_settings: Any,
        dotenv_settings: Any,
        file_secret_settings: Any,
    ) -> tuple[Any, ...]:
        """Environment variables override file configuration."""
        return (
            env_settings,
            init_settings,
            dotenv_settings,
            file_secret_settings,
        )

    # Toolchain sources
    godot_executable_download_url: HttpUrl = Field(
        description="URL of the zipped engine executable"
    )
    godot_export_templates_download_url: HttpUrl = Field(
        description="URL of the export templates bundle (.tpz)"
    )

    # Project layout
    relative_project_path: Path = Field(
        default=Path("."), description="Project directory, relative to cwd"
    )
    relative_export_path: Path = Field(
        default=Path("exports"), description="Output directory, relative to cwd"
    )

    # Behaviour toggles
    archive_output: bool = Field(default=False, description="Zip each export")
    use_preset_export_path: bool = Field(
        default=False,
        description="Place output next to each preset's own export path",
    )
    archive_root_folder: bool = Field(
        default=False, description="Keep the build folder as archive root"
    )
    use_godot_4: bool = Field(default=False, description="Target the 4.x engine")
    export_debug: bool = Field(default=False, description="Export debug builds")
    export_as_pack: bool = Field(default=False, description="Export .pck only")
    verbose: bool = Field(default=False, description="Pass --verbose to the engine")

    # Windows cross-export
    wine_path: Path | None = None
    rcedit_path: Path | None = None

    # Engine directories
    working_path: Path = Field(
        default_factory=lambda: Path.home() / ".local" / "share" / "godot"
    )
    config_path: Path = Field(
        default_factory=lambda: Path.home() / ".config" / "godot"
    )

    # Third-party SDK libraries per desktop platform, relative to the project
    steam_sdk_paths: dict[DesktopPlatform, Path] = Field(default_factory=dict)

    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is recognized."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        upper_v = v.strip().upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return upper_v

    @field_validator("working_path", "config_path", mode="after")
    @classmethod
    def expand_user(cls, v: Path) -> Path:
        return v.expanduser()

    # Derived paths

    @property
    def project_path(self) -> Path:
        return self.relative_project_path.resolve()

    @property
    def project_file(self) -> Path:
        return self.project_path / PROJECT_FILENAME

    @property
    def presets_file(self) -> Path:
        return self.project_path / PRESETS_FILENAME

    @property
    def steam_appid_path(self) -> Path:
        return self.project_path / STEAM_APPID_FILENAME

    @property
    def export_path(self) -> Path:
        return self.relative_export_path.resolve()

    @property
    def builds_path(self) -> Path:
        return self.working_path / "builds"

    @property
    def archives_path(self) -> Path:
        return self.working_path / "archives"

    @property
    def editor_settings_filename(self) -> str:
        return "editor_settings-4.tres" if self.use_godot_4 else "editor_settings-3.tres"

    @property
    def editor_settings_path(self) -> Path:
        return self.config_path / self.editor_settings_filename

    @property
    def resolved_rcedit_path(self) -> Path:
        return self.rcedit_path or self.working_path / "rcedit-x64.exe"

    def sdk_library_for(self, platform: DesktopPlatform | None) -> Path | None:
        """Absolute path of the SDK library configured for ``platform``."""
        if platform is None or platform not in self.steam_sdk_paths:
            return None
        return self.project_path / self.steam_sdk_paths[platform]
