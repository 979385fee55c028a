"""Configuration package for godot-ci."""

from .loader import load_pipeline_config
from .models import (
    ENV_PREFIX,
    PRESETS_FILENAME,
    PROJECT_FILENAME,
    STEAM_APPID_FILENAME,
    PipelineConfig,
)


__all__ = [
    "ENV_PREFIX",
    "PRESETS_FILENAME",
    "PROJECT_FILENAME",
    "STEAM_APPID_FILENAME",
    "PipelineConfig",
    "load_pipeline_config",
]
