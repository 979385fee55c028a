"""Preset parsing and headless export."""

from .executor import ExportExecutor, create_export_executor
from .flags import build_export_args, export_flag, export_output_name
from .presets import PresetCatalog, decode_value, parse_config_sections, parse_presets


__all__ = [
    "ExportExecutor",
    "PresetCatalog",
    "build_export_args",
    "create_export_executor",
    "decode_value",
    "export_flag",
    "export_output_name",
    "parse_config_sections",
    "parse_presets",
]
