"""Read export presets from a project's ``export_presets.cfg``.

The file uses Godot's ConfigFile syntax: INI-like sections with
``key=value`` pairs whose values are Godot variants. Each ``[preset.N]``
section describes one export target and ``[preset.N.options]`` holds its
platform options. Quoted strings may span several lines.
"""

import logging
import re
from pathlib import Path
from typing import Any

from godot_ci.config.models import PRESETS_FILENAME
from godot_ci.core.errors import ConfigError, ConfigNotFound
from godot_ci.models.presets import ExportPreset
from godot_ci.protocols import FileAdapterProtocol


logger = logging.getLogger(__name__)

_SECTION_RE = re.compile(r"^\[(?P<name>[^\]]+)\]\s*$")
_KEY_VALUE_RE = re.compile(r"^(?P<key>[^=\s][^=]*?)\s*=\s*(?P<value>.*)$")
_PRESET_SECTION_RE = re.compile(r"^preset\.(?P<index>\d+)(?P<options>\.options)?$")
_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?$")
_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r"}

PRESET_FIELDS = ("name", "platform", "export_path", "runnable")


def _has_open_string(text: str) -> bool:
    """True if ``text`` ends inside a double-quoted string."""
    in_string = False
    escaped = False
    for char in text:
        if escaped:
            escaped = False
        elif char == "\\" and in_string:
            escaped = True
        elif char == '"':
            in_string = not in_string
    return in_string


def _closing_quote(text: str) -> int:
    """Index of the quote closing the string opened at ``text[0]``, or -1."""
    escaped = False
    for index in range(1, len(text)):
        char = text[index]
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif char == '"':
            return index
    return -1


def decode_value(raw: str) -> Any:
    """Decode a ConfigFile value into a Python value.

    Strings, booleans, integers and floats are converted; any other variant
    (``PackedStringArray(...)``, ``Vector2(...)``...) is kept verbatim.
    """
    value = raw.strip()
    if value.startswith('"') and _closing_quote(value) == len(value) - 1:
        inner = value[1:-1]
        return _ESCAPE_RE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(1)), inner)
    if value == "true":
        return True
    if value == "false":
        return False
    if _INT_RE.match(value):
        return int(value)
    if _FLOAT_RE.match(value):
        return float(value)
    return value


def parse_config_sections(text: str) -> list[tuple[str, dict[str, Any]]]:
    """Split ConfigFile text into ``(section, values)`` pairs in file order."""
    sections: list[tuple[str, dict[str, Any]]] = []
    current: dict[str, Any] = {}
    in_section = False
    pending_key: str | None = None
    pending_value: list[str] = []

    for line_number, line in enumerate(text.splitlines(), start=1):
        if pending_key is not None:
            pending_value.append(line)
            joined = "\n".join(pending_value)
            if not _has_open_string(joined):
                current[pending_key] = decode_value(joined)
                pending_key = None
                pending_value = []
            continue

        stripped = line.strip()
        if not stripped or stripped.startswith((";", "#")):
            continue

        section_match = _SECTION_RE.match(stripped)
        if section_match:
            current = {}
            in_section = True
            sections.append((section_match.group("name").strip(), current))
            continue

        key_match = _KEY_VALUE_RE.match(stripped)
        if key_match is None or not in_section:
            logger.debug("Ignoring line %d of preset file: %s", line_number, stripped)
            continue

        key, value = key_match.group("key"), key_match.group("value")
        if _has_open_string(value):
            pending_key = key
            pending_value = [value]
        else:
            current[key] = decode_value(value)

    if pending_key is not None:
        raise ConfigError(
            f"Unterminated string for key '{pending_key}' in {PRESETS_FILENAME}",
            {"key": pending_key},
        )

    return sections


def parse_presets(text: str) -> list[ExportPreset]:
    """Build export presets from the contents of ``export_presets.cfg``."""
    groups: dict[int, dict[str, Any]] = {}
    options: dict[int, dict[str, Any]] = {}
    order: list[int] = []

    for section, values in parse_config_sections(text):
        match = _PRESET_SECTION_RE.match(section)
        if match is None:
            continue
        index = int(match.group("index"))
        if match.group("options"):
            options.setdefault(index, {}).update(values)
            continue
        if index not in groups:
            order.append(index)
        groups.setdefault(index, {}).update(values)

    presets: list[ExportPreset] = []
    seen_names: set[str] = set()
    for index in order:
        values = groups[index]
        export_path = values.get("export_path", "")
        preset = ExportPreset(
            index=index,
            name=str(values.get("name", f"preset.{index}")),
            platform=str(values.get("platform", "")),
            export_path=export_path if isinstance(export_path, str) else "",
            runnable=bool(values.get("runnable", False)),
            options=options.get(index, {}),
            extra={k: v for k, v in values.items() if k not in PRESET_FIELDS},
        )
        if preset.name in seen_names:
            raise ConfigError(
                f"Duplicate export preset name '{preset.name}' in {PRESETS_FILENAME}",
                {"name": preset.name, "index": index},
            )
        seen_names.add(preset.name)
        presets.append(preset)
    return presets


class PresetCatalog:
    """Load the export presets of a Godot project."""

    def __init__(self, file_adapter: FileAdapterProtocol) -> None:
        self.file_adapter = file_adapter

    def presets_file(self, project_root: Path) -> Path:
        return project_root / PRESETS_FILENAME

    def has_presets(self, project_root: Path) -> bool:
        return self.file_adapter.is_file(self.presets_file(project_root))

    def load(self, project_root: Path) -> list[ExportPreset]:
        """Parse ``export_presets.cfg`` under ``project_root``.

        Raises:
            ConfigNotFound: If the project has no preset file
            ConfigError: If the file is malformed
        """
        presets_file = self.presets_file(project_root)
        if not self.has_presets(project_root):
            raise ConfigNotFound(
                f"No {PRESETS_FILENAME} found in {project_root}. Please ensure you "
                "have defined at least one export via the Godot editor.",
                {"project_root": str(project_root)},
            )

        presets = parse_presets(self.file_adapter.read_text(presets_file))
        if not presets:
            logger.warning("No presets found in %s", presets_file)
        else:
            logger.info(
                "Found %d export presets: %s",
                len(presets),
                ", ".join(p.name for p in presets),
            )
        return presets
