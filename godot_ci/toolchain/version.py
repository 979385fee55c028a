"""Normalize ``godot --version`` output into a template directory key.

The engine reports versions such as ``4.2.1.stable.official.b09f793f5``
while export templates live under ``4.2.1.stable``. The key is derived by
applying a fixed, ordered list of rules to the reported string.
"""

import re
from dataclasses import dataclass

from godot_ci.core.errors import ToolchainAcquisitionFailed


@dataclass(frozen=True)
class VersionRule:
    """Remove the first match of ``pattern`` from a version string."""

    name: str
    pattern: re.Pattern[str]

    def apply(self, version: str) -> str:
        return self.pattern.sub("", version, count=1)


VERSION_RULES: tuple[VersionRule, ...] = (
    VersionRule("official build channel", re.compile(r"\.official")),
    VersionRule("custom build channel", re.compile(r"\.custom_build")),
    VersionRule("commit hash", re.compile(r"\.[a-z0-9]{9}$")),
)


def normalize_version(raw: str, rules: tuple[VersionRule, ...] = VERSION_RULES) -> str:
    """Turn raw ``--version`` output into a stable version key.

    Only the last non-empty line is considered, since the engine may print
    warnings before the version.

    Raises:
        ToolchainAcquisitionFailed: If nothing is left after normalization
    """
    lines = [line.strip() for line in raw.splitlines() if line.strip()]
    version = lines[-1] if lines else ""
    for rule in rules:
        version = rule.apply(version)

    if not version:
        raise ToolchainAcquisitionFailed(
            "Godot version could not be determined.", {"raw_version": raw}
        )
    return version
