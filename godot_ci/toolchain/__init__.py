"""Engine toolchain acquisition."""

from .discovery import EXECUTABLE_SUFFIXES, find_executable
from .provisioner import ToolchainProvisioner, create_toolchain_provisioner
from .version import VERSION_RULES, VersionRule, normalize_version


__all__ = [
    "EXECUTABLE_SUFFIXES",
    "VERSION_RULES",
    "ToolchainProvisioner",
    "VersionRule",
    "create_toolchain_provisioner",
    "find_executable",
    "normalize_version",
]
