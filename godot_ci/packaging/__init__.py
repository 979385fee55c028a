"""Post-export packaging and relocation of build artifacts."""

from .packager import ArtifactPackager, create_artifact_packager
from .relocator import ArtifactRelocator, create_artifact_relocator
from .sdk import add_sdk_library, find_app_bundle, rebuild_macos_bundle


__all__ = [
    "ArtifactPackager",
    "ArtifactRelocator",
    "add_sdk_library",
    "create_artifact_packager",
    "create_artifact_relocator",
    "find_app_bundle",
    "rebuild_macos_bundle",
]
