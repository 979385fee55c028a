"""Third-party SDK content for desktop exports."""

import logging
from pathlib import Path

from godot_ci.core.errors import PackagingFailed
from godot_ci.models import BuildArtifact
from godot_ci.protocols import ArchiverProtocol, FileAdapterProtocol


logger = logging.getLogger(__name__)

APP_SUFFIX = ".app"
BUNDLE_BINARY_DIR = Path("Contents") / "MacOS"


def find_app_bundle(directory: Path, file_adapter: FileAdapterProtocol) -> Path:
    """Return the first ``.app`` directory directly under ``directory``."""
    for entry in file_adapter.list_directory(directory):
        if entry.suffix == APP_SUFFIX and file_adapter.is_dir(entry):
            return entry
    raise PackagingFailed(
        f"No {APP_SUFFIX} bundle found in {directory}",
        {"directory": str(directory)},
    )


def rebuild_macos_bundle(
    artifact: BuildArtifact,
    sdk_library: Path,
    appid_file: Path,
    archiver: ArchiverProtocol,
    file_adapter: FileAdapterProtocol,
) -> Path:
    """Inject the SDK library into a zipped macOS export.

    The exported zip is unpacked next to itself and removed, the library and
    the identity file are copied into ``<bundle>/Contents/MacOS``, and the
    bundle is compressed back under the original archive name.

    Returns:
        Path of the rebuilt archive
    """
    exported = artifact.executable_path
    build_dir = artifact.directory
    logger.info("Assembling SDK contents for macOS preset '%s'", artifact.name)

    archiver.extract(exported, build_dir)
    file_adapter.remove_file(exported)

    bundle = find_app_bundle(build_dir, file_adapter)
    binary_dir = bundle / BUNDLE_BINARY_DIR
    file_adapter.copy_file(sdk_library, binary_dir / sdk_library.name)
    if file_adapter.is_file(appid_file):
        file_adapter.copy_file(appid_file, binary_dir / appid_file.name)
    else:
        logger.warning("No %s found, bundle will not contain it", appid_file.name)

    archiver.compress(bundle, exported, include_root=True)
    return exported


def add_sdk_library(
    artifact: BuildArtifact, sdk_library: Path, file_adapter: FileAdapterProtocol
) -> Path:
    """Place the SDK library next to a Windows or Linux executable.

    The library is copied rather than moved, since several presets may
    target the same platform and are packaged concurrently.
    """
    logger.info(
        "Assembling SDK contents for %s preset '%s'",
        artifact.preset.platform,
        artifact.name,
    )
    target = artifact.directory / sdk_library.name
    file_adapter.copy_file(sdk_library, target)
    return target
