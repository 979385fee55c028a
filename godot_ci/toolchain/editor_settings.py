"""Editor settings the engine reads during headless exports."""

import logging
from importlib.resources import as_file, files
from pathlib import Path

from godot_ci.protocols import FileAdapterProtocol


logger = logging.getLogger(__name__)

TEMPLATE_PACKAGE = "godot_ci.toolchain"


def install_editor_settings(
    settings_path: Path, file_adapter: FileAdapterProtocol
) -> bool:
    """Copy the bundled settings template to ``settings_path``.

    An existing settings file is never overwritten.

    Returns:
        True if the file was written, False if one was already present
    """
    template = files(TEMPLATE_PACKAGE).joinpath("data", settings_path.name)
    with as_file(template) as template_path:
        written = file_adapter.copy_file(template_path, settings_path, overwrite=False)

    if written:
        logger.info("Wrote editor settings to %s", settings_path)
    else:
        logger.info("Keeping existing editor settings at %s", settings_path)
    return written


def append_windows_export_settings(
    settings_path: Path,
    rcedit_path: Path,
    wine_path: Path,
    file_adapter: FileAdapterProtocol,
) -> None:
    """Point the Windows exporter at rcedit and Wine.

    Lines are appended on every call; repeated keys are harmless because the
    engine keeps the last value.
    """
    logger.info("Writing rcedit path to editor settings: %s", rcedit_path)
    logger.info("Writing wine path to editor settings: %s", wine_path)
    file_adapter.append_text(
        settings_path,
        f'export/windows/rcedit = "{rcedit_path}"\n'
        f'export/windows/wine = "{wine_path}"\n',
    )
