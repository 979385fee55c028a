"""Command line construction for headless engine exports."""

from pathlib import Path


LEGACY_RELEASE = "--export"
LEGACY_PACK = "--export-pack"
EXPORT_DEBUG = "--export-debug"
CURRENT_RELEASE = "--export-release"
HEADLESS = "--headless"
VERBOSE = "--verbose"
PACK_SUFFIX = ".pck"


def export_flag(use_godot_4: bool, pack_only: bool, debug: bool) -> str:
    """Pick the export mode flag.

    For 4.x ``pack_only`` leaves the flag alone and changes the output
    filename instead (see :func:`export_output_name`).
    """
    if use_godot_4:
        return EXPORT_DEBUG if debug else CURRENT_RELEASE
    if pack_only:
        return LEGACY_PACK
    return EXPORT_DEBUG if debug else LEGACY_RELEASE


def export_output_name(filename: str, use_godot_4: bool, pack_only: bool) -> str:
    if use_godot_4 and pack_only:
        return f"{filename}{PACK_SUFFIX}"
    return filename


def build_export_args(
    project_file: Path,
    preset_name: str,
    output_path: Path,
    *,
    use_godot_4: bool = False,
    pack_only: bool = False,
    debug: bool = False,
    verbose: bool = False,
) -> list[str]:
    """Arguments passed to the engine for one preset, without the program name."""
    args = [
        str(project_file),
        export_flag(use_godot_4, pack_only, debug),
        preset_name,
        str(output_path),
    ]
    if verbose:
        args.append(VERBOSE)
    if use_godot_4:
        args.insert(1, HEADLESS)
    return args
