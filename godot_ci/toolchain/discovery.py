"""Locate the engine binary inside an unpacked toolchain archive."""

import logging
from collections.abc import Iterable
from pathlib import Path


logger = logging.getLogger(__name__)

# Linux binaries are named after their architecture, e.g.
# Godot_v3.5.3-stable_linux_headless.64 or Godot_v4.2.1-stable_linux.x86_64
EXECUTABLE_SUFFIXES: frozenset[str] = frozenset(
    {".64", ".32", ".x86_64", ".x86_32", ".arm64"}
)


def find_executable(
    base_path: Path, suffixes: Iterable[str] = EXECUTABLE_SUFFIXES
) -> Path | None:
    """Depth-first search for the first file with a known binary suffix.

    Entries are visited in name order. Files of a directory are checked
    before any of its subdirectories is entered. Symlinked directories are
    not followed.

    Returns:
        Path of the binary, or None when the tree contains none
    """
    wanted = frozenset(suffixes)
    stack: list[Path] = [base_path]

    while stack:
        current = stack.pop()
        try:
            entries = sorted(current.iterdir())
        except OSError as e:
            logger.warning("Cannot read directory %s: %s", current, e)
            continue

        subdirs: list[Path] = []
        for entry in entries:
            if entry.is_file() and entry.suffix in wanted:
                logger.debug("Found engine binary: %s", entry)
                return entry
            if entry.is_dir() and not entry.is_symlink():
                subdirs.append(entry)

        # Reversed so the first subdirectory is popped first
        stack.extend(reversed(subdirs))

    return None
