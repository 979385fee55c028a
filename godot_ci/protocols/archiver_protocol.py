"""Protocol definition for archive extraction and creation."""

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class ArchiverProtocol(Protocol):
    """Protocol for an external archiver."""

    def extract(self, archive: Path, destination: Path) -> None:
        """Extract ``archive`` into ``destination``, overwriting existing files.

        Raises:
            ArchiveError: If the archiver exits with a non-zero status
        """
        ...

    def compress(self, source: Path, archive: Path, include_root: bool = False) -> None:
        """Compress ``source`` into ``archive``.

        Args:
            source: File or directory to compress
            archive: Archive to create
            include_root: For directories, keep ``source`` itself as the
                archive's top-level folder instead of storing only its contents

        Raises:
            ArchiveError: If the archiver exits with a non-zero status
        """
        ...
