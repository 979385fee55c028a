"""Protocol definition for file system operations."""

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileAdapterProtocol(Protocol):
    """Protocol for file system operations used by the pipeline."""

    def exists(self, path: Path) -> bool:
        """Check if a path exists."""
        ...

    def is_file(self, path: Path) -> bool:
        """Check if a path is a file."""
        ...

    def is_dir(self, path: Path) -> bool:
        """Check if a path is a directory."""
        ...

    def mkdir(self, path: Path) -> None:
        """Create a directory and its parents; an existing directory is fine."""
        ...

    def read_text(self, path: Path, encoding: str = "utf-8") -> str:
        """Read text content from a file."""
        ...

    def append_text(self, path: Path, content: str, encoding: str = "utf-8") -> None:
        """Append text to a file, creating it when missing."""
        ...

    def copy_file(self, src: Path, dst: Path, overwrite: bool = True) -> bool:
        """Copy a file. Returns False when skipped because ``dst`` exists."""
        ...

    def copy_tree(self, src: Path, dst: Path) -> None:
        """Copy a directory recursively, merging into ``dst``."""
        ...

    def move(self, src: Path, dst: Path) -> None:
        """Move a file or directory, replacing ``dst`` if present."""
        ...

    def remove_file(self, path: Path) -> None:
        """Remove a file; a missing file is not an error."""
        ...

    def remove_dir(self, path: Path) -> None:
        """Remove a directory recursively; a missing directory is not an error."""
        ...

    def list_directory(self, path: Path) -> list[Path]:
        """List all entries of a directory, sorted by name."""
        ...

    def make_executable(self, path: Path) -> None:
        """Add execute permission bits to a file."""
        ...
