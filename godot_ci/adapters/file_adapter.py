"""File adapter for abstracting file system operations."""

import logging
import shutil
import stat
from collections.abc import Callable
from pathlib import Path

from godot_ci.core.errors import FileSystemError
from godot_ci.protocols import FileAdapterProtocol
from godot_ci.utils.error_utils import create_file_error


logger = logging.getLogger(__name__)


class FileSystemAdapter:
    """File system adapter implementation."""

    def exists(self, path: Path) -> bool:
        """Check if a path exists."""
        return self._check(path, "exists", Path.exists)

    def is_file(self, path: Path) -> bool:
        """Check if a path is a file."""
        return self._check(path, "is_file", Path.is_file)

    def is_dir(self, path: Path) -> bool:
        """Check if a path is a directory."""
        return self._check(path, "is_dir", Path.is_dir)

    def _check(
        self, path: Path, operation: str, predicate: Callable[[Path], bool]
    ) -> bool:
        try:
            return predicate(path)
        except OSError as e:
            error = create_file_error(path, operation, e)
            logger.error("Error checking %s: %s", path, e)
            raise error from e

    def mkdir(self, path: Path) -> None:
        """Create a directory.

        Safe to call from several threads for the same path: an existing
        directory is not an error.
        """
        try:
            path.mkdir(parents=True, exist_ok=True)
            logger.debug("Ensured directory exists: %s", path)
        except PermissionError as e:
            error = create_file_error(path, "mkdir", e)
            logger.error("Permission denied creating directory: %s", path)
            raise error from e
        except OSError as e:
            error = create_file_error(path, "mkdir", e)
            logger.error("Error creating directory %s: %s", path, e)
            raise error from e

    def read_text(self, path: Path, encoding: str = "utf-8") -> str:
        """Read text content from a file."""
        try:
            logger.debug("Reading text file: %s", path)
            return path.read_text(encoding=encoding)
        except FileNotFoundError as e:
            error = create_file_error(path, "read_text", e, {"encoding": encoding})
            logger.error("File not found: %s", path)
            raise error from e
        except (OSError, UnicodeDecodeError) as e:
            error = create_file_error(path, "read_text", e, {"encoding": encoding})
            logger.error("Error reading file %s: %s", path, e)
            raise error from e

    def append_text(self, path: Path, content: str, encoding: str = "utf-8") -> None:
        """Append text to a file, creating it (and its parent) when missing."""
        try:
            self.mkdir(path.parent)
            with path.open(mode="a", encoding=encoding) as f:
                f.write(content)
            logger.debug("Appended %d characters to %s", len(content), path)
        except FileSystemError:
            raise
        except OSError as e:
            error = create_file_error(
                path, "append_text", e, {"content_length": len(content)}
            )
            logger.error("Error appending to file %s: %s", path, e)
            raise error from e

    def copy_file(self, src: Path, dst: Path, overwrite: bool = True) -> bool:
        """Copy a file from source to destination.

        Returns:
            False if ``overwrite`` is off and ``dst`` already exists,
            True once the file has been copied
        """
        if not overwrite and dst.exists():
            logger.debug("Not overwriting existing file: %s", dst)
            return False
        try:
            self.mkdir(dst.parent)
            logger.debug("Copying file: %s -> %s", src, dst)
            shutil.copy2(src, dst)
            return True
        except FileSystemError:
            raise
        except FileNotFoundError as e:
            error = create_file_error(
                src, "copy_file", e, {"source": str(src), "destination": str(dst)}
            )
            logger.error("Source file not found: %s", src)
            raise error from e
        except OSError as e:
            error = create_file_error(
                src, "copy_file", e, {"source": str(src), "destination": str(dst)}
            )
            logger.error("Error copying file %s to %s: %s", src, dst, e)
            raise error from e

    def copy_tree(self, src: Path, dst: Path) -> None:
        """Copy a directory recursively, merging into an existing ``dst``."""
        try:
            logger.debug("Copying directory: %s -> %s", src, dst)
            shutil.copytree(src, dst, dirs_exist_ok=True)
        except (OSError, shutil.Error) as e:
            error = create_file_error(
                src, "copy_tree", e, {"source": str(src), "destination": str(dst)}
            )
            logger.error("Error copying directory %s to %s: %s", src, dst, e)
            raise error from e

    def move(self, src: Path, dst: Path) -> None:
        """Move a file or directory, replacing ``dst`` if it exists."""
        try:
            if dst.is_dir() and not dst.is_symlink():
                shutil.rmtree(dst)
            elif dst.exists():
                dst.unlink()
            self.mkdir(dst.parent)
            logger.debug("Moving %s -> %s", src, dst)
            shutil.move(str(src), str(dst))
        except FileSystemError:
            raise
        except (OSError, shutil.Error) as e:
            error = create_file_error(
                src, "move", e, {"source": str(src), "destination": str(dst)}
            )
            logger.error("Error moving %s to %s: %s", src, dst, e)
            raise error from e

    def remove_file(self, path: Path) -> None:
        """Remove a file. Does not raise error if file not found."""
        try:
            path.unlink(missing_ok=True)
            logger.debug("Removed file (or it didn't exist): %s", path)
        except OSError as e:
            error = create_file_error(path, "remove_file", e)
            logger.error("Error removing file %s: %s", path, e)
            raise error from e

    def remove_dir(self, path: Path) -> None:
        """Remove a directory recursively. Does not raise if it is missing."""
        if not path.exists():
            return
        try:
            shutil.rmtree(path)
            logger.debug("Removed directory: %s", path)
        except OSError as e:
            error = create_file_error(path, "remove_dir", e)
            logger.error("Error removing directory %s: %s", path, e)
            raise error from e

    def list_directory(self, path: Path) -> list[Path]:
        """List all items in a directory, sorted by name."""
        try:
            items = sorted(path.iterdir())
            logger.debug("Found %d items in %s", len(items), path)
            return items
        except OSError as e:
            error = create_file_error(path, "list_directory", e)
            logger.error("Error listing directory %s: %s", path, e)
            raise error from e

    def make_executable(self, path: Path) -> None:
        """Add execute permission for user, group and others."""
        try:
            mode = path.stat().st_mode
            path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
            logger.debug("Marked executable: %s", path)
        except OSError as e:
            error = create_file_error(path, "make_executable", e)
            logger.error("Error changing permissions of %s: %s", path, e)
            raise error from e


def create_file_adapter() -> FileAdapterProtocol:
    """Create a file adapter with default implementation."""
    return FileSystemAdapter()
