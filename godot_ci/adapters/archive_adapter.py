"""Archive adapter backed by the external ``7z`` executable."""

import logging
from pathlib import Path

from godot_ci.protocols import ArchiverProtocol, ProcessRunnerProtocol
from godot_ci.utils.error_utils import create_archive_error


logger = logging.getLogger(__name__)


class SevenZipArchiver:
    """Extract and create archives by shelling out to 7-Zip."""

    def __init__(self, runner: ProcessRunnerProtocol, executable: str = "7z") -> None:
        self.runner = runner
        self.executable = executable

    def extract(self, archive: Path, destination: Path) -> None:
        logger.info("Extracting %s into %s", archive, destination)
        return_code, _, stderr = self.runner.run(
            [self.executable, "x", str(archive), f"-o{destination}", "-y"],
            capture_output=True,
        )
        if return_code != 0:
            raise create_archive_error("extract", archive, return_code, stderr)

    def compress(self, source: Path, archive: Path, include_root: bool = False) -> None:
        # 7z expands the wildcard itself, storing only the folder's contents
        target = str(source) if include_root or not source.is_dir() else f"{source}/*"
        logger.info("Compressing %s into %s", target, archive)
        return_code, _, stderr = self.runner.run(
            [self.executable, "a", "-tzip", str(archive), target],
            capture_output=True,
        )
        if return_code != 0:
            raise create_archive_error("compress", archive, return_code, stderr)


def create_archiver(runner: ProcessRunnerProtocol) -> ArchiverProtocol:
    """Create the default archiver using ``runner`` to spawn 7z."""
    return SevenZipArchiver(runner)
