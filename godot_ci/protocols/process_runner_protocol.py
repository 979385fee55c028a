"""Protocol definition for external process execution."""

from pathlib import Path
from typing import Protocol, TypeAlias, runtime_checkable


ProcessOutput: TypeAlias = tuple[int, list[str], list[str]]  # (return_code, stdout, stderr)


@runtime_checkable
class ProcessRunnerProtocol(Protocol):
    """Protocol for running external programs."""

    def run(
        self,
        args: list[str],
        cwd: Path | None = None,
        capture_output: bool = False,
    ) -> ProcessOutput:
        """Run a program and wait for it to finish.

        Args:
            args: Program name (or path) followed by its arguments
            cwd: Working directory of the process
            capture_output: Return output lines instead of only logging them

        Returns:
            Tuple of (return_code, stdout_lines, stderr_lines). The line
            lists are empty unless ``capture_output`` is set.

        Raises:
            ProcessError: If the program cannot be spawned
        """
        ...

    def add_search_path(self, directory: Path) -> None:
        """Prepend a directory to the search path of later invocations."""
        ...
