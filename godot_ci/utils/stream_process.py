"""Process execution and streaming output handling.

Runs a subprocess and feeds every stdout/stderr line through an output
middleware while the process is running, so long engine exports show their
progress in the CI log instead of dumping everything at the end.

Example:
    ```python
    from godot_ci.utils.stream_process import run_command, DefaultOutputMiddleware

    return_code, stdout, stderr = run_command(
        ["godot", "--version"], middleware=DefaultOutputMiddleware()
    )
    ```
"""

import shlex
import subprocess
from collections.abc import Mapping
from pathlib import Path
from threading import Thread
from typing import Any, Generic, TypeAlias, TypeVar, cast


T = TypeVar("T")  # Type of processed output

# Type alias for the result of run_command
ProcessResult: TypeAlias = tuple[int, list[T], list[T]]  # (return_code, stdout, stderr)


class OutputMiddleware(Generic[T]):
    """Base class for processing command output streams.

    Implementations can format, filter, or transform the output lines.
    Returning None from :meth:`process` drops the line from the captured
    output.
    """

    def process(self, line: str, stream_type: str) -> T:
        """Process a line of output from a subprocess stream.

        Args:
            line: A line of text from the process output
            stream_type: Either "stdout" or "stderr"

        Returns:
            Processed output of type T
        """
        raise NotImplementedError()


class DefaultOutputMiddleware(OutputMiddleware[str]):
    """Simple middleware that prints output with optional prefixes."""

    def __init__(self, stdout_prefix: str = "", stderr_prefix: str = "ERROR: ") -> None:
        self.stdout_prefix = stdout_prefix
        self.stderr_prefix = stderr_prefix

    def process(self, line: str, stream_type: str) -> str:
        prefix = self.stdout_prefix if stream_type == "stdout" else self.stderr_prefix
        print(f"{prefix}{line}")
        return line


def run_command(
    cmd: str | list[str],
    middleware: OutputMiddleware[T] | None = None,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> ProcessResult[T]:
    """Run a command and process its output through middleware.

    Args:
        cmd: Command to run, either as a string or list of arguments
        middleware: Optional middleware for processing output (uses DefaultOutputMiddleware if None)
        cwd: Working directory of the process
        env: Full environment of the process; its ``PATH`` is used to
            resolve the program name

    Returns:
        Tuple containing:
            - Return code from the process (0 for success)
            - List of processed stdout lines
            - List of processed stderr lines

    Raises:
        OSError: If the process cannot be spawned (e.g. program not found)
    """
    if middleware is None:
        # Cast is needed because T is unbound at this point
        middleware = cast(OutputMiddleware[T], DefaultOutputMiddleware())

    if isinstance(cmd, str):
        cmd = shlex.split(cmd)

    process = subprocess.Popen(
        cmd,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        bufsize=1,
        cwd=cwd,
        env=dict(env) if env is not None else None,
    )

    def stream_output(stream: Any, stream_type: str) -> list[T]:
        captured: list[T] = []
        for line in iter(stream.readline, ""):
            if line:
                processed = middleware.process(line.rstrip(), stream_type)
                if processed is not None:
                    captured.append(processed)
        stream.close()
        return captured

    stdout_lines: list[T] = []
    stderr_lines: list[T] = []

    stdout_thread = Thread(
        target=lambda: stdout_lines.extend(stream_output(process.stdout, "stdout")),
        daemon=True,
    )
    stderr_thread = Thread(
        target=lambda: stderr_lines.extend(stream_output(process.stderr, "stderr")),
        daemon=True,
    )
    stdout_thread.start()
    stderr_thread.start()

    return_code = process.wait()

    stdout_thread.join()
    stderr_thread.join()

    return return_code, stdout_lines, stderr_lines
