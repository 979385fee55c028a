"""Process adapter for running external programs."""

import logging
import os
import threading
from pathlib import Path

from godot_ci.protocols import ProcessOutput, ProcessRunnerProtocol
from godot_ci.utils.error_utils import create_process_error
from godot_ci.utils.stream_process import OutputMiddleware, run_command


logger = logging.getLogger(__name__)


class LoggerOutputMiddleware(OutputMiddleware[str | None]):
    """Forward process output to a logger.

    stdout lines are logged at debug level and stderr lines as warnings.
    Lines are only kept in the captured output when ``capture`` is set.
    """

    def __init__(
        self,
        logger: logging.Logger,
        capture: bool = False,
        stdout_prefix: str = "",
        stderr_prefix: str = "",
    ) -> None:
        self.logger = logger
        self.capture = capture
        self.stdout_prefix = stdout_prefix
        self.stderr_prefix = stderr_prefix

    def process(self, line: str, stream_type: str) -> str | None:
        if stream_type == "stdout":
            self.logger.debug("%s%s", self.stdout_prefix, line)
        else:
            self.logger.warning("%s%s", self.stderr_prefix, line)
        return line if self.capture else None


class ProcessRunner:
    """Run external programs with a private search path.

    Directories registered with :meth:`add_search_path` are prepended to the
    ``PATH`` of every later invocation, so a freshly unpacked program can be
    invoked by its short name without touching the environment of the
    current process.
    """

    def __init__(self, base_env: dict[str, str] | None = None) -> None:
        self._base_env = dict(base_env) if base_env is not None else None
        self._search_paths: list[Path] = []
        self._lock = threading.Lock()

    def add_search_path(self, directory: Path) -> None:
        with self._lock:
            if directory not in self._search_paths:
                self._search_paths.insert(0, directory)
        logger.info("Added %s to the program search path", directory)

    def build_env(self) -> dict[str, str]:
        """Environment for a child process, including registered paths."""
        env = dict(self._base_env if self._base_env is not None else os.environ)
        with self._lock:
            extra = [str(p) for p in self._search_paths]
        if extra:
            current = env.get("PATH", "")
            env["PATH"] = os.pathsep.join(extra + ([current] if current else []))
        return env

    def run(
        self,
        args: list[str],
        cwd: Path | None = None,
        capture_output: bool = False,
    ) -> ProcessOutput:
        logger.info("Running: %s", " ".join(args))
        middleware = LoggerOutputMiddleware(
            logging.getLogger(f"{__name__}.{Path(args[0]).name}"),
            capture=capture_output,
        )
        try:
            return_code, stdout, stderr = run_command(
                args, middleware=middleware, cwd=cwd, env=self.build_env()
            )
        except OSError as e:
            error = create_process_error(args, e, {"cwd": str(cwd) if cwd else None})
            logger.error("Could not start %s: %s", args[0], e)
            raise error from e

        logger.debug("%s exited with code %d", args[0], return_code)
        return (
            return_code,
            [line for line in stdout if line is not None],
            [line for line in stderr if line is not None],
        )


def create_process_runner() -> ProcessRunnerProtocol:
    """Create a process runner inheriting the current environment."""
    return ProcessRunner()
