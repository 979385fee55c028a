"""Tests for the process runner adapter."""

import logging
import os
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

from godot_ci.adapters.process_adapter import (
    LoggerOutputMiddleware,
    ProcessRunner,
    create_process_runner,
)
from godot_ci.core.errors import ProcessError
from godot_ci.protocols import ProcessRunnerProtocol


class TestLoggerOutputMiddleware:
    """Test LoggerOutputMiddleware class."""

    def test_stdout_logged_at_debug(self):
        logger = Mock(spec=logging.Logger)
        middleware = LoggerOutputMiddleware(logger)

        assert middleware.process("hello", "stdout") is None
        logger.debug.assert_called_once_with("%s%s", "", "hello")

    def test_stderr_logged_as_warning(self):
        logger = Mock(spec=logging.Logger)
        middleware = LoggerOutputMiddleware(logger, capture=True, stderr_prefix="! ")

        assert middleware.process("oops", "stderr") == "oops"
        logger.warning.assert_called_once_with("%s%s", "! ", "oops")


class TestProcessRunner:
    """Test ProcessRunner class."""

    def test_implements_protocol(self):
        assert isinstance(create_process_runner(), ProcessRunnerProtocol)

    def test_captures_output(self):
        runner = ProcessRunner()
        code, stdout, stderr = runner.run(
            [sys.executable, "-c", "import sys; print('out'); print('err', file=sys.stderr)"],
            capture_output=True,
        )
        assert code == 0
        assert stdout == ["out"]
        assert stderr == ["err"]

    def test_output_not_kept_without_capture(self):
        runner = ProcessRunner()
        code, stdout, stderr = runner.run([sys.executable, "-c", "print('out')"])
        assert code == 0
        assert stdout == []
        assert stderr == []

    def test_non_zero_exit_is_returned(self):
        runner = ProcessRunner()
        code, _, _ = runner.run([sys.executable, "-c", "raise SystemExit(3)"])
        assert code == 3

    def test_cwd(self, tmp_path):
        runner = ProcessRunner()
        _, stdout, _ = runner.run(
            [sys.executable, "-c", "import os; print(os.getcwd())"],
            cwd=tmp_path,
            capture_output=True,
        )
        assert Path(stdout[0]).resolve() == tmp_path.resolve()

    def test_missing_program_raises_process_error(self):
        runner = ProcessRunner()
        with pytest.raises(ProcessError, match="definitely-not-a-program"):
            runner.run(["definitely-not-a-program-godot-ci"])

    def test_search_path_prepended(self, tmp_path):
        runner = ProcessRunner(base_env={"PATH": "/usr/bin"})
        runner.add_search_path(tmp_path / "a")
        runner.add_search_path(tmp_path / "b")
        runner.add_search_path(tmp_path / "a")

        env = runner.build_env()

        assert env["PATH"].split(os.pathsep) == [
            str(tmp_path / "b"),
            str(tmp_path / "a"),
            "/usr/bin",
        ]

    def test_search_path_does_not_touch_process_environment(self, tmp_path):
        before = os.environ.get("PATH")
        runner = ProcessRunner()
        runner.add_search_path(tmp_path)

        assert os.environ.get("PATH") == before
        assert runner.build_env()["PATH"].startswith(str(tmp_path))

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX shell script")
    def test_registered_program_invoked_by_short_name(self, tmp_path):
        script = tmp_path / "fake-godot"
        script.write_text("#!/bin/sh\necho fake $1\n")
        script.chmod(0o755)
        runner = ProcessRunner()
        runner.add_search_path(tmp_path)

        code, stdout, _ = runner.run(["fake-godot", "--version"], capture_output=True)

        assert code == 0
        assert stdout == ["fake --version"]
