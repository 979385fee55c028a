"""Utility modules and functions for godot-ci.

1. Process Streaming: subprocess execution with streamed output
2. Error Utilities: standardized error creation
3. Naming: filesystem-safe names for build output
4. Fan-out: one task per item on a thread pool, joined together
"""

from godot_ci.utils.error_utils import (
    create_archive_error,
    create_file_error,
    create_process_error,
)
from godot_ci.utils.fan_out import TaskOutcome, run_all
from godot_ci.utils.naming import sanitize_filename, unique_sanitized_names
from godot_ci.utils.stream_process import (
    DefaultOutputMiddleware,
    OutputMiddleware,
    run_command,
)


__all__ = [
    "DefaultOutputMiddleware",
    "OutputMiddleware",
    "TaskOutcome",
    "create_archive_error",
    "create_file_error",
    "create_process_error",
    "run_all",
    "run_command",
    "sanitize_filename",
    "unique_sanitized_names",
]
