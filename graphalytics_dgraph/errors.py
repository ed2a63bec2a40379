r"""
Driver error taxonomy.

Every failure the harness sees is a PlatformExecutionError; the original
error is kept as its ``cause``.

    from graphalytics_dgraph.errors import PlatformExecutionError

    try:
        platform.run(benchmark_run)
    except PlatformExecutionError as e:
        print(e, e.cause)
"""

from collections.abc import Sequence
from pathlib import Path

__all__ = [
    "DriverError",
    "ExecutionError",
    "LaunchError",
    "MetricNotFoundError",
    "PlatformExecutionError",
    "SetupError",
]


class DriverError(Exception):
    """Base class for all driver errors."""


class SetupError(DriverError):
    """Missing or misconfigured executable or configuration key."""


class LaunchError(DriverError):
    """An external executable could not be started."""

    def __init__(self, executable: str, reason: str) -> None:
        self.executable = executable
        super().__init__(f"Could not start '{executable}': {reason}")


class ExecutionError(DriverError):
    """An external executable exited with a non-zero code."""

    def __init__(self, exit_code: int, command: Sequence[str] = ()) -> None:
        self.exit_code = exit_code
        self.command = list(command)
        super().__init__(f"Dgraph exited with an error code: {exit_code}")


class MetricNotFoundError(DriverError):
    """The processing-time marker was not found in the runner log."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"No processing time in {path}: {reason}")


class PlatformExecutionError(DriverError):
    """Failure of a lifecycle phase, as reported to the harness."""

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        self.cause = cause
        if cause is not None:
            message = f"{message} {cause}"
        super().__init__(message)
