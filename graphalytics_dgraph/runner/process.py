r"""
Blocking execution of external Dgraph executables.

    from graphalytics_dgraph.runner.process import run_process

    exit_code = run_process(["/opt/dgraph/bin/loader", "--graph-name", "example"], sink=print)
"""

import subprocess
from collections.abc import Callable, Sequence
from typing import TextIO, cast

from graphalytics_dgraph.errors import LaunchError

__all__ = ["LineSink", "run_process"]

LineSink = Callable[[str], None]


def run_process(command: Sequence[str], *, sink: LineSink) -> int:
    """Run ``command`` to completion, pumping its output to ``sink``.

    stdout and stderr are merged and delivered one line at a time, without
    the trailing newline, while the process runs.

    Args:
        command: Executable followed by its arguments.
        sink: Called with every output line.

    Returns:
        The process exit code.

    Raises:
        LaunchError: If the executable cannot be started.
    """
    if not command:
        msg = "empty command"
        raise LaunchError("", msg)

    executable = command[0]
    try:
        proc = subprocess.Popen(
            list(command),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as e:
        raise LaunchError(executable, e.strerror or str(e)) from e

    # Popen's context manager closes the pipe and waits on every exit path
    with proc:
        stdout = cast(TextIO, proc.stdout)
        for line in stdout:
            sink(line.rstrip("\r\n"))
        return proc.wait()
