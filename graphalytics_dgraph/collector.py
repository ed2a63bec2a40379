r"""
Platform log capture and processing-time extraction.

Between ``startup`` and ``finalize`` every line the external executables
print is appended to a single ``runner.logs`` file. After the run, the
engine's ``Processing time: <seconds>`` line is read back from it.

The engine's log format is the only source of the metric: if the marker
changes, collection fails with MetricNotFoundError rather than guessing.

    from graphalytics_dgraph.collector import LogCollector, collect_processing_time

    collector = LogCollector()
    collector.start(log_dir / "platform" / "runner.logs")
    run_process(command, sink=collector.write)
    collector.stop()
    seconds = collect_processing_time(log_dir / "platform")
"""

import re
from pathlib import Path
from typing import TextIO

from graphalytics_dgraph.errors import MetricNotFoundError

__all__ = [
    "LOG_FILE_NAME",
    "PROCESSING_TIME_PATTERN",
    "LogCollector",
    "collect_processing_time",
]

LOG_FILE_NAME = "runner.logs"

# Seconds, e.g. "Processing time: 12.345 s"
PROCESSING_TIME_PATTERN = re.compile(r"Processing time:\s*(?P<seconds>\d+(?:\.\d+)?(?:[eE][-+]?\d+)?)")


class LogCollector:
    """Appends subprocess output to the platform log file of one run."""

    def __init__(self) -> None:
        self._file: TextIO | None = None
        self._path: Path | None = None

    @property
    def active(self) -> bool:
        """Whether a log file is currently open."""
        return self._file is not None

    @property
    def path(self) -> Path | None:
        """Path of the open log file."""
        return self._path

    def start(self, path: Path) -> None:
        """Open ``path``, truncating output of an earlier run, creating parent directories."""
        self.stop()
        path.parent.mkdir(parents=True, exist_ok=True)
        self._file = path.open("w", encoding="utf-8")
        self._path = path

    def write(self, line: str) -> None:
        if self._file is None:
            return
        self._file.write(line + "\n")

    def stop(self) -> None:
        """Flush and close the log file. No-op when not started."""
        if self._file is not None:
            self._file.close()
        self._file = None
        self._path = None

    def __enter__(self) -> "LogCollector":
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        self.stop()


def collect_processing_time(log_dir: Path) -> float:
    """Read the engine-reported processing time from ``log_dir``.

    Args:
        log_dir: Directory holding the run's ``runner.logs``.

    Returns:
        Processing time in seconds, from the first marker line.

    Raises:
        MetricNotFoundError: If the log is missing, unreadable or has no marker line.
    """
    path = log_dir / LOG_FILE_NAME
    try:
        with path.open(encoding="utf-8", errors="replace") as f:
            for line in f:
                match = PROCESSING_TIME_PATTERN.search(line)
                if match:
                    return float(match.group("seconds"))
    except FileNotFoundError as e:
        raise MetricNotFoundError(path, "log file does not exist") from e
    except OSError as e:
        raise MetricNotFoundError(path, e.strerror or str(e)) from e
    raise MetricNotFoundError(path, "no 'Processing time' line found")
