r"""
Wall-clock timing of driver phases.

    from graphalytics_dgraph.runner.timing import Timer

    with Timer() as t:
        run_process(command, sink=print)
    print(f"Makespan: {t.elapsed_seconds}s")
"""

import time
from typing import Any

__all__ = ["Timer"]


class Timer:
    """Context manager for timing code blocks.

    The elapsed time is recorded even when the block raises.
    """

    def __init__(self) -> None:
        self._start: int = 0
        self._end: int = 0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter_ns()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self._end = time.perf_counter_ns()

    @property
    def elapsed_ns(self) -> int:
        """Elapsed time in nanoseconds."""
        return self._end - self._start

    @property
    def elapsed_ms(self) -> float:
        """Elapsed time in milliseconds."""
        return self.elapsed_ns / 1_000_000

    @property
    def elapsed_seconds(self) -> float:
        """Elapsed time in seconds."""
        return self.elapsed_ns / 1_000_000_000
