r"""
Process execution and run lifecycle.

Runs external executables one at a time and drives benchmark runs
through a platform's lifecycle.

    from graphalytics_dgraph.runner import run_benchmark

    result = run_benchmark(platform, run)
"""

from graphalytics_dgraph.runner.lifecycle import run_benchmark
from graphalytics_dgraph.runner.process import LineSink, run_process
from graphalytics_dgraph.runner.timing import Timer

__all__ = [
    "LineSink",
    "Timer",
    "run_benchmark",
    "run_process",
]
