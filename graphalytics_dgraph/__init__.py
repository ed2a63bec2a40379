r"""
graphalytics-dgraph: Dgraph driver for the Graphalytics benchmark.

Loads graphs and runs the Graphalytics core algorithms (BFS, CDLP, LCC,
PR, SSSP, WCC) through external Dgraph executables, and reports the
processing time the engine logs.

    from graphalytics_dgraph import DgraphPlatform, run_benchmark

    platform = DgraphPlatform()
    platform.load_graph(graph)
    result = run_benchmark(platform, run)
"""

from graphalytics_dgraph.config import PlatformConfig, load_config
from graphalytics_dgraph.errors import (
    DriverError,
    ExecutionError,
    LaunchError,
    MetricNotFoundError,
    PlatformExecutionError,
    SetupError,
)
from graphalytics_dgraph.platforms import DgraphPlatform
from graphalytics_dgraph.runner import run_benchmark
from graphalytics_dgraph.types import Algorithm, BenchmarkMetrics, BenchmarkRun, FormattedGraph, RunResult, Status

__all__ = [
    "Algorithm",
    "BenchmarkMetrics",
    "BenchmarkRun",
    "DgraphPlatform",
    "DriverError",
    "ExecutionError",
    "FormattedGraph",
    "LaunchError",
    "MetricNotFoundError",
    "PlatformConfig",
    "PlatformExecutionError",
    "RunResult",
    "SetupError",
    "Status",
    "load_config",
    "run_benchmark",
]

__version__ = "0.1.0"
