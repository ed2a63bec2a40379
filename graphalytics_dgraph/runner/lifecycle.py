r"""
Drive a benchmark run through a platform's lifecycle.

    from graphalytics_dgraph.runner import run_benchmark

    result = run_benchmark(platform, run)
    if not result.ok:
        print(result.error)
"""

import structlog

from graphalytics_dgraph.errors import DriverError
from graphalytics_dgraph.log import get_logger
from graphalytics_dgraph.protocols import Platform
from graphalytics_dgraph.types import BenchmarkRun, RunResult, Status

__all__ = ["run_benchmark"]


def run_benchmark(
    platform: Platform,
    run: BenchmarkRun,
    *,
    logger: structlog.stdlib.BoundLogger | None = None,
) -> RunResult:
    """Execute one run on an already loaded graph.

    Calls ``prepare``, ``startup``, ``run`` and ``finalize`` in order and
    always ``terminate``. A driver error marks the run FAILED instead of
    propagating, so the caller can move on to its next run.

    Args:
        platform: Platform the graph is loaded on.
        run: Benchmark run to execute.
        logger: Logger for the run outcome.

    Returns:
        RunResult with metrics on success, the error message on failure.
    """
    log = logger if logger is not None else get_logger(__name__)

    try:
        platform.prepare(run)
        platform.startup(run)
        platform.run(run)
        metrics = platform.finalize(run)
        result = RunResult(
            run_id=run.run_id,
            algorithm=run.algorithm,
            graph_name=run.graph.name,
            metrics=metrics,
            status=Status.SUCCESS,
        )
    except DriverError as e:
        log.error("benchmark_failed", run_id=run.run_id, platform=platform.name, error=str(e))
        result = RunResult(
            run_id=run.run_id,
            algorithm=run.algorithm,
            graph_name=run.graph.name,
            metrics=None,
            status=Status.FAILED,
            error=str(e),
        )
    finally:
        platform.terminate(run)

    return result
