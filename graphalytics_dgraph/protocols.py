r"""
Protocol definition for benchmark platform drivers.

The harness drives every platform through the same lifecycle:

    verify_setup -> load_graph -> prepare -> startup -> run -> finalize -> terminate
                                  ... -> delete_graph

    from graphalytics_dgraph.protocols import Platform

    def execute(platform: Platform, run: BenchmarkRun) -> BenchmarkMetrics:
        ...
"""

from typing import Protocol, runtime_checkable

from graphalytics_dgraph.types import BenchmarkMetrics, BenchmarkRun, FormattedGraph

__all__ = ["Platform"]


@runtime_checkable
class Platform(Protocol):
    """Protocol for platform drivers plugged into the benchmark harness."""

    @property
    def name(self) -> str:
        """Platform name as known to the harness."""
        ...

    def verify_setup(self) -> None:
        """Check that the platform can run at all."""
        ...

    def load_graph(self, graph: FormattedGraph) -> None:
        """Load a formatted graph into the platform."""
        ...

    def delete_graph(self, graph: FormattedGraph) -> None:
        """Remove a previously loaded graph."""
        ...

    def prepare(self, run: BenchmarkRun) -> None:
        """Hook called before startup."""
        ...

    def startup(self, run: BenchmarkRun) -> None:
        """Start collecting platform logs for the run."""
        ...

    def run(self, run: BenchmarkRun) -> None:
        """Execute the run's algorithm."""
        ...

    def finalize(self, run: BenchmarkRun) -> BenchmarkMetrics:
        """Stop log collection and return the run's metrics."""
        ...

    def terminate(self, run: BenchmarkRun) -> None:
        """Clean up after the run."""
        ...
