r"""
Command-line construction for the Dgraph loader, unloader and runner.

Each function returns a fresh argument list whose first element is the
executable. Parameter values are rendered but never validated; the
executables reject bad values themselves.

    from graphalytics_dgraph.commands import algorithm_arguments
    from graphalytics_dgraph.types import PageRankParameters

    algorithm_arguments(PageRankParameters(iterations=10, damping_factor=0.85))
    # ['--algorithm', 'pr', '--damping-factor', '0.85', '--max-iteration', '10']
"""

import shlex
from collections.abc import Sequence
from pathlib import Path

from graphalytics_dgraph.config import PlatformConfig
from graphalytics_dgraph.types import (
    AlgorithmParameters,
    BenchmarkRun,
    BreadthFirstSearchParameters,
    CommunityDetectionLPParameters,
    FormattedGraph,
    LocalClusteringCoefficientParameters,
    PageRankParameters,
    SingleSourceShortestPathsParameters,
    WeaklyConnectedComponentsParameters,
)

__all__ = [
    "INTERMEDIATE_DIR",
    "algorithm_arguments",
    "format_command",
    "loaded_path",
    "loader_command",
    "output_path",
    "runner_command",
    "unloader_command",
]

INTERMEDIATE_DIR = Path("intermediate")


def _flag(value: bool) -> str:
    return "true" if value else "false"


def loaded_path(graph: FormattedGraph) -> Path:
    """Absolute path of the loaded graph, resolved against the current directory."""
    return (INTERMEDIATE_DIR / graph.name).absolute()


def output_path(run: BenchmarkRun) -> Path:
    """Absolute directory the runner writes the run's results to."""
    return (run.output_dir / run.run_id).absolute()


def algorithm_arguments(parameters: AlgorithmParameters) -> list[str]:
    """Build ``--algorithm <name>`` followed by the algorithm-specific flags."""
    match parameters:
        case PageRankParameters(iterations=iterations, damping_factor=damping_factor):
            extra = [
                "--damping-factor", str(float(damping_factor)),
                "--max-iteration", str(int(iterations)),
            ]  # fmt: skip
        case CommunityDetectionLPParameters(max_iterations=max_iterations):
            extra = ["--max-iteration", str(int(max_iterations))]
        case SingleSourceShortestPathsParameters(source_vertex=source_vertex):
            extra = ["--source-vertex", str(int(source_vertex))]
        case (
            BreadthFirstSearchParameters()
            | LocalClusteringCoefficientParameters()
            | WeaklyConnectedComponentsParameters()
        ):
            extra = []
        case _:
            msg = f"Unsupported algorithm parameters: {parameters!r}"
            raise TypeError(msg)
    return ["--algorithm", parameters.algorithm.value, *extra]


def loader_command(config: PlatformConfig, graph: FormattedGraph) -> list[str]:
    """Command that bulk-loads ``graph`` into its intermediate directory."""
    return [
        str(config.loader_path),
        "--graph-name", graph.name,
        "--input-vertex-path", str(graph.vertex_path),
        "--input-edge-path", str(graph.edge_path),
        "--output-path", str(loaded_path(graph)),
        "--directed", _flag(graph.directed),
        "--weighted", _flag(graph.weighted),
    ]  # fmt: skip


def unloader_command(config: PlatformConfig, graph: FormattedGraph) -> list[str]:
    """Command that removes a previously loaded ``graph``."""
    return [
        str(config.unloader_path),
        "--graph-name", graph.name,
        "--output-path", str(loaded_path(graph)),
    ]  # fmt: skip


def runner_command(config: PlatformConfig, run: BenchmarkRun) -> list[str]:
    """Command that executes the run's algorithm on its loaded graph.

    The algorithm block comes first, then the dataset arguments, then the
    engine connection arguments.
    """
    command = [str(config.runner_path)]
    command += algorithm_arguments(run.parameters)
    command += [
        "--input-path", str(loaded_path(run.graph)),
        "--output-path", str(output_path(run)),
        "--directed", _flag(run.graph.directed),
        "--weighted", _flag(run.graph.weighted),
        "--alpha", config.alpha_address,
    ]  # fmt: skip
    if config.num_threads is not None:
        command += ["--num-threads", str(config.num_threads)]
    return command


def format_command(command: Sequence[str]) -> str:
    """Render a command for logging."""
    return shlex.join(command)
