r"""
Command-line interface for graphalytics-dgraph.

    graphalytics-dgraph verify -c config/platform.properties
    graphalytics-dgraph load example --vertex-path example.v --edge-path example.e --directed
    graphalytics-dgraph run pr example --max-iterations 10 --damping-factor 0.85
    graphalytics-dgraph unload example
"""

import uuid
from pathlib import Path
from typing import Annotated

import typer

from graphalytics_dgraph.config import load_config
from graphalytics_dgraph.errors import DriverError
from graphalytics_dgraph.log import configure_logging
from graphalytics_dgraph.platforms import DgraphPlatform
from graphalytics_dgraph.runner import run_benchmark
from graphalytics_dgraph.types import (
    Algorithm,
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

__all__ = ["app", "main"]

app = typer.Typer(
    name="graphalytics-dgraph",
    help="Dgraph driver for the Graphalytics benchmark.",
    no_args_is_help=True,
)

ConfigOption = Annotated[
    Path | None,
    typer.Option("-c", "--config", help="Platform properties file (default: config/platform.properties)"),
]
VertexPathOption = Annotated[str, typer.Option("--vertex-path", help="Vertex file of the formatted graph")]
EdgePathOption = Annotated[str, typer.Option("--edge-path", help="Edge file of the formatted graph")]
DirectedOption = Annotated[bool, typer.Option("--directed/--undirected", help="Whether edges are directed")]
WeightedOption = Annotated[bool, typer.Option("--weighted/--unweighted", help="Whether edges carry weights")]


@app.callback()
def setup(
    log_level: Annotated[str, typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR")] = "INFO",
    json_logs: Annotated[bool, typer.Option("--json-logs", help="Emit logs as JSON")] = False,
) -> None:
    """Configure logging before any command runs."""
    configure_logging(level=log_level, format="json" if json_logs else "console")


def _platform(config: Path | None) -> DgraphPlatform:
    try:
        return DgraphPlatform(load_config(config))
    except DriverError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e


def _graph(name: str, vertex_path: str, edge_path: str, directed: bool, weighted: bool) -> FormattedGraph:
    return FormattedGraph(
        name=name,
        vertex_path=vertex_path,
        edge_path=edge_path,
        directed=directed,
        weighted=weighted,
    )


def _parameters(
    algorithm: Algorithm,
    *,
    max_iterations: int | None,
    damping_factor: float | None,
    source_vertex: int | None,
) -> AlgorithmParameters:
    """Build the parameter variant for ``algorithm`` from CLI options."""

    def required(option: str, value: int | float | None) -> int | float:
        if value is None:
            raise typer.BadParameter(f"{option} is required for {algorithm.value}")
        return value

    match algorithm:
        case Algorithm.BFS:
            return BreadthFirstSearchParameters()
        case Algorithm.CDLP:
            return CommunityDetectionLPParameters(max_iterations=int(required("--max-iterations", max_iterations)))
        case Algorithm.LCC:
            return LocalClusteringCoefficientParameters()
        case Algorithm.PR:
            return PageRankParameters(
                iterations=int(required("--max-iterations", max_iterations)),
                damping_factor=float(required("--damping-factor", damping_factor)),
            )
        case Algorithm.SSSP:
            return SingleSourceShortestPathsParameters(source_vertex=int(required("--source-vertex", source_vertex)))
        case Algorithm.WCC:
            return WeaklyConnectedComponentsParameters()


@app.command()
def verify(config: ConfigOption = None) -> None:
    """Check that the configured Dgraph executables exist."""
    platform = _platform(config)
    try:
        platform.verify_setup()
    except DriverError as e:
        typer.echo(f"Setup check failed: {e}", err=True)
        raise typer.Exit(1) from e
    typer.echo("Setup OK")
    for role, path in platform.config.executables.items():
        typer.echo(f"  {role}: {path}")


@app.command()
def load(
    graph: Annotated[str, typer.Argument(help="Graph name")],
    vertex_path: VertexPathOption,
    edge_path: EdgePathOption,
    directed: DirectedOption = False,
    weighted: WeightedOption = False,
    config: ConfigOption = None,
) -> None:
    """Load a formatted graph with the Dgraph loader."""
    platform = _platform(config)
    try:
        platform.load_graph(_graph(graph, vertex_path, edge_path, directed, weighted))
    except DriverError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e
    typer.echo(f"Loaded graph {graph}")


@app.command()
def unload(
    graph: Annotated[str, typer.Argument(help="Graph name")],
    config: ConfigOption = None,
) -> None:
    """Remove a loaded graph with the Dgraph unloader."""
    platform = _platform(config)
    try:
        platform.delete_graph(_graph(graph, "", "", False, False))
    except DriverError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e
    typer.echo(f"Unloaded graph {graph}")


@app.command()
def run(
    algorithm: Annotated[Algorithm, typer.Argument(help="Algorithm to execute", case_sensitive=False)],
    graph: Annotated[str, typer.Argument(help="Name of a loaded graph")],
    directed: DirectedOption = False,
    weighted: WeightedOption = False,
    max_iterations: Annotated[
        int | None, typer.Option("--max-iterations", help="Iterations (pr, cdlp)")
    ] = None,
    damping_factor: Annotated[float | None, typer.Option("--damping-factor", help="Damping factor (pr)")] = None,
    source_vertex: Annotated[int | None, typer.Option("--source-vertex", help="Source vertex id (sssp)")] = None,
    run_id: Annotated[str | None, typer.Option("--run-id", help="Run identifier (default: random)")] = None,
    output_dir: Annotated[Path, typer.Option("-o", "--output-dir", help="Output directory")] = Path("./output"),
    log_dir: Annotated[Path, typer.Option("--log-dir", help="Log directory")] = Path("./logs"),
    config: ConfigOption = None,
) -> None:
    """Execute one algorithm on a loaded graph and print its metrics."""
    parameters = _parameters(
        algorithm,
        max_iterations=max_iterations,
        damping_factor=damping_factor,
        source_vertex=source_vertex,
    )
    run_id = run_id or f"{algorithm.value}-{graph}-{uuid.uuid4().hex[:8]}"
    benchmark_run = BenchmarkRun(
        run_id=run_id,
        graph=_graph(graph, "", "", directed, weighted),
        parameters=parameters,
        output_dir=output_dir,
        log_dir=log_dir / run_id,
    )

    result = run_benchmark(_platform(config), benchmark_run)
    if not result.ok or result.metrics is None:
        typer.echo(f"Run {run_id} failed: {result.error}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Run {run_id} completed")
    typer.echo(f"  processing time: {result.metrics.processing_time}s")
    if result.metrics.makespan is not None:
        typer.echo(f"  makespan: {result.metrics.makespan:.3f}s")


@app.command()
def algorithms() -> None:
    """List supported algorithms."""
    typer.echo("Supported algorithms:")
    for algorithm in Algorithm:
        typer.echo(f"  - {algorithm.value}")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
