r"""
Core types shared between the harness and the Dgraph driver.

    from graphalytics_dgraph.types import BenchmarkRun, FormattedGraph, PageRankParameters

    run = BenchmarkRun(
        run_id="pr-example",
        graph=FormattedGraph(name="example", vertex_path="v.txt", edge_path="e.txt", directed=True),
        parameters=PageRankParameters(iterations=10, damping_factor=0.85),
        output_dir=Path("./output"),
        log_dir=Path("./logs"),
    )
"""

from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from pathlib import Path

__all__ = [
    "Algorithm",
    "AlgorithmParameters",
    "BenchmarkMetrics",
    "BenchmarkRun",
    "BreadthFirstSearchParameters",
    "CommunityDetectionLPParameters",
    "FormattedGraph",
    "LocalClusteringCoefficientParameters",
    "PageRankParameters",
    "PlatformState",
    "RunResult",
    "SingleSourceShortestPathsParameters",
    "Status",
    "WeaklyConnectedComponentsParameters",
]


class Algorithm(str, Enum):
    """Graphalytics core algorithms, valued by their runner name."""

    BFS = "bfs"
    CDLP = "cdlp"
    LCC = "lcc"
    PR = "pr"
    SSSP = "sssp"
    WCC = "wcc"


class Status(IntEnum):
    """Benchmark run outcome status."""

    SUCCESS = auto()
    FAILED = auto()


class PlatformState(IntEnum):
    """Lifecycle state of a platform adapter."""

    IDLE = auto()
    VERIFIED_SETUP = auto()
    LOADED = auto()
    STARTED = auto()
    RUN = auto()
    FINALIZED = auto()
    TERMINATED = auto()
    DELETED = auto()


@dataclass(frozen=True, slots=True)
class BreadthFirstSearchParameters:
    """BFS takes no runner flags beyond the algorithm name."""

    algorithm = Algorithm.BFS


@dataclass(frozen=True, slots=True)
class CommunityDetectionLPParameters:
    """Community detection using label propagation.

    Attributes:
        max_iterations: Number of propagation rounds.
    """

    max_iterations: int

    algorithm = Algorithm.CDLP


@dataclass(frozen=True, slots=True)
class LocalClusteringCoefficientParameters:
    algorithm = Algorithm.LCC


@dataclass(frozen=True, slots=True)
class PageRankParameters:
    """PageRank parameters.

    Attributes:
        iterations: Number of PageRank iterations.
        damping_factor: Damping factor, usually 0.85.
    """

    iterations: int
    damping_factor: float

    algorithm = Algorithm.PR


@dataclass(frozen=True, slots=True)
class SingleSourceShortestPathsParameters:
    """Single source shortest paths parameters.

    Attributes:
        source_vertex: Vertex id the distances are computed from.
    """

    source_vertex: int

    algorithm = Algorithm.SSSP


@dataclass(frozen=True, slots=True)
class WeaklyConnectedComponentsParameters:
    algorithm = Algorithm.WCC


AlgorithmParameters = (
    BreadthFirstSearchParameters
    | CommunityDetectionLPParameters
    | LocalClusteringCoefficientParameters
    | PageRankParameters
    | SingleSourceShortestPathsParameters
    | WeaklyConnectedComponentsParameters
)


@dataclass(frozen=True, slots=True)
class FormattedGraph:
    """A graph dataset already in the layout the Dgraph loader expects.

    Attributes:
        name: Graph name, also the name of its intermediate directory.
        vertex_path: Path to the vertex file.
        edge_path: Path to the edge file.
        directed: Whether edges are directed.
        weighted: Whether edges carry a weight property.
    """

    name: str
    vertex_path: str
    edge_path: str
    directed: bool = False
    weighted: bool = False


@dataclass(frozen=True, slots=True)
class BenchmarkRun:
    """One harness request: an algorithm on a loaded graph.

    Attributes:
        run_id: Unique run identifier, used to name the output directory.
        graph: Graph the algorithm runs on.
        parameters: Algorithm variant with its parameters.
        output_dir: Directory the runner writes results under.
        log_dir: Directory for this run's logs.
    """

    run_id: str
    graph: FormattedGraph
    parameters: AlgorithmParameters
    output_dir: Path
    log_dir: Path

    @property
    def algorithm(self) -> Algorithm:
        """Algorithm selected by the parameter variant."""
        return self.parameters.algorithm


@dataclass(frozen=True, slots=True)
class BenchmarkMetrics:
    """Metrics reported back to the harness.

    Attributes:
        processing_time: Seconds, as reported by the engine's own log.
        makespan: Wall-clock seconds of the runner process, if measured.
    """

    processing_time: float
    makespan: float | None = None


@dataclass(frozen=True, slots=True)
class RunResult:
    """Outcome of driving one BenchmarkRun through the platform lifecycle."""

    run_id: str
    algorithm: Algorithm
    graph_name: str
    metrics: BenchmarkMetrics | None
    status: Status = Status.SUCCESS
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True if the run completed successfully."""
        return self.status == Status.SUCCESS
