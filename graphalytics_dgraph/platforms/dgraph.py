r"""
Dgraph platform driver.

Graph loading, unloading and every algorithm run are delegated to external
executables named in the platform configuration. The driver only builds
their command lines, runs them one at a time and reads the processing time
back from the captured log.

    from graphalytics_dgraph.platforms.dgraph import DgraphPlatform

    platform = DgraphPlatform()
    platform.verify_setup()
    platform.load_graph(graph)
    platform.startup(run)
    platform.run(run)
    metrics = platform.finalize(run)
"""

import os
from collections.abc import Sequence
from pathlib import Path

import structlog

from graphalytics_dgraph.collector import LOG_FILE_NAME, LogCollector, collect_processing_time
from graphalytics_dgraph.commands import format_command, loader_command, runner_command, unloader_command
from graphalytics_dgraph.config import PlatformConfig, load_config
from graphalytics_dgraph.errors import DriverError, ExecutionError, PlatformExecutionError, SetupError
from graphalytics_dgraph.platforms.base import BasePlatform, PlatformRegistry
from graphalytics_dgraph.runner.process import LineSink, run_process
from graphalytics_dgraph.runner.timing import Timer
from graphalytics_dgraph.types import BenchmarkMetrics, BenchmarkRun, FormattedGraph, PlatformState

__all__ = ["PLATFORM_NAME", "DgraphPlatform"]

PLATFORM_NAME = "dgraph"


def platform_log_dir(run: BenchmarkRun) -> Path:
    """Directory holding the platform log of ``run``."""
    return run.log_dir / "platform"


@PlatformRegistry.register(PLATFORM_NAME)
class DgraphPlatform(BasePlatform):
    """Dgraph driver for the Graphalytics benchmark."""

    def __init__(
        self,
        config: PlatformConfig | None = None,
        *,
        logger: structlog.stdlib.BoundLogger | None = None,
        collector: LogCollector | None = None,
    ) -> None:
        super().__init__(logger=logger)
        self._config = config
        self._collector = collector or LogCollector()
        self._makespan: float | None = None

    @property
    def name(self) -> str:
        return PLATFORM_NAME

    @property
    def config(self) -> PlatformConfig:
        """Platform configuration, loaded from the default file on first use."""
        if self._config is None:
            self._config = load_config()
        return self._config

    def _sink(self, source: str) -> LineSink:
        log = self._log.bind(source=source)

        def sink(line: str) -> None:
            if self._collector.active:
                self._collector.write(line)
            log.debug("output", line=line)

        return sink

    def _execute(self, command: Sequence[str]) -> None:
        self._log.info("execute", command=format_command(command))
        exit_code = run_process(command, sink=self._sink(Path(command[0]).name))
        if exit_code != 0:
            raise ExecutionError(exit_code, command)

    def verify_setup(self) -> None:
        """Check every configured executable exists and is executable.

        Raises:
            SetupError: On a missing configuration or executable.
        """
        for role, path in self.config.executables.items():
            if not path.is_file():
                msg = f"Dgraph {role} not found at {path}"
                raise SetupError(msg)
            if not os.access(path, os.X_OK):
                msg = f"Dgraph {role} at {path} is not executable"
                raise SetupError(msg)
        self._transition(PlatformState.VERIFIED_SETUP)
        self._log.info("setup_verified", **{role: str(p) for role, p in self.config.executables.items()})

    def load_graph(self, graph: FormattedGraph) -> None:
        self._log.info("loading_graph", graph=graph.name)
        try:
            self._execute(loader_command(self.config, graph))
        except DriverError as e:
            raise PlatformExecutionError("Failed to load a Dgraph dataset.", cause=e) from e
        self._transition(PlatformState.LOADED)
        self._log.info("loaded_graph", graph=graph.name)

    def delete_graph(self, graph: FormattedGraph) -> None:
        self._log.info("unloading_graph", graph=graph.name)
        try:
            self._execute(unloader_command(self.config, graph))
        except DriverError as e:
            raise PlatformExecutionError("Failed to unload a Dgraph dataset.", cause=e) from e
        self._transition(PlatformState.DELETED)
        self._log.info("unloaded_graph", graph=graph.name)

    def startup(self, run: BenchmarkRun) -> None:
        self._makespan = None
        try:
            self._collector.start(platform_log_dir(run) / LOG_FILE_NAME)
        except OSError as e:
            raise PlatformExecutionError("Failed to start Dgraph platform logging.", cause=e) from e
        self._transition(PlatformState.STARTED)

    def run(self, run: BenchmarkRun) -> None:
        algorithm = run.algorithm.value
        self._log.info("executing_benchmark", algorithm=algorithm, graph=run.graph.name, run_id=run.run_id)
        try:
            with Timer() as timer:
                self._execute(runner_command(self.config, run))
        except (DriverError, OSError) as e:
            raise PlatformExecutionError("Failed to execute a Dgraph job.", cause=e) from e
        finally:
            self._makespan = timer.elapsed_seconds
        self._transition(PlatformState.RUN)
        self._log.info(
            "executed_benchmark",
            algorithm=algorithm,
            graph=run.graph.name,
            makespan=self._makespan,
        )

    def finalize(self, run: BenchmarkRun) -> BenchmarkMetrics:
        self._collector.stop()
        try:
            processing_time = collect_processing_time(platform_log_dir(run))
        except DriverError as e:
            raise PlatformExecutionError("Failed to collect Dgraph metrics.", cause=e) from e
        self._transition(PlatformState.FINALIZED)
        self._log.info("collected_metrics", run_id=run.run_id, processing_time=processing_time)
        return BenchmarkMetrics(processing_time=processing_time, makespan=self._makespan)

    def terminate(self, run: BenchmarkRun) -> None:
        self._collector.stop()
        super().terminate(run)
