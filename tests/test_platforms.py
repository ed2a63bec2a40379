r"""
Tests for graphalytics_dgraph.platforms module.
"""

from pathlib import Path

import pytest

from graphalytics_dgraph.config import PlatformConfig
from graphalytics_dgraph.errors import (
    ExecutionError,
    LaunchError,
    MetricNotFoundError,
    PlatformExecutionError,
    SetupError,
)
from graphalytics_dgraph.platforms import BasePlatform, DgraphPlatform, PlatformRegistry
from graphalytics_dgraph.protocols import Platform
from graphalytics_dgraph.runner import run_benchmark
from graphalytics_dgraph.types import BenchmarkMetrics, PlatformState, Status


class TestPlatformRegistry:
    def test_registry_has_dgraph(self):
        assert "dgraph" in PlatformRegistry.list()
        assert PlatformRegistry.get("dgraph") is DgraphPlatform

    def test_get_unknown_platform(self):
        assert PlatformRegistry.get("unknown") is None

    def test_create_unknown_platform(self):
        with pytest.raises(ValueError, match="Unknown platform"):
            PlatformRegistry.create("unknown")

    def test_create_with_config(self, platform_config):
        platform = PlatformRegistry.create("dgraph", config=platform_config)
        assert isinstance(platform, DgraphPlatform)
        assert platform.config is platform_config


class TestBasePlatform:
    def test_base_platform_is_abstract(self):
        with pytest.raises(TypeError):
            BasePlatform()  # type: ignore

    def test_dgraph_satisfies_protocol(self, platform_config):
        assert isinstance(DgraphPlatform(platform_config), Platform)

    def test_repr(self, platform_config):
        assert repr(DgraphPlatform(platform_config)) == "<DgraphPlatform state=idle>"


class TestVerifySetup:
    def test_verify_setup(self, platform_config):
        platform = DgraphPlatform(platform_config)
        platform.verify_setup()
        assert platform.state == PlatformState.VERIFIED_SETUP

    def test_missing_executable(self, platform_config, tmp_path):
        config = PlatformConfig(
            loader_path=platform_config.loader_path,
            unloader_path=tmp_path / "missing",
            runner_path=platform_config.runner_path,
        )
        with pytest.raises(SetupError, match="unloader not found"):
            DgraphPlatform(config).verify_setup()

    def test_not_executable(self, platform_config):
        platform_config.runner_path.chmod(0o644)
        with pytest.raises(SetupError, match="runner .* is not executable"):
            DgraphPlatform(platform_config).verify_setup()

    def test_missing_configuration(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GRAPHALYTICS_DGRAPH_CONFIG", str(tmp_path / "absent.properties"))
        with pytest.raises(SetupError):
            DgraphPlatform().verify_setup()


class TestLoadGraph:
    def test_invokes_loader(self, platform_config, graph, workdir, recorded_calls):
        platform = DgraphPlatform(platform_config)

        platform.load_graph(graph)

        calls = recorded_calls(platform_config.loader_path)
        assert len(calls) == 1
        args = calls[0]
        assert args[args.index("--graph-name") + 1] == "test-graph"
        assert args[args.index("--output-path") + 1].endswith("intermediate/test-graph")
        assert Path(args[args.index("--output-path") + 1]).is_absolute()
        assert platform.state == PlatformState.LOADED

    def test_nonzero_exit(self, make_executable, platform_config, graph, workdir):
        config = PlatformConfig(
            loader_path=make_executable("failing-loader", exit_code=3),
            unloader_path=platform_config.unloader_path,
            runner_path=platform_config.runner_path,
        )

        with pytest.raises(PlatformExecutionError, match="Failed to load") as exc_info:
            DgraphPlatform(config).load_graph(graph)

        cause = exc_info.value.cause
        assert isinstance(cause, ExecutionError)
        assert cause.exit_code == 3
        assert exc_info.value.__cause__ is cause

    def test_launch_failure(self, platform_config, graph, tmp_path):
        config = PlatformConfig(
            loader_path=tmp_path / "missing-loader",
            unloader_path=platform_config.unloader_path,
            runner_path=platform_config.runner_path,
        )

        with pytest.raises(PlatformExecutionError) as exc_info:
            DgraphPlatform(config).load_graph(graph)

        assert isinstance(exc_info.value.cause, LaunchError)


class TestDeleteGraph:
    def test_invokes_unloader(self, platform_config, graph, workdir, recorded_calls):
        platform = DgraphPlatform(platform_config)
        platform.load_graph(graph)

        platform.delete_graph(graph)

        assert recorded_calls(platform_config.unloader_path) == [
            ["--graph-name", "test-graph", "--output-path", str(Path.cwd() / "intermediate" / "test-graph")]
        ]
        assert platform.state == PlatformState.DELETED

    def test_nonzero_exit(self, make_executable, platform_config, graph):
        config = PlatformConfig(
            loader_path=platform_config.loader_path,
            unloader_path=make_executable("failing-unloader", exit_code=1),
            runner_path=platform_config.runner_path,
        )

        with pytest.raises(PlatformExecutionError, match="Failed to unload") as exc_info:
            DgraphPlatform(config).delete_graph(graph)

        assert exc_info.value.cause.exit_code == 1


class TestRunLifecycle:
    def test_full_lifecycle(self, platform_config, graph, benchmark_run, workdir, recorded_calls):
        platform = DgraphPlatform(platform_config)
        platform.verify_setup()
        platform.load_graph(graph)
        platform.prepare(benchmark_run)
        platform.startup(benchmark_run)
        assert platform.state == PlatformState.STARTED

        platform.run(benchmark_run)
        assert platform.state == PlatformState.RUN

        metrics = platform.finalize(benchmark_run)
        assert platform.state == PlatformState.FINALIZED
        platform.terminate(benchmark_run)
        assert platform.state == PlatformState.TERMINATED

        assert metrics.processing_time == 1.25
        assert metrics.makespan is not None and metrics.makespan > 0

        args = recorded_calls(platform_config.runner_path)[0]
        assert args[:6] == ["--algorithm", "pr", "--damping-factor", "0.85", "--max-iteration", "10"]

    def test_output_captured_in_platform_log(self, platform_config, benchmark_run):
        platform = DgraphPlatform(platform_config)
        platform.startup(benchmark_run)
        platform.run(benchmark_run)
        platform.finalize(benchmark_run)

        log = benchmark_run.log_dir / "platform" / "runner.logs"
        assert "Processing time: 1.25 s" in log.read_text()

    def test_run_nonzero_exit(self, make_executable, platform_config, benchmark_run):
        config = PlatformConfig(
            loader_path=platform_config.loader_path,
            unloader_path=platform_config.unloader_path,
            runner_path=make_executable("failing-runner", exit_code=2, body='print("Segmentation fault")'),
        )
        platform = DgraphPlatform(config)
        platform.startup(benchmark_run)

        with pytest.raises(PlatformExecutionError, match="Failed to execute a Dgraph job") as exc_info:
            platform.run(benchmark_run)

        assert isinstance(exc_info.value.cause, ExecutionError)
        assert exc_info.value.cause.exit_code == 2
        platform.terminate(benchmark_run)
        log = benchmark_run.log_dir / "platform" / "runner.logs"
        assert "Segmentation fault" in log.read_text()

    def test_finalize_without_marker(self, make_executable, platform_config, benchmark_run):
        config = PlatformConfig(
            loader_path=platform_config.loader_path,
            unloader_path=platform_config.unloader_path,
            runner_path=make_executable("quiet-runner"),
        )
        platform = DgraphPlatform(config)
        platform.startup(benchmark_run)
        platform.run(benchmark_run)

        with pytest.raises(PlatformExecutionError) as exc_info:
            platform.finalize(benchmark_run)

        assert isinstance(exc_info.value.cause, MetricNotFoundError)

    def test_out_of_order_calls_do_not_crash(self, platform_config, benchmark_run):
        platform = DgraphPlatform(platform_config)
        platform.run(benchmark_run)
        platform.terminate(benchmark_run)
        assert platform.state == PlatformState.TERMINATED

    def test_run_benchmark(self, platform_config, graph, benchmark_run, workdir):
        platform = DgraphPlatform(platform_config)
        platform.load_graph(graph)

        result = run_benchmark(platform, benchmark_run)

        assert result.ok
        assert result.metrics.processing_time == 1.25
        assert platform.state == PlatformState.TERMINATED

    def test_run_benchmark_continues_after_failure(self, make_executable, platform_config, benchmark_run):
        config = PlatformConfig(
            loader_path=platform_config.loader_path,
            unloader_path=platform_config.unloader_path,
            runner_path=make_executable("failing-runner", exit_code=4),
        )
        platform = DgraphPlatform(config)

        result = run_benchmark(platform, benchmark_run)

        assert result.status == Status.FAILED
        assert "error code: 4" in result.error
        assert platform.state == PlatformState.TERMINATED

    def test_reused_log_dir_reports_latest_run(self, make_executable, platform_config, benchmark_run):
        first = DgraphPlatform(platform_config)
        first.startup(benchmark_run)
        first.run(benchmark_run)
        assert first.finalize(benchmark_run).processing_time == 1.25

        config = PlatformConfig(
            loader_path=platform_config.loader_path,
            unloader_path=platform_config.unloader_path,
            runner_path=make_executable("slow-runner", body='print("Processing time: 99.0 s")'),
        )
        second = DgraphPlatform(config)
        second.startup(benchmark_run)
        second.run(benchmark_run)

        assert second.finalize(benchmark_run).processing_time == 99.0
        log = benchmark_run.log_dir / "platform" / "runner.logs"
        assert "1.25" not in log.read_text()

    def test_startup_log_unwritable(self, platform_config, benchmark_run):
        (benchmark_run.log_dir / "platform" / "runner.logs").mkdir(parents=True)
        platform = DgraphPlatform(platform_config)

        with pytest.raises(PlatformExecutionError, match="Failed to start Dgraph platform logging") as exc_info:
            platform.startup(benchmark_run)

        assert isinstance(exc_info.value.cause, OSError)
        assert exc_info.value.__cause__ is exc_info.value.cause

    def test_run_benchmark_log_unwritable(self, platform_config, benchmark_run):
        (benchmark_run.log_dir / "platform" / "runner.logs").mkdir(parents=True)
        platform = DgraphPlatform(platform_config)

        result = run_benchmark(platform, benchmark_run)

        assert result.status == Status.FAILED
        assert platform.state == PlatformState.TERMINATED


class Recorder:
    """Stand-in logger keeping every event it receives."""

    def __init__(self):
        self.events: list[tuple[str, dict]] = []

    def bind(self, **kwargs):
        return self

    def _record(self, event, **kwargs):
        self.events.append((event, kwargs))

    debug = info = warning = error = _record

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.events]


class TestInjectedLogger:
    def test_uses_injected_logger(self, platform_config, benchmark_run):
        recorder = Recorder()
        platform = DgraphPlatform(platform_config, logger=recorder)  # type: ignore
        platform.startup(benchmark_run)
        platform.run(benchmark_run)
        metrics = platform.finalize(benchmark_run)

        assert isinstance(metrics, BenchmarkMetrics)
        assert "executing_benchmark" in recorder.names
        assert ("output", {"line": "Processing time: 1.25 s"}) in recorder.events

    def test_startup_from_idle_is_expected(self, platform_config, benchmark_run):
        recorder = Recorder()
        platform = DgraphPlatform(platform_config, logger=recorder)  # type: ignore

        platform.startup(benchmark_run)
        platform.run(benchmark_run)
        platform.finalize(benchmark_run)
        platform.terminate(benchmark_run)

        assert "unexpected_transition" not in recorder.names

    def test_out_of_order_call_is_logged(self, platform_config, benchmark_run):
        recorder = Recorder()
        platform = DgraphPlatform(platform_config, logger=recorder)  # type: ignore

        platform.run(benchmark_run)

        assert ("unexpected_transition", {"platform": "dgraph", "current": "IDLE", "target": "RUN"}) in recorder.events
