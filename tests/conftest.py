r"""
Shared pytest fixtures for graphalytics-dgraph tests.

Fake Dgraph executables are small Python scripts that append their
arguments as a JSON line to a record file.
"""

import json
import logging
import stat
import sys
from collections.abc import Callable
from pathlib import Path

import pytest
import structlog

from graphalytics_dgraph.config import PlatformConfig
from graphalytics_dgraph.types import BenchmarkRun, FormattedGraph, PageRankParameters

FAKE_EXECUTABLE = """\
#!{python}
import json
import sys

with open({record!r}, "a") as f:
    f.write(json.dumps(sys.argv[1:]) + "\\n")
{body}
sys.exit({exit_code})
"""


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging configuration done by CLI tests."""
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def make_executable(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a fake executable; its calls are recorded in ``<name>.calls``."""

    def make(name: str, *, exit_code: int = 0, body: str = "") -> Path:
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir(exist_ok=True)
        path = bin_dir / name
        record = bin_dir / f"{name}.calls"
        path.write_text(
            FAKE_EXECUTABLE.format(python=sys.executable, record=str(record), body=body, exit_code=exit_code)
        )
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return make


@pytest.fixture
def recorded_calls() -> Callable[[Path], list[list[str]]]:
    """Reader for the argument lists a fake executable was called with."""

    def read(executable: Path) -> list[list[str]]:
        record = executable.with_name(f"{executable.name}.calls")
        if not record.exists():
            return []
        return [json.loads(line) for line in record.read_text().splitlines()]

    return read


@pytest.fixture
def platform_config(make_executable: Callable[..., Path]) -> PlatformConfig:
    """Configuration whose executables all succeed; the runner logs a processing time."""
    return PlatformConfig(
        loader_path=make_executable("loader"),
        unloader_path=make_executable("unloader"),
        runner_path=make_executable("runner", body='print("Processing time: 1.25 s")'),
    )


@pytest.fixture
def graph() -> FormattedGraph:
    """Sample formatted graph."""
    return FormattedGraph(
        name="test-graph",
        vertex_path="/data/test-graph.v",
        edge_path="/data/test-graph.e",
        directed=True,
        weighted=False,
    )


@pytest.fixture
def benchmark_run(tmp_path: Path, graph: FormattedGraph) -> BenchmarkRun:
    """PageRank run on the sample graph."""
    return BenchmarkRun(
        run_id="pr-test-graph",
        graph=graph,
        parameters=PageRankParameters(iterations=10, damping_factor=0.85),
        output_dir=tmp_path / "output",
        log_dir=tmp_path / "logs",
    )
