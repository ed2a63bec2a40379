r"""
Base platform implementation with lifecycle bookkeeping.

    from graphalytics_dgraph.platforms.base import BasePlatform, PlatformRegistry

    @PlatformRegistry.register("myengine")
    class MyPlatform(BasePlatform):
        ...
"""

from abc import ABC, abstractmethod
from typing import Any

import structlog

from graphalytics_dgraph.log import get_logger
from graphalytics_dgraph.types import BenchmarkMetrics, BenchmarkRun, FormattedGraph, PlatformState

__all__ = ["BasePlatform", "PlatformRegistry"]

# States each transition may legally start from
_ALLOWED_FROM: dict[PlatformState, tuple[PlatformState, ...]] = {
    PlatformState.VERIFIED_SETUP: (PlatformState.IDLE,),
    PlatformState.LOADED: (
        PlatformState.IDLE,
        PlatformState.VERIFIED_SETUP,
        PlatformState.LOADED,
        PlatformState.TERMINATED,
        PlatformState.DELETED,
    ),
    PlatformState.STARTED: (
        PlatformState.IDLE,
        PlatformState.VERIFIED_SETUP,
        PlatformState.LOADED,
        PlatformState.TERMINATED,
    ),
    PlatformState.RUN: (PlatformState.STARTED,),
    PlatformState.FINALIZED: (PlatformState.RUN,),
    PlatformState.TERMINATED: (PlatformState.FINALIZED, PlatformState.STARTED, PlatformState.RUN),
    PlatformState.DELETED: (PlatformState.LOADED, PlatformState.TERMINATED),
}


class PlatformRegistry:
    """Registry for platform drivers."""

    _platforms: dict[str, type["BasePlatform"]] = {}

    @classmethod
    def register(cls, name: str) -> Any:
        """Decorator to register a platform class."""

        def decorator(platform_cls: type["BasePlatform"]) -> type["BasePlatform"]:
            cls._platforms[name] = platform_cls
            return platform_cls

        return decorator

    @classmethod
    def get(cls, name: str) -> type["BasePlatform"] | None:
        """Get platform class by name."""
        return cls._platforms.get(name)

    @classmethod
    def list(cls) -> list[str]:
        """List registered platform names."""
        return list(cls._platforms.keys())

    @classmethod
    def create(cls, name: str, **kwargs: Any) -> "BasePlatform":
        """Create platform instance by name."""
        platform_cls = cls.get(name)
        if platform_cls is None:
            valid = ", ".join(cls.list()) or "none"
            msg = f"Unknown platform '{name}'. Registered: {valid}"
            raise ValueError(msg)
        return platform_cls(**kwargs)


class BasePlatform(ABC):
    """Base class for platform drivers.

    Tracks the lifecycle state. Calls made out of order are logged and
    carried out anyway; ordering is the harness's responsibility.
    """

    def __init__(self, *, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._log = logger if logger is not None else get_logger(__name__)
        self._state = PlatformState.IDLE

    @property
    @abstractmethod
    def name(self) -> str:
        """Platform name as known to the harness."""
        ...

    @property
    def state(self) -> PlatformState:
        """Current lifecycle state."""
        return self._state

    def _transition(self, target: PlatformState) -> None:
        if self._state not in _ALLOWED_FROM[target]:
            self._log.warning(
                "unexpected_transition",
                platform=self.name,
                current=self._state.name,
                target=target.name,
            )
        self._state = target

    @abstractmethod
    def verify_setup(self) -> None:
        """Check that the platform can run at all."""
        ...

    @abstractmethod
    def load_graph(self, graph: FormattedGraph) -> None:
        """Load a formatted graph into the platform."""
        ...

    @abstractmethod
    def delete_graph(self, graph: FormattedGraph) -> None:
        """Remove a previously loaded graph."""
        ...

    def prepare(self, run: BenchmarkRun) -> None:
        """Hook called before startup. Does nothing by default."""

    @abstractmethod
    def startup(self, run: BenchmarkRun) -> None:
        """Start collecting platform logs for the run."""
        ...

    @abstractmethod
    def run(self, run: BenchmarkRun) -> None:
        """Execute the run's algorithm."""
        ...

    @abstractmethod
    def finalize(self, run: BenchmarkRun) -> BenchmarkMetrics:
        """Stop log collection and return the run's metrics."""
        ...

    def terminate(self, run: BenchmarkRun) -> None:
        """Clean up after the run."""
        self._transition(PlatformState.TERMINATED)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} state={self._state.name.lower()}>"
