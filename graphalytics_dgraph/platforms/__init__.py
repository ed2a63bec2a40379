r"""
Platform drivers for graphalytics-dgraph.

Each driver implements the Platform protocol the benchmark harness
drives its lifecycle through.

    from graphalytics_dgraph.platforms import PlatformRegistry

    platform = PlatformRegistry.create("dgraph")
    platform.verify_setup()
"""

from graphalytics_dgraph.platforms.base import BasePlatform, PlatformRegistry
from graphalytics_dgraph.platforms.dgraph import DgraphPlatform

__all__ = [
    "BasePlatform",
    "DgraphPlatform",
    "PlatformRegistry",
]
