r"""
Command-line interface for graphalytics-dgraph.

    graphalytics-dgraph verify
    graphalytics-dgraph run pr example --max-iterations 10 --damping-factor 0.85
"""

from graphalytics_dgraph.cli.main import app, main

__all__ = [
    "app",
    "main",
]
