r"""
Platform configuration loaded from a Java-style properties file.

    platform.dgraph.loader = bin/loader
    platform.dgraph.unloader = bin/unloader
    platform.dgraph.runner = bin/runner
    platform.dgraph.alpha.host = localhost
    platform.dgraph.alpha.port = 9080
    platform.dgraph.num-threads = 8

Relative executable paths resolve against the directory of the properties
file. The file location defaults to ``config/platform.properties`` and can
be overridden with ``GRAPHALYTICS_DGRAPH_CONFIG``.

    from graphalytics_dgraph.config import load_config

    config = load_config()
    print(config.loader_path)
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from graphalytics_dgraph.errors import SetupError

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ENV_PREFIX",
    "PlatformConfig",
    "get_env",
    "load_config",
    "parse_properties",
]

# Look for .env in the working directory
load_dotenv(Path(".env"))

ENV_PREFIX = "GRAPHALYTICS_DGRAPH_"

DEFAULT_CONFIG_PATH = Path("config") / "platform.properties"

_KEY_PREFIX = "platform.dgraph."


@dataclass(frozen=True, slots=True)
class PlatformConfig:
    """Paths to the Dgraph executables and engine connection settings.

    Attributes:
        loader_path: Bulk loader executable.
        unloader_path: Unloader executable.
        runner_path: Algorithm runner executable.
        alpha_host: Host of the Dgraph alpha the runner connects to.
        alpha_port: gRPC port of the Dgraph alpha.
        num_threads: Thread count passed to the runner, if configured.
    """

    loader_path: Path
    unloader_path: Path
    runner_path: Path
    alpha_host: str = "localhost"
    alpha_port: int = 9080
    num_threads: int | None = None

    @property
    def alpha_address(self) -> str:
        """``host:port`` of the Dgraph alpha."""
        return f"{self.alpha_host}:{self.alpha_port}"

    @property
    def executables(self) -> dict[str, Path]:
        """Configured executables keyed by role."""
        return {
            "loader": self.loader_path,
            "unloader": self.unloader_path,
            "runner": self.runner_path,
        }


def get_env(key: str, *, default: str | None = None) -> str | None:
    """Get environment variable with GRAPHALYTICS_DGRAPH_ prefix.

    Args:
        key: Variable name without prefix (e.g., "CONFIG").
        default: Default value if not set.

    Returns:
        Environment variable value or default.
    """
    return os.environ.get(f"{ENV_PREFIX}{key}", default)


def parse_properties(text: str) -> dict[str, str]:
    """Parse the subset of the properties format used by Graphalytics.

    Supports ``key=value``, ``key: value`` and ``key value`` lines,
    ``#`` and ``!`` comments, and backslash line continuations.
    """
    properties: dict[str, str] = {}
    pending = ""
    for raw in text.splitlines():
        line = pending + raw.strip()
        pending = ""
        if not line or line[0] in "#!":
            continue
        if line.endswith("\\"):
            pending = line[:-1]
            continue

        sep = len(line)
        for i, ch in enumerate(line):
            if ch in "=: \t":
                sep = i
                break
        key = line[:sep].strip()
        value = line[sep + 1 :].strip()
        if value[:1] in ("=", ":"):
            value = value[1:].strip()
        properties[key] = value
    if pending:
        properties.setdefault(pending.strip(), "")
    return properties


def _require(properties: dict[str, str], name: str, path: Path) -> str:
    key = f"{_KEY_PREFIX}{name}"
    value = properties.get(key, "")
    if not value:
        msg = f"Missing required key '{key}' in {path}"
        raise SetupError(msg)
    return value


def _to_int(properties: dict[str, str], name: str, path: Path) -> int | None:
    key = f"{_KEY_PREFIX}{name}"
    value = properties.get(key)
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError as e:
        msg = f"Invalid integer '{value}' for '{key}' in {path}"
        raise SetupError(msg) from e


def load_config(path: str | Path | None = None) -> PlatformConfig:
    """Load the platform configuration.

    Args:
        path: Properties file. Defaults to ``GRAPHALYTICS_DGRAPH_CONFIG``
            or ``config/platform.properties``.

    Returns:
        PlatformConfig with absolute executable paths.

    Raises:
        SetupError: If the file is unreadable or a required key is missing.
    """
    if path is None:
        path = get_env("CONFIG", default=str(DEFAULT_CONFIG_PATH))
    path = Path(path)

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        msg = f"Could not read platform configuration {path}: {e.strerror}"
        raise SetupError(msg) from e

    properties = parse_properties(text)
    base = path.resolve().parent

    def executable(name: str) -> Path:
        return (base / Path(_require(properties, name, path)).expanduser()).resolve()

    port = _to_int(properties, "alpha.port", path)
    return PlatformConfig(
        loader_path=executable("loader"),
        unloader_path=executable("unloader"),
        runner_path=executable("runner"),
        alpha_host=properties.get(f"{_KEY_PREFIX}alpha.host") or "localhost",
        alpha_port=9080 if port is None else port,
        num_threads=_to_int(properties, "num-threads", path),
    )
