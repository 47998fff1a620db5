"""Loading of runner adapters from entry points."""

from importlib.metadata import entry_points
from typing import Any

from vitest_bridge.runners.manifest import RunnerManifest

ENTRY_POINT_GROUP = "vitest_bridge.runners"


class RunnerNotFoundError(Exception):
    """Raised when a runner is not found."""


def load_runner_manifest(key: str) -> RunnerManifest[Any]:
    """Load a runner manifest by key.

    Args:
        key: The runner key as registered in pyproject.toml
             (e.g., "vitest", "jest")

    Returns:
        The runner manifest instance

    Raises:
        RunnerNotFoundError: If no runner with the given key is found

    """
    entries = entry_points(group=ENTRY_POINT_GROUP)

    for entry in entries:
        if entry.name == key:
            manifest: RunnerManifest[Any] = entry.load()
            return manifest

    available = [e.name for e in entries]
    raise RunnerNotFoundError(
        f"Runner '{key}' not found. Available runners: {available}"
    )
