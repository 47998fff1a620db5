"""Runner manifest definition for the plugin system."""

from collections.abc import Callable
from dataclasses import dataclass

from pydantic import BaseModel

from vitest_bridge.runners.base import RunnerAdapter


@dataclass(frozen=True, kw_only=True)
class RunnerManifest[ConfigT: BaseModel]:
    """Manifest describing a runner plugin.

    The manifest holds the configuration class and the adapter factory so
    runners can be loaded lazily by key.
    """

    config_cls: type[ConfigT]
    adapter_factory: Callable[[ConfigT], RunnerAdapter]
