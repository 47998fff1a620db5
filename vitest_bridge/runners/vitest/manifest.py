"""Vitest runner manifest."""

from vitest_bridge.runners.manifest import RunnerManifest
from vitest_bridge.runners.vitest.adapter import VitestAdapter
from vitest_bridge.runners.vitest.config import VitestConfig

vitest_manifest = RunnerManifest(
    config_cls=VitestConfig,
    adapter_factory=VitestAdapter.from_config,
)
