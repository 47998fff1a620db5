"""Jest runner manifest."""

from vitest_bridge.runners.jest.adapter import JestAdapter
from vitest_bridge.runners.jest.config import JestConfig
from vitest_bridge.runners.manifest import RunnerManifest

jest_manifest = RunnerManifest(
    config_cls=JestConfig,
    adapter_factory=JestAdapter.from_config,
)
