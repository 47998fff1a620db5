"""Jest runner module."""

from vitest_bridge.runners.jest.adapter import JestAdapter
from vitest_bridge.runners.jest.config import JestConfig
from vitest_bridge.runners.jest.manifest import jest_manifest

__all__ = ["JestAdapter", "JestConfig", "jest_manifest"]
