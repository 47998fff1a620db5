"""Vitest runner module."""

from vitest_bridge.runners.vitest.adapter import VitestAdapter
from vitest_bridge.runners.vitest.config import VitestConfig
from vitest_bridge.runners.vitest.manifest import vitest_manifest

__all__ = ["VitestAdapter", "VitestConfig", "vitest_manifest"]
