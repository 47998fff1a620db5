"""Vitest runner adapter."""

from collections.abc import Sequence
from dataclasses import dataclass

from vitest_bridge.runners.base import RunnerAdapter, RunSpec, build_name_pattern
from vitest_bridge.runners.vitest.config import VitestConfig

CONFIG_FILES = (
    "vitest.config.ts",
    "vitest.config.mts",
    "vitest.config.cts",
    "vitest.config.js",
    "vitest.config.mjs",
    "vitest.config.cjs",
    "vite.config.ts",
    "vite.config.mts",
    "vite.config.js",
    "vite.config.mjs",
)


@dataclass(frozen=True, kw_only=True)
class VitestAdapter(RunnerAdapter):
    """Vitest runner adapter."""

    config: VitestConfig

    @classmethod
    def from_config(cls, config: VitestConfig) -> "VitestAdapter":
        """Create an adapter for the given configuration."""
        return cls(config=config)

    @property
    def config_files(self) -> Sequence[str]:
        return CONFIG_FILES

    def build_spec(
        self,
        file_path: str,
        results_path: str,
        *,
        test_titles: Sequence[str] = (),
    ) -> RunSpec:
        """Run one file once, with the JSON reporter next to the verbose one."""
        command = [
            *self.config.command,
            "--watch=false",
            "--reporter=verbose",
            "--reporter=json",
            f"--outputFile={results_path}",
        ]
        if (config_file := self.find_config(file_path)) is not None:
            command.append(f"--config={config_file}")
        if test_titles:
            command.extend(["--testNamePattern", build_name_pattern(test_titles)])
        command.extend(self.config.extra_args)
        command.append(file_path)

        return RunSpec(
            command=command,
            cwd=self.root(file_path),
            results_path=results_path,
            env=dict(self.config.env),
        )
