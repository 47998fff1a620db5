"""Jest runner adapter."""

from collections.abc import Sequence
from dataclasses import dataclass

from vitest_bridge.runners.base import RunnerAdapter, RunSpec, build_name_pattern
from vitest_bridge.runners.jest.config import JestConfig

CONFIG_FILES = (
    "jest.config.ts",
    "jest.config.js",
    "jest.config.mjs",
    "jest.config.cjs",
    "jest.config.json",
)


@dataclass(frozen=True, kw_only=True)
class JestAdapter(RunnerAdapter):
    """Jest runner adapter."""

    config: JestConfig

    @classmethod
    def from_config(cls, config: JestConfig) -> "JestAdapter":
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
        """Run one file by path and write the JSON report."""
        command = [
            *self.config.command,
            "--ci",
            "--forceExit",
            "--json",
            f"--outputFile={results_path}",
        ]
        if self.config.test_location_in_results:
            command.append("--testLocationInResults")
        if (config_file := self.find_config(file_path)) is not None:
            command.append(f"--config={config_file}")
        if test_titles:
            command.extend(["--testNamePattern", build_name_pattern(test_titles)])
        command.extend(self.config.extra_args)
        command.extend(["--runTestsByPath", file_path])

        return RunSpec(
            command=command,
            cwd=self.root(file_path),
            results_path=results_path,
            env=dict(self.config.env),
        )
