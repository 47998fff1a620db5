"""Abstract base class for JavaScript test runner adapters."""

import re
from abc import ABC, abstractmethod
from collections.abc import AsyncGenerator, Mapping, Sequence
from dataclasses import dataclass, field

from vitest_bridge.ancestors import root_pattern, search_ancestors
from vitest_bridge.collector import ResultCollector
from vitest_bridge.models.result import AggregationResult
from vitest_bridge.paths import PathUtils, paths
from vitest_bridge.stream import DEFAULT_POLL_INTERVAL


@dataclass(frozen=True, kw_only=True)
class RunSpec:
    """Everything needed to launch one runner invocation."""

    command: Sequence[str]
    cwd: str | None
    results_path: str
    env: Mapping[str, str] = field(default_factory=dict)


def build_name_pattern(titles: Sequence[str]) -> str:
    """Build an anchored ``-t`` pattern matching one test by its full name.

    Runners match ``-t`` against the describe titles and the test title
    joined with spaces.
    """
    return "^" + re.escape(" ".join(title for title in titles if title)) + "$"


@dataclass(frozen=True, kw_only=True)
class RunnerAdapter(ABC):
    """Resolves project layout and results for one JavaScript test runner."""

    path_utils: PathUtils = field(default=paths, repr=False)

    @property
    @abstractmethod
    def config_files(self) -> Sequence[str]:
        """Config file names recognised by the runner, in lookup order."""

    @abstractmethod
    def build_spec(
        self,
        file_path: str,
        results_path: str,
        *,
        test_titles: Sequence[str] = (),
    ) -> RunSpec:
        """Build the command that runs ``file_path`` and writes a JSON report.

        Args:
            file_path: Test file to run
            results_path: Where the runner must write its JSON report
            test_titles: Describe titles and test title of a single test to
                run; empty runs the whole file

        Returns:
            Command line, working directory and environment for the run

        """

    def root(self, path: str) -> str | None:
        """Find the project root of ``path``.

        The root is the nearest directory holding a runner config file or a
        package manifest.
        """
        resolve = root_pattern(
            *self.config_files, "package.json", path_utils=self.path_utils
        )
        return resolve(path)

    def find_config(self, path: str) -> str | None:
        """Find the runner config file that applies to ``path``."""
        directory = search_ancestors(
            path,
            lambda candidate: self._config_in(candidate) is not None,
            path_utils=self.path_utils,
        )
        if directory is None:
            return None
        return self._config_in(directory)

    def _config_in(self, directory: str) -> str | None:
        for name in self.config_files:
            candidate = self.path_utils.join(directory, name)
            if self.path_utils.is_file(candidate):
                return candidate
        return None

    async def results(
        self, results_path: str, console_output: str | None = None
    ) -> AggregationResult:
        """Aggregate a finished results file."""
        collector = ResultCollector(path_utils=self.path_utils)
        return await collector.collect(results_path, console_output)

    def follow(
        self,
        results_path: str,
        console_output: str | None = None,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> AsyncGenerator[AggregationResult, None]:
        """Aggregate the results file every time the runner rewrites it."""
        collector = ResultCollector(path_utils=self.path_utils)
        return collector.follow(
            results_path, console_output, poll_interval=poll_interval
        )
