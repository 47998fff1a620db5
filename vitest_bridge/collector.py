"""Collect aggregated results from a runner's JSON results file."""

import asyncio
import logging
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from vitest_bridge.aggregator import aggregate
from vitest_bridge.models.report import RunReport
from vitest_bridge.models.result import AggregationResult
from vitest_bridge.paths import PathUtils, paths
from vitest_bridge.stream import DEFAULT_POLL_INTERVAL, streaming

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class ResultCollector:
    """Turns results files into aggregated test results."""

    path_utils: PathUtils = field(default=paths, repr=False)

    async def collect(
        self, results_path: str, console_output: str | None = None
    ) -> AggregationResult:
        """Read a finished results file once and aggregate it.

        Raises:
            OSError: If the file cannot be read
            ValidationError: If the file is not a valid runner report

        """
        data = await asyncio.to_thread(Path(results_path).read_bytes)
        report = RunReport.model_validate_json(data)
        return aggregate(
            report, results_path, console_output, path_utils=self.path_utils
        )

    async def follow(
        self,
        results_path: str,
        console_output: str | None = None,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> AsyncGenerator[AggregationResult, None]:
        """Yield aggregated results every time the results file is rewritten.

        Snapshots that are not a complete report, e.g. a file caught in the
        middle of a write, are skipped.
        """
        async with streaming(results_path, poll_interval=poll_interval) as handle:
            async for chunk in handle:
                try:
                    report = RunReport.model_validate_json(chunk)
                except ValidationError as exc:
                    log.warning(
                        "Skipping unreadable snapshot of %s (%d error(s))",
                        results_path,
                        exc.error_count(),
                    )
                    continue

                yield aggregate(
                    report, results_path, console_output, path_utils=self.path_utils
                )
