"""Conversion of runner JSON reports into keyed test results."""

import logging
from collections.abc import Mapping
from typing import Any

from vitest_bridge.ansi import strip_ansi
from vitest_bridge.models.report import AssertionResult, RunReport
from vitest_bridge.models.result import (
    AggregationFailure,
    AggregationResult,
    AggregationSuccess,
    TestError,
    TestRunRecord,
    normalize_status,
)
from vitest_bridge.paths import PathUtils, paths

log = logging.getLogger(__name__)

KEY_SEPARATOR = "::"


def build_key(file_path: str, assertion: AssertionResult) -> str:
    """Build ``file::describe::...::title``, skipping empty ancestor titles."""
    parts = [file_path]
    parts.extend(title for title in assertion.ancestor_titles if title != "")
    parts.append(assertion.title or "")
    return KEY_SEPARATOR.join(parts)


def build_errors(assertion: AssertionResult) -> list[TestError]:
    """Scrub failure messages and position them on the test's 0-based line."""
    location = assertion.location
    return [
        TestError(
            message=strip_ansi(message),
            line=location.line - 1 if location else None,
            column=location.column if location else None,
        )
        for message in assertion.failure_messages
    ]


def aggregate(
    run_data: RunReport | Mapping[str, Any],
    output_file: str | None,
    console_output: str | None,
    *,
    path_utils: PathUtils = paths,
) -> AggregationResult:
    """Map every assertion of a runner report to a test result.

    Args:
        run_data: Parsed JSON report, or an already validated report
        output_file: Path the report was read from, used in diagnostics
        console_output: Console text of the run, shared by every record
        path_utils: Path helpers used to restore native file paths

    Returns:
        Records keyed by composite test id, or a failure when any assertion
        has no title. A failure never carries partial records.

    """
    report = (
        run_data
        if isinstance(run_data, RunReport)
        else RunReport.model_validate(run_data)
    )
    records: dict[str, TestRunRecord] = {}

    for file_result in report.test_results:
        file_path = path_utils.restore_native_separators(file_result.name)

        for assertion in file_result.assertion_results:
            if assertion.title is None:
                log.error(
                    "Failed to find parsed test result in %s: %s",
                    output_file,
                    assertion.model_dump(by_alias=True),
                )
                return AggregationFailure(
                    reason=f"Assertion without a title in {file_path}"
                )

            status = normalize_status(assertion.status)
            short = f"{assertion.title}: {status}"
            errors = build_errors(assertion) if assertion.failure_messages else None
            if errors:
                short += "".join(f"\n{error.message}" for error in errors)

            records[build_key(file_path, assertion)] = TestRunRecord(
                status=status,
                short=short,
                output=console_output,
                location=assertion.location,
                errors=errors,
            )

    return AggregationSuccess(records=records)
