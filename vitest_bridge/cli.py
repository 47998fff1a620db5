"""CLI entry point for the Vitest/Jest results bridge."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from vitest_bridge.models.result import (
    AggregationFailure,
    AggregationResult,
    TestRunRecord,
)
from vitest_bridge.runners.base import RunnerAdapter
from vitest_bridge.runners.loading import load_runner_manifest
from vitest_bridge.stream import DEFAULT_POLL_INTERVAL

STATUS_SYMBOLS = {
    "passed": "✅",
    "failed": "❌",
    "skipped": "⏭️",
}


def log_results_summary(log: logging.Logger, result: AggregationResult) -> None:
    """Log a formatted summary of aggregated results."""
    log.info("=" * 80)
    log.info("Test Results Summary:")
    log.info("=" * 80)

    if isinstance(result, AggregationFailure):
        log.info("❗ Results could not be aggregated: %s", result.reason)
        return

    for key, record in result.records.items():
        symbol = STATUS_SYMBOLS.get(record.status, "?")
        log.info("%s %s: %s", symbol, key, record.status)
        for error in record.errors or ():
            first_line = error.message.split("\n", 1)[0]
            log.info("  Error: %s", first_line)


def record_to_dict(record: TestRunRecord) -> dict[str, Any]:
    """Convert a record to plain JSON data."""
    return {
        "status": record.status,
        "short": record.short,
        "output": record.output,
        "location": (
            record.location.model_dump() if record.location is not None else None
        ),
        "errors": (
            [
                {"line": error.line, "column": error.column, "message": error.message}
                for error in record.errors
            ]
            if record.errors is not None
            else None
        ),
    }


def format_output(result: AggregationResult) -> dict[str, Any]:
    """Format aggregated results for JSON output."""
    records = result.records
    statuses = [record.status for record in records.values()]
    output: dict[str, Any] = {
        "ok": result.ok,
        "total": len(statuses),
        "passed": statuses.count("passed"),
        "failed": statuses.count("failed"),
        "skipped": statuses.count("skipped"),
        "results": {key: record_to_dict(record) for key, record in records.items()},
    }
    if isinstance(result, AggregationFailure):
        output["reason"] = result.reason
    return output


def has_failures(result: AggregationResult) -> bool:
    """Check whether the result should fail the command."""
    if not result.ok:
        return True
    return any(record.status == "failed" for record in result.records.values())


def load_adapter(runner_key: str, runner_config_json: str) -> RunnerAdapter:
    """Load a runner adapter from its key and JSON configuration."""
    manifest = load_runner_manifest(runner_key)
    config = manifest.config_cls(**json.loads(runner_config_json))
    return manifest.adapter_factory(config)


async def read_console_output(console_output_file: Path | None) -> str | None:
    """Read captured console output, if a file was given."""
    if console_output_file is None:
        return None
    return await asyncio.to_thread(console_output_file.read_text, errors="replace")


async def run_results(
    runner_key: str,
    runner_config_json: str,
    results_file: Path,
    console_output_file: Path | None = None,
) -> int:
    """Aggregate a finished results file and return exit code."""
    log = logging.getLogger("vitest_bridge")

    log.info("Loading runner: %s", runner_key)
    adapter = load_adapter(runner_key, runner_config_json)
    console_output = await read_console_output(console_output_file)

    log.info("Aggregating results from %s", results_file)
    result = await adapter.results(str(results_file), console_output)

    log_results_summary(log, result)
    print(json.dumps(format_output(result), indent=2))

    return 1 if has_failures(result) else 0


async def follow_results(
    runner_key: str,
    runner_config_json: str,
    results_file: Path,
    console_output_file: Path | None = None,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    timeout: float | None = None,
) -> int:
    """Print aggregated results each time the results file changes.

    Runs until ``timeout`` elapses, then returns the exit code of the last
    snapshot seen.
    """
    log = logging.getLogger("vitest_bridge")

    log.info("Loading runner: %s", runner_key)
    adapter = load_adapter(runner_key, runner_config_json)
    console_output = await read_console_output(console_output_file)

    last_result: AggregationResult | None = None
    log.info("Following %s", results_file)
    try:
        async with asyncio.timeout(timeout):
            async for result in adapter.follow(
                str(results_file), console_output, poll_interval=poll_interval
            ):
                last_result = result
                print(json.dumps(format_output(result)), flush=True)
    except TimeoutError:
        log.info("Stopped following %s after %.1fs", results_file, timeout)

    if last_result is None:
        log.info("No results read from %s", results_file)
        return 1

    log_results_summary(log, last_result)
    return 1 if has_failures(last_result) else 0


def describe_command(
    runner_key: str,
    runner_config_json: str,
    file_path: str,
    results_file: Path,
    test_titles: Sequence[str] = (),
) -> Mapping[str, Any]:
    """Resolve root, config and command line for running ``file_path``."""
    adapter = load_adapter(runner_key, runner_config_json)
    spec = adapter.build_spec(file_path, str(results_file), test_titles=test_titles)
    return {
        "root": adapter.root(file_path),
        "config": adapter.find_config(file_path),
        "cwd": spec.cwd,
        "command": list(spec.command),
        "env": dict(spec.env),
        "results_path": spec.results_path,
    }


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Bridge Vitest/Jest JSON reports to keyed test results"
    )
    parser.add_argument(
        "--runner",
        default="vitest",
        help="Runner key (vitest, jest)",
    )
    parser.add_argument(
        "--runner-config",
        default="{}",
        help="JSON configuration for the runner",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    results = subparsers.add_parser("results", help="Aggregate a results file")
    results.add_argument(
        "--results-file",
        type=Path,
        required=True,
        help="Path to the runner's JSON report",
    )
    results.add_argument(
        "--console-output",
        type=Path,
        default=None,
        help="File holding the console output of the run",
    )
    results.add_argument(
        "--follow",
        action="store_true",
        help="Keep printing results every time the report is rewritten",
    )
    results.add_argument(
        "--poll-interval",
        type=float,
        default=DEFAULT_POLL_INTERVAL,
        help="Seconds between checks of the report when following",
    )
    results.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Stop following after this many seconds",
    )

    command = subparsers.add_parser(
        "command", help="Show root, config and command line for a test file"
    )
    command.add_argument("file", help="Test file to run")
    command.add_argument(
        "--results-file",
        type=Path,
        required=True,
        help="Where the runner should write its JSON report",
    )
    command.add_argument(
        "--test",
        action="append",
        default=[],
        help="Describe title or test title of a single test, outermost first",
    )
    return parser


def main() -> None:
    """CLI entry point."""
    args = build_parser().parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    if args.command == "command":
        output = describe_command(
            runner_key=args.runner,
            runner_config_json=args.runner_config,
            file_path=args.file,
            results_file=args.results_file,
            test_titles=args.test,
        )
        print(json.dumps(output, indent=2))
        sys.exit(0)

    if args.follow:
        coro = follow_results(
            runner_key=args.runner,
            runner_config_json=args.runner_config,
            results_file=args.results_file,
            console_output_file=args.console_output,
            poll_interval=args.poll_interval,
            timeout=args.timeout,
        )
    else:
        coro = run_results(
            runner_key=args.runner,
            runner_config_json=args.runner_config,
            results_file=args.results_file,
            console_output_file=args.console_output,
        )
    sys.exit(asyncio.run(coro))


if __name__ == "__main__":  # pragma: no cover
    main()
