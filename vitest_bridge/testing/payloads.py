"""Payload helpers for Vitest/Jest JSON reports in tests."""

from collections.abc import Sequence
from typing import Any


def assertion_result(
    *,
    title: str | None = "adds 1+2",
    ancestor_titles: Sequence[str] = ("Math",),
    status: str = "passed",
    failure_messages: Sequence[str] = (),
    location: dict[str, int] | None = None,
) -> dict[str, Any]:
    """Create an assertion result payload.

    Mirrors one entry of ``assertionResults`` as written by the json reporter.
    """
    full_name = " ".join([*ancestor_titles, title or ""]).strip()
    return {
        "ancestorTitles": list(ancestor_titles),
        "fullName": full_name,
        "status": status,
        "title": title,
        "duration": 1.5,
        "failureMessages": list(failure_messages),
        "location": location,
        "meta": {},
    }


def file_result(
    *,
    name: str = "src/math.test.js",
    assertion_results: Sequence[dict[str, Any]] = (),
    status: str = "passed",
) -> dict[str, Any]:
    """Create a test file result payload."""
    return {
        "assertionResults": list(assertion_results),
        "startTime": 4102444800000,
        "endTime": 4102444800042,
        "status": status,
        "message": "",
        "name": name,
    }


def run_report(
    *,
    test_results: Sequence[dict[str, Any]] = (),
    success: bool = True,
) -> dict[str, Any]:
    """Create a complete report payload.

    Counters are derived from the assertions so the report stays consistent.
    """
    statuses = [
        assertion["status"]
        for result in test_results
        for assertion in result["assertionResults"]
    ]
    return {
        "numTotalTestSuites": len(test_results),
        "numPassedTestSuites": len(test_results),
        "numFailedTestSuites": 0,
        "numPendingTestSuites": 0,
        "numTotalTests": len(statuses),
        "numPassedTests": statuses.count("passed"),
        "numFailedTests": statuses.count("failed"),
        "numPendingTests": statuses.count("pending"),
        "numTodoTests": statuses.count("todo"),
        "startTime": 4102444800000,
        "success": success,
        "testResults": list(test_results),
    }
