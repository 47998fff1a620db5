"""Models for the JSON report written by Vitest and Jest."""

from collections.abc import Sequence

from pydantic import Field

from vitest_bridge.models.base import Model


class AssertionLocation(Model):
    """1-based position of a test in its source file."""

    line: int = Field(..., description="Line number as reported by the runner")
    column: int = Field(..., description="Column number as reported by the runner")


class AssertionResult(Model):
    """Outcome of one test case."""

    status: str = Field(..., description="passed, failed, pending, todo, ...")
    title: str | None = Field(default=None, description="Test name")
    ancestor_titles: Sequence[str] = Field(
        default_factory=list, description="Enclosing describe block names"
    )
    location: AssertionLocation | None = Field(
        default=None, description="Test position, when locations are reported"
    )
    failure_messages: Sequence[str] = Field(
        default_factory=list, description="Raw failure output, may hold ANSI codes"
    )
    full_name: str | None = Field(default=None, description="Joined display name")
    duration: float | None = Field(default=None, description="Milliseconds")


class FileResult(Model):
    """All test outcomes of one test file."""

    name: str = Field(..., description="Path of the test file")
    assertion_results: Sequence[AssertionResult] = Field(default_factory=list)
    status: str | None = Field(default=None, description="File level status")
    message: str | None = Field(default=None, description="File level error output")


class RunReport(Model):
    """Complete report of one runner invocation."""

    test_results: Sequence[FileResult] = Field(default_factory=list)
    success: bool | None = None
    num_total_tests: int | None = None
    num_failed_tests: int | None = None
    num_passed_tests: int | None = None
    num_pending_tests: int | None = None
    num_todo_tests: int | None = None
    start_time: int | None = None
