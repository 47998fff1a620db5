"""Models for aggregated test results."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal

from vitest_bridge.models.report import AssertionLocation

SKIPPED_STATUSES = frozenset({"pending", "todo"})


def normalize_status(status: str) -> str:
    """Map the runner's pending and todo statuses to skipped.

    Every other status, including ones specific to a runner, is kept as is.
    """
    if status in SKIPPED_STATUSES:
        return "skipped"
    return status


@dataclass(frozen=True, kw_only=True)
class TestError:
    """A failure message positioned with 0-based line numbers."""

    __test__ = False

    message: str
    line: int | None = None
    column: int | None = None


@dataclass(frozen=True, kw_only=True)
class TestRunRecord:
    """Result of a single test case, keyed by its composite id."""

    __test__ = False

    status: str
    short: str
    output: str | None = None
    location: AssertionLocation | None = None
    errors: Sequence[TestError] | None = None


@dataclass(frozen=True, kw_only=True)
class AggregationSuccess:
    """Every assertion of the report was turned into a record."""

    records: Mapping[str, TestRunRecord]

    @property
    def ok(self) -> Literal[True]:
        return True


@dataclass(frozen=True, kw_only=True)
class AggregationFailure:
    """The report could not be aggregated; no partial records are kept."""

    reason: str
    records: Mapping[str, TestRunRecord] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @property
    def ok(self) -> Literal[False]:
        return False


type AggregationResult = AggregationSuccess | AggregationFailure
