"""Fixtures for integration tests."""

import os
from pathlib import Path
from typing import Protocol

import pytest


class RewriteFn(Protocol):
    """Protocol for in-place file rewrite function."""

    def __call__(self, path: Path, data: bytes) -> None:
        """Overwrite the file from offset 0 with a single write."""


@pytest.fixture
def rewrite() -> RewriteFn:
    """Return a function rewriting a file in place.

    The new content must be at least as long as the old one; no truncation
    happens, so the watch sees exactly one change.
    """

    def _rewrite(path: Path, data: bytes) -> None:
        fd = os.open(path, os.O_WRONLY)
        try:
            os.write(fd, data)
        finally:
            os.close(fd)

    return _rewrite
